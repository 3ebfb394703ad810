"""Simple logging abstraction for cookstack."""

import sys
from contextvars import ContextVar
from typing import Optional

from loguru import logger as _logger

from .profile import Profile

current_command_context: ContextVar[Optional[str]] = ContextVar('current_command_context', default=None)
_handler_ids: list[int] = []


def get_logger(component: str):
    """Get a logger bound to a cookstack component (``collection``, ``storage``, ...)."""
    return _logger.bind(component=component)


def configure_logging(profile: Optional[Profile] = None, verbose: bool = False):
    """Route cookstack logs to stderr and the profile's log file.

    The library stays silent until this is called; the CLI calls it once per
    invocation and ``shutdown_logging`` when the command ends.

    Args:
        profile: Profile whose logs directory receives the log file.
        verbose: Show DEBUG output on stderr instead of errors only.
    """
    profile = profile or Profile.current()
    _logger.remove()
    _handler_ids.clear()

    # Stderr handler - only ERROR and above unless verbose
    _handler_ids.append(_logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "ERROR",
        format="<red>{time:HH:mm:ss}</red> | <level>{level: <8}</level> | <cyan>{extra[component]}</cyan> | <level>{message}</level>",
        colorize=True,
    ))

    # File handler - all logs (DEBUG and above)
    _handler_ids.append(_logger.add(
        profile.log_file,
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component]} | {extra[command]} | {message}",
        rotation="1 MB",
        retention="14 days",
    ))

    _logger.configure(patcher=_add_context)
    _logger.enable("cookstack")
    return _logger


def _add_context(record):
    """Add context variables to log record."""
    record["extra"].setdefault("component", "cookstack")
    record["extra"]["command"] = current_command_context.get() or ""


def set_command(command: Optional[str]) -> None:
    """Tag subsequent log records with the running CLI command."""
    current_command_context.set(command)


def shutdown_logging() -> None:
    """Remove the handlers added by ``configure_logging`` and close the log file."""
    for handler_id in _handler_ids:
        _logger.remove(handler_id)
    _handler_ids.clear()
    _logger.disable("cookstack")


__all__ = [
    "get_logger",
    "configure_logging",
    "set_command",
    "shutdown_logging",
]
