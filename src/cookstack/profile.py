"""Profile management for cookstack storage and configuration."""

import os
from pathlib import Path
from typing import Optional

COOKBOOK_SUFFIX = ".cookbook"


class Profile:
    """Manages profile-specific paths for cookstack storage.

    A profile determines where cookstack keeps cookbooks and logs.
    The active profile is determined by the COOKSTACK_PROFILE environment variable,
    defaulting to "default" if not set. Profiles live under COOKSTACK_HOME,
    which defaults to ``~/.cookstack``.
    """

    def __init__(self, name: Optional[str] = None, home: Optional[Path] = None):
        """Initialize profile with given name or from environment.

        Args:
            name: Profile name. If None, uses COOKSTACK_PROFILE env var or "default".
            home: Root directory for all profiles. If None, uses COOKSTACK_HOME
                env var or ``~/.cookstack``.
        """
        self.name = name or os.getenv("COOKSTACK_PROFILE", "default")
        self._home = Path(home) if home is not None else self._find_home()
        self._data_root = self._home / self.name

        # Create profile directories if they don't exist
        self._ensure_directories()

    def _find_home(self) -> Path:
        """Resolve the root directory from the environment."""
        env_home = os.getenv("COOKSTACK_HOME")
        if env_home:
            return Path(env_home).expanduser()
        return Path.home() / ".cookstack"

    def _ensure_directories(self) -> None:
        """Create profile directories if they don't exist."""
        self.data_root.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        self.cookbooks_dir.mkdir(parents=True, exist_ok=True)

    @property
    def data_root(self) -> Path:
        """Root directory for profile data."""
        return self._data_root

    @property
    def cookbooks_dir(self) -> Path:
        """Directory holding cookbook files."""
        return self._data_root / "cookbooks"

    @property
    def logs_dir(self) -> Path:
        """Directory for log files."""
        return self._data_root / "logs"

    @property
    def log_file(self) -> Path:
        """Path to the main cookstack log file."""
        return self.logs_dir / "cookstack.log"

    @property
    def default_cookbook(self) -> Path:
        """Cookbook used when no path is given on the command line.

        COOKSTACK_COOKBOOK overrides the profile's own cookbook.
        """
        override = os.getenv("COOKSTACK_COOKBOOK")
        if override:
            return Path(override).expanduser()
        return self.cookbook_path(self.name)

    def cookbook_path(self, name: str) -> Path:
        """Get path for a named cookbook inside this profile.

        Args:
            name: Cookbook name, with or without the ``.cookbook`` suffix.

        Returns:
            Path to the cookbook file.
        """
        if not name.endswith(COOKBOOK_SUFFIX):
            name = f"{name}{COOKBOOK_SUFFIX}"
        return self.cookbooks_dir / name

    def list_cookbooks(self) -> list[Path]:
        """List cookbook files stored in this profile."""
        return sorted(self.cookbooks_dir.glob(f"*{COOKBOOK_SUFFIX}"))

    @classmethod
    def current(cls) -> "Profile":
        """Get the current active profile.

        Returns:
            Profile instance for the current profile.
        """
        return cls()

    def __str__(self) -> str:
        """String representation of profile."""
        return f"Profile({self.name})"

    def __repr__(self) -> str:
        """Developer representation of profile."""
        return f"Profile(name={self.name!r}, data_root={self._data_root!s})"
