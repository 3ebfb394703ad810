"""Error types raised by the cookbook model and its storage."""


class CookStackError(Exception):
    """Base class for every recoverable CookStack failure.

    The presentation layer catches this, reports the message, and leaves the
    in-memory cookbook untouched.
    """


class DuplicateNameError(CookStackError, ValueError):
    """A recipe with the same case-insensitive name is already in the cookbook."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"A recipe named '{name}' already exists, please try another name")


class IndexOutOfRangeError(CookStackError, IndexError):
    """A position outside the current recipe list was requested."""

    def __init__(self, position: int, size: int):
        self.position = position
        self.size = size
        super().__init__(f"Position {position} is out of range for a cookbook of {size} recipe(s)")


class NotFoundError(CookStackError, LookupError):
    """A recipe or cookbook file could not be found."""


class CorruptDataError(CookStackError, ValueError):
    """A cookbook file could not be decoded."""


class InvalidInputError(CookStackError, ValueError):
    """User supplied field values were rejected."""
