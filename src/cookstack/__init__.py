"""CookStack - a personal recipe book."""

from loguru import logger as _logger

from .collection import RecipeCollection, SortKey, sort_key
from .errors import (
    CookStackError,
    CorruptDataError,
    DuplicateNameError,
    IndexOutOfRangeError,
    InvalidInputError,
    NotFoundError,
)
from .models import CATEGORIES, DEFAULT_CATEGORY, Ingredient, Recipe
from .profile import Profile
from .storage import load, save

__version__ = "0.1.0"

# Silent as a library; the CLI turns logging on
_logger.disable("cookstack")

__all__ = [
    # Core
    "RecipeCollection",
    "SortKey",
    "sort_key",

    # Models
    "Recipe",
    "Ingredient",
    "CATEGORIES",
    "DEFAULT_CATEGORY",

    # Persistence and configuration
    "load",
    "save",
    "Profile",

    # Errors
    "CookStackError",
    "DuplicateNameError",
    "IndexOutOfRangeError",
    "NotFoundError",
    "CorruptDataError",
    "InvalidInputError",
]
