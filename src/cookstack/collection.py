"""The recipe collection: ordered, uniquely named, searchable and sortable."""

from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .errors import DuplicateNameError, IndexOutOfRangeError, NotFoundError
from .logger import get_logger
from .models import Recipe

logger = get_logger("collection")


class SortKey(str, Enum):
    """Fields a cookbook can be ordered by."""

    NAME = "name"
    STEPS = "steps"
    PROTEIN = "protein"
    CALORIES = "calories"
    TIME = "time"
    INGREDIENTS = "ingredients"
    DATE_ADDED = "date_added"


_SORT_VALUES: Dict[SortKey, Callable[[Recipe], object]] = {
    SortKey.NAME: lambda r: r.name.casefold(),
    SortKey.STEPS: lambda r: len(r.steps),
    SortKey.PROTEIN: lambda r: r.protein,
    SortKey.CALORIES: lambda r: r.calories,
    SortKey.TIME: lambda r: r.time_minutes,
    SortKey.INGREDIENTS: lambda r: len(r.ingredients),
}


def sort_key(key: SortKey) -> Callable[[Recipe], object]:
    """Return the key function ordering recipes ascending by ``key``.

    ``DATE_ADDED`` has no per-recipe value; it only makes sense against a
    collection's insertion history, see ``RecipeCollection.sort_by``.
    """
    key = SortKey(key)
    if key is SortKey.DATE_ADDED:
        raise ValueError("Date added order is only known to a RecipeCollection")
    return _SORT_VALUES[key]


class RecipeCollection:
    """A named cookbook of recipes.

    Two orderings are kept. ``recipes`` is the live order the user sees and
    rearranges with ``sort_by`` and ``reverse``. ``date_added`` is the order
    recipes were added in and is only changed by adding or removing. A
    lowercase-name index serves exact lookups. All three are private and
    changed only by the methods below.
    """

    def __init__(self, owner_name: str = ""):
        self.owner_name = owner_name
        self._items: List[Recipe] = []
        self._added: List[Recipe] = []
        self._index: Dict[str, Recipe] = {}

    @property
    def title(self) -> str:
        return f"{self.owner_name}'s CookBook"

    @property
    def recipes(self) -> Tuple[Recipe, ...]:
        """Recipes in the current live order."""
        return tuple(self._items)

    @property
    def date_added(self) -> Tuple[Recipe, ...]:
        """Recipes in the order they were added."""
        return tuple(self._added)

    def names(self) -> List[str]:
        return [recipe.name for recipe in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Recipe]:
        return iter(tuple(self._items))

    def __getitem__(self, position: int) -> Recipe:
        self._check_position(position)
        return self._items[position]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecipeCollection):
            return NotImplemented
        return (
            self.owner_name == other.owner_name
            and self._items == other._items
            and self._added == other._added
        )

    def __repr__(self) -> str:
        return f"RecipeCollection(owner_name={self.owner_name!r}, recipes={len(self)})"

    def _check_position(self, position: int) -> None:
        # Negative positions are rejected rather than counted from the end
        if not 0 <= position < len(self._items):
            raise IndexOutOfRangeError(position, len(self._items))

    def add(self, recipe: Recipe, front: bool = False) -> None:
        """Add a recipe to the cookbook.

        Args:
            recipe: The recipe to add.
            front: Show the recipe first in the live order instead of last.
                The date added order always receives it last.

        Raises:
            DuplicateNameError: A recipe with the same case-insensitive name exists.
        """
        if recipe.key in self._index:
            logger.warning(f"Rejected duplicate recipe: {recipe.name}")
            raise DuplicateNameError(recipe.name)

        self._added.append(recipe)
        if front:
            self._items.insert(0, recipe)
        else:
            self._items.append(recipe)
        self._index[recipe.key] = recipe
        logger.info(f"Added recipe: {recipe.name}")

    def remove_at(self, position: int) -> Recipe:
        """Remove and return the recipe at ``position`` in the live order.

        Raises:
            IndexOutOfRangeError: ``position`` is outside ``[0, len)``.
        """
        self._check_position(position)
        removed = self._items.pop(position)
        self._added = [r for r in self._added if r is not removed]
        del self._index[removed.key]
        logger.info(f"Removed recipe: {removed.name}")
        return removed

    def position_of(self, name: str) -> int:
        """Live position of the recipe called ``name`` (case-insensitive)."""
        recipe = self.find_exact(name)
        if recipe is None:
            raise NotFoundError(f"Recipe '{name}' not found")
        for position, item in enumerate(self._items):
            if item is recipe:
                return position
        raise NotFoundError(f"Recipe '{name}' not found")

    def remove(self, name: str) -> Recipe:
        """Remove and return the recipe called ``name`` (case-insensitive)."""
        return self.remove_at(self.position_of(name))

    def replace_at(self, position: int, recipe: Recipe) -> Recipe:
        """Swap the recipe at ``position`` for an edited version.

        The replacement keeps the original's place in both orderings, so an
        edit does not count as a new addition.

        Returns:
            The recipe that was replaced.

        Raises:
            IndexOutOfRangeError: ``position`` is outside ``[0, len)``.
            DuplicateNameError: The new name belongs to a different recipe.
        """
        self._check_position(position)
        old = self._items[position]
        clash = self._index.get(recipe.key)
        if clash is not None and clash is not old:
            logger.warning(f"Rejected rename of '{old.name}' to existing name '{recipe.name}'")
            raise DuplicateNameError(recipe.name)

        self._items[position] = recipe
        self._added = [recipe if r is old else r for r in self._added]
        del self._index[old.key]
        self._index[recipe.key] = recipe
        logger.info(f"Updated recipe: {old.name} -> {recipe.name}")
        return old

    def find_exact(self, name: str) -> Optional[Recipe]:
        """Case-insensitive lookup by full name."""
        return self._index.get(name.lower())

    def search(self, text: str) -> List[Recipe]:
        """Find recipes whose names match ``text``.

        An exact (case-insensitive) name match wins and is returned alone.
        Otherwise every recipe whose name contains ``text`` is returned in
        live order. A blank query matches everything.
        """
        query = text.strip().lower()
        if not query:
            return list(self._items)

        exact = self.find_exact(query)
        if exact is not None:
            return [exact]
        return [r for r in self._items if query in r.name.lower()]

    def sort_by(self, key: SortKey, ascending: bool = True) -> None:
        """Reorder the live order in place.

        Sorting is stable in both directions: recipes with equal keys keep
        their relative order. ``DATE_ADDED`` restores insertion order.
        """
        key = SortKey(key)
        if key is SortKey.DATE_ADDED:
            self._items = list(self._added) if ascending else list(reversed(self._added))
        else:
            self._items.sort(key=sort_key(key), reverse=not ascending)
        logger.debug(f"Sorted by {key.value} ({'ascending' if ascending else 'descending'})")

    def arrange(self, recipes: List[Recipe]) -> None:
        """Set the live order explicitly.

        ``recipes`` must hold exactly the recipes already in the cookbook.
        """
        if len(recipes) != len(self._items) or {id(r) for r in recipes} != {id(r) for r in self._items}:
            raise ValueError("Arranged recipes must be the cookbook's own recipes")
        self._items = list(recipes)

    def restore_order(self) -> None:
        """Show recipes in the order they were added again."""
        self.sort_by(SortKey.DATE_ADDED)

    def reverse(self) -> None:
        """Reverse the current live order."""
        self._items.reverse()

    def serialize(self) -> bytes:
        """Encode the whole cookbook, see ``cookstack.storage``."""
        from .storage import encode

        return encode(self)

    @classmethod
    def deserialize(cls, data: bytes) -> "RecipeCollection":
        """Decode a cookbook produced by ``serialize``.

        Raises:
            CorruptDataError: The data is not a readable cookbook.
        """
        from .storage import decode

        return decode(data)
