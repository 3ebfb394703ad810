"""Turn raw text fields into validated recipes."""

from typing import Optional, Sequence

from pydantic import ValidationError

from .errors import InvalidInputError
from .models import DEFAULT_CATEGORY, Ingredient, Recipe

INGREDIENT_SEPARATOR = "|"


def is_whole_number(text: str) -> bool:
    """True for non-empty text made only of decimal digits."""
    return bool(text) and text.isdecimal()


def parse_ingredient(name: str, quantity: str, unit: str) -> Ingredient:
    """Build an ingredient; all three fields are required."""
    name, quantity, unit = name.strip(), quantity.strip(), unit.strip()
    if not name or not quantity or not unit:
        raise InvalidInputError("Please fill all ingredient fields!")
    return Ingredient(name=name, quantity=quantity, unit=unit)


def parse_ingredient_spec(spec: str) -> Ingredient:
    """Parse ``"name|quantity|unit"`` as typed on the command line."""
    parts = spec.split(INGREDIENT_SEPARATOR)
    if len(parts) != 3:
        raise InvalidInputError(
            f"Ingredient '{spec}' must look like 'name{INGREDIENT_SEPARATOR}quantity{INGREDIENT_SEPARATOR}unit'"
        )
    return parse_ingredient(*parts)


def build_recipe(
    name: str,
    ingredients: Sequence[Ingredient],
    steps: Sequence[str],
    time: str,
    serving_size: str,
    calories: str,
    protein: str,
    category: Optional[str] = None,
) -> Recipe:
    """Validate form fields and build a recipe.

    Checks run in the order the user is told about them: ingredients, then
    steps, then empty fields, then numbers.

    Raises:
        InvalidInputError: Any field is missing or malformed.
    """
    steps = [step.strip() for step in steps if step.strip()]
    if not ingredients:
        raise InvalidInputError("Please add at least one ingredient!")
    if not steps:
        raise InvalidInputError("Please add at least one cooking step!")

    fields = {"time": time, "serving size": serving_size, "calories": calories, "protein": protein}
    if not name.strip() or any(not value.strip() for value in fields.values()):
        raise InvalidInputError("Fields cannot be empty!")
    if not all(is_whole_number(value.strip()) for value in fields.values()):
        raise InvalidInputError("Please enter numbers only for time, serving size, calories and protein.")

    try:
        return Recipe(
            name=name.strip(),
            ingredients=list(ingredients),
            steps=steps,
            time_minutes=int(time.strip()),
            serving_size=int(serving_size.strip()),
            category=(category or DEFAULT_CATEGORY).strip() or DEFAULT_CATEGORY,
            calories=int(calories.strip()),
            protein=int(protein.strip()),
        )
    except ValidationError as e:
        raise InvalidInputError(str(e)) from e


def edit_recipe(
    recipe: Recipe,
    name: Optional[str] = None,
    ingredients: Optional[Sequence[Ingredient]] = None,
    steps: Optional[Sequence[str]] = None,
    time: Optional[str] = None,
    serving_size: Optional[str] = None,
    calories: Optional[str] = None,
    protein: Optional[str] = None,
    category: Optional[str] = None,
) -> Recipe:
    """Return an edited copy of ``recipe``; fields left as None keep their value.

    The original is never touched, so a rejected edit leaves the cookbook as it was.
    """
    def pick(value: Optional[str], current: object) -> str:
        return str(current) if value is None else value

    return build_recipe(
        name=pick(name, recipe.name),
        ingredients=[i.model_copy() for i in recipe.ingredients] if ingredients is None else ingredients,
        steps=list(recipe.steps) if steps is None else steps,
        time=pick(time, recipe.time_minutes),
        serving_size=pick(serving_size, recipe.serving_size),
        calories=pick(calories, recipe.calories),
        protein=pick(protein, recipe.protein),
        category=pick(category, recipe.category),
    )
