"""Pydantic models for recipe data validation."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import IndexOutOfRangeError

DEFAULT_CATEGORY = "N/A"
CATEGORIES = (DEFAULT_CATEGORY, "Breakfast", "Lunch", "Dinner")


class Ingredient(BaseModel):
    """A single ingredient line of a recipe."""

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(..., description="Ingredient name, e.g. 'Tomato'")
    quantity: str = Field("", description="Free-form quantity, e.g. '2' or '1/2'")
    unit: str = Field("", description="Unit of measurement, e.g. 'tsp'")

    def __str__(self) -> str:
        return f"{self.name} ({self.quantity} {self.unit})"


class Recipe(BaseModel):
    """A named procedure with ingredients, ordered steps and nutrition info.

    Assignments are validated, so a recipe edited in place can never hold a
    negative time. The name is frozen: rename a recipe by swapping in an
    edited copy with ``RecipeCollection.replace_at`` so the name index stays
    in sync.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(..., min_length=1, frozen=True, description="Recipe name, unique per cookbook")
    ingredients: List[Ingredient] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list, description="Steps in procedure order")
    time_minutes: int = Field(0, ge=0, description="Total time in minutes")
    serving_size: int = Field(0, ge=0, description="Number of people served")
    category: str = Field(DEFAULT_CATEGORY, description="Meal category")
    calories: int = Field(0, ge=0, description="Calories")
    protein: int = Field(0, ge=0, description="Protein in grams")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Recipe name cannot be blank")
        return value

    @field_validator("category")
    @classmethod
    def _category_default(cls, value: str) -> str:
        return value or DEFAULT_CATEGORY

    @property
    def key(self) -> str:
        """Index key used for case-insensitive lookup."""
        return self.name.lower()

    def add_ingredient(self, ingredient: Ingredient) -> None:
        self.ingredients.append(ingredient)

    def add_step(self, step: str) -> None:
        self.steps.append(step)

    def remove_ingredient_at(self, position: int) -> Ingredient:
        """Remove and return the ingredient at ``position``."""
        if not 0 <= position < len(self.ingredients):
            raise IndexOutOfRangeError(position, len(self.ingredients))
        return self.ingredients.pop(position)

    def remove_step_at(self, position: int) -> str:
        """Remove and return the step at ``position``."""
        if not 0 <= position < len(self.steps):
            raise IndexOutOfRangeError(position, len(self.steps))
        return self.steps.pop(position)

    def summary(self) -> str:
        """Multi-line text description of the recipe."""
        calories = f"{self.calories} calories" if self.calories else "n/a"
        protein = f"{self.protein} grams" if self.protein else "n/a"
        lines = [
            f"{self.name}:",
            f"Ingredients: {', '.join(str(i) for i in self.ingredients)}",
            f"Steps: {'; '.join(self.steps)}",
            f"Time Taken: {self.time_minutes} minutes",
            f"Serving Size: {self.serving_size} people",
            f"Recipe Category: {self.category}",
            f"Calories: {calories}",
            f"Protein: {protein}",
        ]
        return "\n".join(lines)
