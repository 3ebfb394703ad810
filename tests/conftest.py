"""Shared fixtures for CookStack tests."""

import pytest

from cookstack.collection import RecipeCollection
from cookstack.models import Ingredient, Recipe


def make_recipe(
    name,
    time=10,
    ingredients=1,
    steps=1,
    serving=2,
    category="N/A",
    calories=100,
    protein=5,
):
    """Build a recipe with ``ingredients`` and ``steps`` placeholder entries."""
    return Recipe(
        name=name,
        ingredients=[Ingredient(name=f"item {i}", quantity="1", unit="cup") for i in range(ingredients)],
        steps=[f"step {i}" for i in range(steps)],
        time_minutes=time,
        serving_size=serving,
        category=category,
        calories=calories,
        protein=protein,
    )


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point every profile at a throwaway home directory."""
    home = tmp_path / "home"
    monkeypatch.setenv("COOKSTACK_HOME", str(home))
    monkeypatch.delenv("COOKSTACK_PROFILE", raising=False)
    monkeypatch.delenv("COOKSTACK_COOKBOOK", raising=False)
    return home


@pytest.fixture
def toast():
    return Recipe(
        name="Toast",
        ingredients=[Ingredient(name="Bread", quantity="2", unit="slices")],
        steps=["Toast the bread"],
        time_minutes=5,
        serving_size=1,
        category="Breakfast",
        calories=120,
        protein=3,
    )


@pytest.fixture
def cookbook():
    """A cookbook with three recipes added in a known order."""
    collection = RecipeCollection("Lara")
    collection.add(make_recipe("Stew", time=60, ingredients=5, steps=4, calories=450, protein=30))
    collection.add(make_recipe("Apple Pie", time=90, ingredients=6, steps=6, calories=380, protein=4))
    collection.add(make_recipe("Omelette", time=10, ingredients=3, steps=2, calories=250, protein=18))
    return collection
