"""Storage operations for cookbook files.

A cookbook file is a UTF-8 YAML document tagged with ``format: cookstack``
and a schema ``version``. Recipes are stored in the order they were added;
``order`` lists the live order as positions into ``recipes``::

    format: cookstack
    version: 1
    owner: Lara
    recipes:
      - name: Toast
        ingredients:
          - {name: Bread, quantity: '2', unit: slices}
        steps: [Toast the bread]
        time_minutes: 5
        ...
    order: [0]

Unknown keys are ignored so files written by a newer minor release still
load; a higher ``version`` is refused.
"""

import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

import frontmatter
import yaml
from pydantic import BaseModel, Field, ValidationError

from .collection import RecipeCollection
from .errors import CorruptDataError, DuplicateNameError, NotFoundError
from .logger import get_logger
from .models import Recipe
from .profile import COOKBOOK_SUFFIX

logger = get_logger("storage")

FORMAT_TAG = "cookstack"
SCHEMA_VERSION = 1

PathLike = Union[str, Path]


class CookbookDocument(BaseModel):
    """On-disk shape of a cookbook."""

    format: str = FORMAT_TAG
    version: int = SCHEMA_VERSION
    owner: str = ""
    recipes: List[Recipe] = Field(default_factory=list)
    order: Optional[List[int]] = None


def encode(collection: RecipeCollection) -> bytes:
    """Serialize a cookbook to bytes."""
    added = collection.date_added
    positions = {id(recipe): i for i, recipe in enumerate(added)}
    document = CookbookDocument(
        owner=collection.owner_name,
        recipes=list(added),
        order=[positions[id(recipe)] for recipe in collection.recipes],
    )
    text = yaml.safe_dump(
        document.model_dump(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    return text.encode("utf-8")


def decode(data: bytes) -> RecipeCollection:
    """Deserialize bytes written by ``encode``.

    Raises:
        CorruptDataError: The data is not valid YAML, is not a cookbook, was
            written by a newer schema, or holds invalid recipes.
    """
    try:
        raw = yaml.safe_load(data.decode("utf-8"))
    except (UnicodeDecodeError, yaml.YAMLError) as e:
        raise CorruptDataError(f"Cookbook is not readable: {e}") from e

    if not isinstance(raw, dict) or raw.get("format") != FORMAT_TAG:
        raise CorruptDataError("Data is not a CookStack cookbook")

    version = raw.get("version")
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        raise CorruptDataError(f"Invalid cookbook version: {version!r}")
    if version > SCHEMA_VERSION:
        raise CorruptDataError(
            f"Cookbook version {version} was written by a newer CookStack "
            f"(this one reads up to version {SCHEMA_VERSION})"
        )

    try:
        document = CookbookDocument.model_validate(raw)
    except ValidationError as e:
        raise CorruptDataError(f"Cookbook has invalid content: {e}") from e

    collection = RecipeCollection(document.owner)
    for recipe in document.recipes:
        try:
            collection.add(recipe)
        except DuplicateNameError as e:
            raise CorruptDataError(f"Cookbook lists '{recipe.name}' more than once") from e

    if document.order is not None:
        if sorted(document.order) != list(range(len(document.recipes))):
            raise CorruptDataError("Cookbook order does not match its recipes")
        collection.arrange([document.recipes[i] for i in document.order])

    return collection


def save(collection: RecipeCollection, path: PathLike) -> Path:
    """Write a cookbook to ``path``.

    The data goes to a temporary file next to the target which then replaces
    it, so a failed save leaves the previous file intact.
    """
    path = Path(path)
    data = encode(collection)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except OSError:
        logger.error(f"Failed to save cookbook: {path}")
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info(f"Saved cookbook: {path} ({len(collection)} recipes)")
    return path


def load(path: PathLike) -> RecipeCollection:
    """Read a cookbook from ``path``.

    Raises:
        NotFoundError: There is no file at ``path``.
        CorruptDataError: The file is not a readable cookbook.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except FileNotFoundError as e:
        raise NotFoundError(f"Cookbook not found: {path}") from e
    except IsADirectoryError as e:
        raise NotFoundError(f"Cookbook path is a directory: {path}") from e

    collection = decode(data)
    logger.info(f"Loaded cookbook: {path} ({len(collection)} recipes)")
    return collection


def create(path: PathLike, owner_name: str, overwrite: bool = False) -> RecipeCollection:
    """Start a new, empty cookbook at ``path``."""
    path = Path(path)
    if path.exists() and not overwrite:
        raise FileExistsError(f"Cookbook already exists: {path}")
    collection = RecipeCollection(owner_name.strip())
    save(collection, path)
    return collection


def title_from_path(path: PathLike) -> str:
    """Display title for a cookbook file: its name without suffix, capitalized."""
    name = Path(path).name
    if name.endswith(COOKBOOK_SUFFIX):
        name = name[: -len(COOKBOOK_SUFFIX)]
    else:
        name = Path(name).stem
    return name[:1].upper() + name[1:]


def recipe_to_markdown(recipe: Recipe) -> str:
    """Render a recipe as Markdown with YAML frontmatter."""
    lines = ["## Ingredients", ""]
    lines += [f"- {ingredient}" for ingredient in recipe.ingredients]
    lines += ["", "## Steps", ""]
    lines += [f"{i}. {step}" for i, step in enumerate(recipe.steps, start=1)]

    post = frontmatter.Post(
        content="\n".join(lines),
        title=recipe.name,
        servings=recipe.serving_size,
        time_minutes=recipe.time_minutes,
        category=recipe.category,
        calories=recipe.calories,
        protein=recipe.protein,
        created=datetime.now().date().isoformat(),
    )
    return frontmatter.dumps(post)


def export_recipe(recipe: Recipe, directory: PathLike) -> Path:
    """Write a recipe as a Markdown file into ``directory``."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    filename = recipe.name.lower().replace(' ', '-').replace('/', '-')
    path = directory / f"{filename}.md"
    with open(path, "w", encoding="utf-8") as f:
        f.write(recipe_to_markdown(recipe))
    logger.info(f"Exported recipe: {path}")
    return path
