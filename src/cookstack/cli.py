"""CLI for cookbook management using typer."""

from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Iterable, List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table

from . import storage
from .collection import RecipeCollection, SortKey
from .errors import CookStackError
from .forms import build_recipe, edit_recipe, parse_ingredient_spec
from .logger import configure_logging, get_logger, set_command, shutdown_logging
from .models import CATEGORIES, Recipe
from .profile import Profile

load_dotenv()

logger = get_logger("cli")

app = typer.Typer(
    help="CookStack - your personal recipe book",
    epilog="Examples: cookstack new Lara | cookstack add Toast -i 'Bread|2|slices' -s 'Toast it' ... | cookstack sort time",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    cookbook: Annotated[Optional[Path], typer.Option("--cookbook", "-c", help="Cookbook file (defaults to the profile's cookbook)")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
):
    """Manage a cookbook of recipes."""
    profile = Profile.current()
    configure_logging(profile, verbose)
    set_command(ctx.invoked_subcommand)
    ctx.call_on_close(shutdown_logging)
    ctx.obj = cookbook or profile.default_cookbook
    logger.debug(f"Using cookbook: {ctx.obj}")


@contextmanager
def _reporting_errors():
    """Turn cookbook and file errors into a red message and exit code 1."""
    try:
        yield
    except CookStackError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except OSError as e:
        logger.error(f"File error: {e}")
        console.print(f"[red]File error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _load(ctx: typer.Context) -> RecipeCollection:
    return storage.load(ctx.obj)


def _ingredients(specs: Optional[List[str]]):
    if not specs:
        return None
    return [parse_ingredient_spec(spec) for spec in specs]


def _recipe_table(title: str, recipes: Iterable[Recipe], collection: RecipeCollection) -> Table:
    table = Table(title=escape(title))
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Category")
    table.add_column("Time", justify="right")
    table.add_column("Serves", justify="right")
    table.add_column("Ingredients", justify="right")
    table.add_column("Steps", justify="right")
    table.add_column("Calories", justify="right")
    table.add_column("Protein", justify="right")

    for recipe in recipes:
        table.add_row(
            str(collection.position_of(recipe.name)),
            escape(recipe.name),
            escape(recipe.category),
            f"{recipe.time_minutes} min",
            str(recipe.serving_size),
            str(len(recipe.ingredients)),
            str(len(recipe.steps)),
            str(recipe.calories),
            f"{recipe.protein} g",
        )
    return table


@app.command()
def new(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Whose cookbook this is")],
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing cookbook")] = False,
):
    """Create a new, empty cookbook."""
    if not owner.strip():
        console.print("[red]Owner name cannot be empty.[/red]")
        raise typer.Exit(1)

    if ctx.obj.exists() and not force:
        console.print(f"[red]Cookbook '{escape(str(ctx.obj))}' already exists. Use --force to replace it.[/red]")
        raise typer.Exit(1)

    with _reporting_errors():
        collection = storage.create(ctx.obj, owner, overwrite=force)

    console.print(f"[green]✓[/green] Created {escape(collection.title)}")
    console.print(f"  Saved to: {escape(str(ctx.obj))}")


@app.command()
def add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Recipe name")],
    ingredient: Annotated[Optional[List[str]], typer.Option("--ingredient", "-i", help="Ingredient as 'name|quantity|unit' (repeatable)")] = None,
    step: Annotated[Optional[List[str]], typer.Option("--step", "-s", help="Cooking step, in order (repeatable)")] = None,
    time: Annotated[str, typer.Option("--time", "-t", help="Total time in minutes")] = "",
    servings: Annotated[str, typer.Option("--servings", help="Number of servings")] = "",
    calories: Annotated[str, typer.Option("--calories", help="Calories")] = "",
    protein: Annotated[str, typer.Option("--protein", help="Protein in grams")] = "",
    category: Annotated[str, typer.Option("--category", help=f"One of {', '.join(CATEGORIES)}")] = CATEGORIES[0],
):
    """Add a recipe; it is shown first in the cookbook."""
    with _reporting_errors():
        collection = _load(ctx)
        recipe = build_recipe(
            name=name,
            ingredients=_ingredients(ingredient) or [],
            steps=step or [],
            time=time,
            serving_size=servings,
            calories=calories,
            protein=protein,
            category=category,
        )
        if recipe.category not in CATEGORIES:
            logger.warning(f"Unusual category for {recipe.name}: {recipe.category}")
        collection.add(recipe, front=True)
        storage.save(collection, ctx.obj)

    console.print(f"[green]✓[/green] Added recipe: {escape(recipe.name)}")


@app.command()
def edit(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Recipe to edit")],
    rename: Annotated[Optional[str], typer.Option("--name", help="New recipe name")] = None,
    ingredient: Annotated[Optional[List[str]], typer.Option("--ingredient", "-i", help="Replace ingredients, 'name|quantity|unit' (repeatable)")] = None,
    step: Annotated[Optional[List[str]], typer.Option("--step", "-s", help="Replace steps (repeatable)")] = None,
    time: Annotated[Optional[str], typer.Option("--time", "-t", help="Total time in minutes")] = None,
    servings: Annotated[Optional[str], typer.Option("--servings", help="Number of servings")] = None,
    calories: Annotated[Optional[str], typer.Option("--calories", help="Calories")] = None,
    protein: Annotated[Optional[str], typer.Option("--protein", help="Protein in grams")] = None,
    category: Annotated[Optional[str], typer.Option("--category", help=f"One of {', '.join(CATEGORIES)}")] = None,
):
    """Edit fields of an existing recipe."""
    with _reporting_errors():
        collection = _load(ctx)
        position = collection.position_of(name)
        updated = edit_recipe(
            collection[position],
            name=rename,
            ingredients=_ingredients(ingredient),
            steps=step,
            time=time,
            serving_size=servings,
            calories=calories,
            protein=protein,
            category=category,
        )
        collection.replace_at(position, updated)
        storage.save(collection, ctx.obj)

    console.print(f"[green]✓[/green] Updated recipe: {escape(updated.name)}")


@app.command()
def delete(
    ctx: typer.Context,
    name: Annotated[Optional[str], typer.Argument(help="Recipe name to delete")] = None,
    at: Annotated[Optional[int], typer.Option("--at", help="Delete by position shown in 'list'")] = None,
):
    """Delete a recipe by name or position."""
    if (name is None) == (at is None):
        console.print("[red]Give either a recipe name or --at POSITION.[/red]")
        raise typer.Exit(1)

    with _reporting_errors():
        collection = _load(ctx)
        removed = collection.remove_at(at) if at is not None else collection.remove(name)
        storage.save(collection, ctx.obj)

    console.print(f"[green]✓[/green] Deleted recipe: {escape(removed.name)}")


@app.command("list")
def list_recipes(ctx: typer.Context):
    """List all recipes in their current order."""
    with _reporting_errors():
        collection = _load(ctx)

    if not len(collection):
        console.print("[yellow]No recipes found.[/yellow]")
        return

    console.print(_recipe_table(collection.title, collection, collection))


@app.command()
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Name or part of a name")],
):
    """Search recipes by name."""
    with _reporting_errors():
        collection = _load(ctx)

    matches = collection.search(query)
    if not matches:
        console.print(f"[yellow]No recipes found matching '{escape(query)}'[/yellow]")
        return

    console.print(_recipe_table(f"Recipes matching '{query}'", matches, collection))


@app.command()
def show(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Recipe name to show")],
):
    """Show a recipe."""
    with _reporting_errors():
        collection = _load(ctx)

    recipe = collection.find_exact(name)
    if recipe is None:
        console.print(f"[red]Recipe '{escape(name)}' not found.[/red]")
        raise typer.Exit(1)

    # Build markdown content
    content = f"# {recipe.name}\n\n"
    content += f"**Category:** {recipe.category}  \n"
    content += f"**Time:** {recipe.time_minutes} min  \n"
    content += f"**Servings:** {recipe.serving_size}  \n"
    content += f"**Calories:** {recipe.calories}  \n"
    content += f"**Protein:** {recipe.protein} g\n\n"
    content += "## Ingredients\n\n"
    content += "".join(f"- {ingredient}\n" for ingredient in recipe.ingredients)
    content += "\n## Steps\n\n"
    content += "".join(f"{i}. {step}\n" for i, step in enumerate(recipe.steps, start=1))

    console.print(Markdown(content))


@app.command("sort")
def sort_recipes(
    ctx: typer.Context,
    key: Annotated[SortKey, typer.Argument(help="Field to sort by", case_sensitive=False)],
    descending: Annotated[bool, typer.Option("--descending", "-d", help="Largest first")] = False,
):
    """Reorder the cookbook.

    'date_added' restores the order recipes were added in, oldest first;
    add --descending to put the newest first as 'add' does.
    """
    with _reporting_errors():
        collection = _load(ctx)
        collection.sort_by(key, ascending=not descending)
        storage.save(collection, ctx.obj)

    console.print(f"[green]✓[/green] Sorted by {key.value}")
    console.print(f"  {escape(', '.join(collection.names()))}")


@app.command("reverse")
def reverse_recipes(ctx: typer.Context):
    """Flip the current order of the cookbook."""
    with _reporting_errors():
        collection = _load(ctx)
        collection.reverse()
        storage.save(collection, ctx.obj)

    console.print("[green]✓[/green] Reversed order")
    console.print(f"  {escape(', '.join(collection.names()))}")


@app.command()
def export(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Recipe name to export")],
    output: Annotated[Path, typer.Option("--output", "-o", help="Directory for the Markdown file")] = Path("."),
):
    """Export a recipe as Markdown with frontmatter."""
    with _reporting_errors():
        collection = _load(ctx)
        recipe = collection[collection.position_of(name)]
        path = storage.export_recipe(recipe, output)

    console.print(f"[green]✓[/green] Exported recipe: {escape(recipe.name)}")
    console.print(f"  Saved to: {escape(str(path))}")


@app.command()
def info(ctx: typer.Context):
    """Show details about the cookbook and the profile."""
    with _reporting_errors():
        collection = _load(ctx)

    profile = Profile.current()
    console.print(f"[bold]{escape(storage.title_from_path(ctx.obj))}'s Cook Book[/bold]")
    console.print(f"Owner: {escape(collection.owner_name)}")
    console.print(f"File: {escape(str(ctx.obj))}")
    console.print(f"Recipes: {len(collection)}")
    console.print(f"Profile: {profile.name}")

    cookbooks = profile.list_cookbooks()
    if cookbooks:
        console.print("[bold]Cookbooks in profile:[/bold]")
        for path in cookbooks:
            console.print(f"  • {path.name}")


if __name__ == "__main__":
    app()
