"""CLI entry point for Recipe Quantities."""

import json

import click

from .classifier import IngredientClassifier
from .formatting import format_amount, format_grocery_entry, format_ingredient_line
from .logging_config import configure_logging
from .planner import GroceryList, build_grocery_list
from .recipe_parser import parse_ingredient, parse_ingredients_text
from .scaler import calculate_scale_factor, format_scale_info, scale_ingredients


def parse_grocery_line(spec: str) -> dict[str, object]:
    """
    Parse a grocery line given on the command line.

    Format is "recipe_id:multiplier:ingredient text"; the multiplier may be
    empty, and a line without colons belongs to recipe "manual".

    Raises:
        click.BadParameter: If the multiplier is not a number
    """
    parts = spec.split(":", 2)
    if len(parts) < 3:
        return {"line": spec.strip(), "recipe_id": "manual", "serving_multiplier": 1.0}

    recipe_id, multiplier, line = parts
    try:
        serving_multiplier = float(multiplier) if multiplier.strip() else 1.0
    except ValueError:
        raise click.BadParameter(f"Invalid multiplier in '{spec}'") from None

    return {
        "line": line.strip(),
        "recipe_id": recipe_id.strip() or "manual",
        "serving_multiplier": serving_multiplier,
    }


def display_grocery_list(grocery_list: GroceryList) -> None:
    """Display a grocery list grouped by category."""
    click.echo()
    click.echo("=" * 60)
    click.echo(grocery_list.title.upper())
    click.echo("=" * 60)

    for category, entries in grocery_list.by_category():
        click.echo(f"\n{category.icon} {category.name}")
        for entry in entries:
            sources = ", ".join(entry.source_recipe_ids)
            click.echo(f"  - {format_grocery_entry(entry)}  [{sources}]")

    click.echo()
    click.echo("-" * 60)
    click.echo(f"Items: {grocery_list.entry_count}")
    if grocery_list.total_estimated_price is not None:
        click.echo(f"Estimated total: ${grocery_list.total_estimated_price:.2f}")
    click.echo("-" * 60)


# ============================================================================
# Main CLI Group
# ============================================================================


@click.group()
@click.version_option(version="1.0.0", prog_name="recipe-quantities")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Recipe ingredient quantity tools.

    Parse ingredient lines, scale them to a new serving count, and build
    consolidated grocery lists from several recipes.
    """
    configure_logging("DEBUG" if verbose else None)


@cli.command("parse")
@click.argument("lines", nargs=-1)
@click.option("--text", "-t", "input_text", help="Multi-line ingredient text")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
def parse_cmd(lines: tuple[str, ...], input_text: str | None, as_json: bool):
    """Parse ingredient lines into amount, unit and name.

    Examples:

    \b
        recipe-quantities parse "2 cups flour" "3 eggs"
        recipe-quantities parse --text "$(cat ingredients.txt)" --json
    """
    parsed = [parse_ingredient(line) for line in lines]
    if input_text:
        parsed.extend(parse_ingredients_text(input_text))

    if not parsed:
        click.echo("✗ Provide ingredient lines or use --text.", err=True)
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps([p.to_dict() for p in parsed], indent=2))
        return

    for i, ing in enumerate(parsed, 1):
        amount = format_amount(ing.amount) if ing.amount is not None else "-"
        click.echo(f"{i}. {ing.original}")
        click.echo(f"   amount: {amount}  unit: {ing.unit or '-'}  name: {ing.name}")


@cli.command("scale")
@click.argument("lines", nargs=-1)
@click.option("--from", "original_servings", type=int, required=True, help="Original servings")
@click.option("--to", "target_servings", type=int, required=True, help="Target servings")
@click.option("--text", "-t", "input_text", help="Multi-line ingredient text")
def scale_cmd(
    lines: tuple[str, ...],
    original_servings: int,
    target_servings: int,
    input_text: str | None,
):
    """Scale ingredient lines to a new number of servings.

    Examples:

    \b
        recipe-quantities scale --from 4 --to 8 "2 cups flour" "1/2 tsp salt"
    """
    parsed = [parse_ingredient(line) for line in lines]
    if input_text:
        parsed.extend(parse_ingredients_text(input_text))

    if not parsed:
        click.echo("✗ Provide ingredient lines or use --text.", err=True)
        raise SystemExit(1)

    if original_servings < 0 or target_servings < 0:
        click.echo("✗ Servings must not be negative.", err=True)
        raise SystemExit(1)

    factor = calculate_scale_factor(original_servings, target_servings)
    click.echo(format_scale_info(factor, original_servings or None, target_servings))

    for i, scaled in enumerate(
        scale_ingredients(parsed, original_servings, target_servings), 1
    ):
        click.echo(f"  {i}. {format_ingredient_line(scaled)}")


@cli.command("format")
@click.argument("amounts", nargs=-1, type=float, required=True)
def format_cmd(amounts: tuple[float, ...]):
    """Format decimal amounts as cooking fractions."""
    for amount in amounts:
        if amount < 0:
            click.echo(f"✗ Amount must not be negative: {amount}", err=True)
            raise SystemExit(1)
        click.echo(format_amount(amount))


@cli.command("grocery")
@click.option(
    "--line",
    "-l",
    "line_specs",
    multiple=True,
    help='Ingredient as "recipe_id:multiplier:text" (repeatable)',
)
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Load lines from file, one per line",
)
@click.option("--online", is_flag=True, help="Classify and price with the configured service")
@click.option("--prices", is_flag=True, help="Include an estimated total price")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
def grocery_cmd(
    line_specs: tuple[str, ...],
    file_path: str | None,
    online: bool,
    prices: bool,
    as_json: bool,
):
    """Consolidate ingredients from several recipes into a grocery list.

    Examples:

    \b
        recipe-quantities grocery -l "pancakes:1:2 cups milk" -l "soup:2:480 ml milk"
        recipe-quantities grocery --file week.txt --online --prices
    """
    specs = list(line_specs)
    if file_path:
        with open(file_path) as f:
            for raw in f:
                raw = raw.strip()
                # Skip empty lines and comments
                if raw and not raw.startswith("#"):
                    specs.append(raw)

    if not specs:
        click.echo("✗ Provide --line or --file.", err=True)
        raise SystemExit(1)

    items = [parse_grocery_line(spec) for spec in specs]

    if online:
        with IngredientClassifier() as classifier:
            if not classifier.is_configured:
                click.echo("⚠️  RECIPE_CLASSIFIER_URL not set, using local parser.", err=True)
            grocery_list = build_grocery_list(items, classifier=classifier, include_prices=prices)
    else:
        grocery_list = build_grocery_list(items, include_prices=prices)

    if as_json:
        payload = {
            "title": grocery_list.title,
            "recipe_ids": grocery_list.recipe_ids,
            "total_estimated_price": grocery_list.total_estimated_price,
            "entries": [entry.to_dict() for entry in grocery_list.entries],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    display_grocery_list(grocery_list)
