"""Grocery list planning: consolidate ingredients from multiple recipes."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from .categories import CategoryResolver, GroceryCategory, get_category, guess_category
from .classifier import IngredientClassifier, fallback_analysis, fallback_price_estimate
from .formatting import format_grocery_entry
from .logging_config import get_logger
from .recipe_parser import ParsedIngredient, parse_ingredient
from .units import DEFAULT_UNIT_TABLE, UnitTable

logger = get_logger(__name__)

# Unit used for counted items and for lines with no parsable amount
DEFAULT_UNIT = "piece"


class ConsolidationItem(NamedTuple):
    """One parsed ingredient line headed for the grocery list."""

    ingredient: ParsedIngredient
    recipe_id: str
    serving_multiplier: float = 1.0


@dataclass
class GroceryEntry:
    """An ingredient consolidated from one or more recipes."""

    name: str
    category: str  # GroceryCategory id
    quantity: float
    unit: str
    source_recipe_ids: list[str] = field(default_factory=list)

    @property
    def normalized_name(self) -> str:
        return normalize_ingredient_name(self.name)

    @property
    def key(self) -> tuple[str, str]:
        """Consolidation key: (normalized name, category)."""
        return self.normalized_name, self.category

    def __str__(self) -> str:
        return format_grocery_entry(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for serialization."""
        return {
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "unit": self.unit,
            "source_recipe_ids": list(self.source_recipe_ids),
        }


@dataclass
class GroceryList:
    """A consolidated grocery list for a set of recipes."""

    title: str
    entries: list[GroceryEntry]
    recipe_ids: list[str] = field(default_factory=list)
    total_estimated_price: float | None = None

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    def by_category(self) -> list[tuple[GroceryCategory, list[GroceryEntry]]]:
        """Group entries by category, in store-section order."""
        grouped: dict[str, list[GroceryEntry]] = {}
        for entry in self.entries:
            grouped.setdefault(entry.category, []).append(entry)

        categories = sorted((get_category(cid) for cid in grouped), key=lambda c: c.sort_order)
        return [(category, grouped[category.id]) for category in categories]


def normalize_ingredient_name(name: str) -> str:
    """Normalize an ingredient name for grouping: lower-case, trimmed, single spaces."""
    return " ".join(name.lower().split())


def combine_quantities(
    qty1: float,
    unit1: str,
    qty2: float,
    unit2: str,
    unit_table: UnitTable = DEFAULT_UNIT_TABLE,
) -> float | None:
    """
    Add two quantities, expressing the total in `unit1`.

    Identical units (ignoring case) add directly. Units with the same base
    unit are converted through it. Anything else cannot be combined.

    Returns:
        The total in `unit1`, or None if the units are incompatible
    """
    if unit1.strip().lower() == unit2.strip().lower():
        return qty1 + qty2

    if unit_table.same_base(unit1, unit2):
        base1 = unit_table.to_base(qty1, unit1)
        base2 = unit_table.to_base(qty2, unit2)
        if base1 is not None and base2 is not None:
            return unit_table.from_base(base1 + base2, unit1)

    return None


def _grocery_quantity(ingredient: ParsedIngredient, multiplier: float) -> tuple[float, str]:
    """Quantity and unit an ingredient contributes to the list."""
    if ingredient.amount is None:
        return 1.0, DEFAULT_UNIT
    return ingredient.amount * multiplier, ingredient.unit or DEFAULT_UNIT


def _fold(
    items: Iterable[tuple[ParsedIngredient, str, float, str]],
    unit_table: UnitTable,
) -> list[GroceryEntry]:
    """Fold (ingredient, recipe_id, multiplier, category) tuples into entries."""
    entries: list[GroceryEntry] = []
    groups: dict[tuple[str, str], list[GroceryEntry]] = {}

    for ingredient, recipe_id, multiplier, category in items:
        quantity, unit = _grocery_quantity(ingredient, multiplier)
        key = (normalize_ingredient_name(ingredient.name), category)
        group = groups.setdefault(key, [])

        for entry in group:
            total = combine_quantities(entry.quantity, entry.unit, quantity, unit, unit_table)
            if total is not None:
                entry.quantity = total
                if recipe_id not in entry.source_recipe_ids:
                    entry.source_recipe_ids.append(recipe_id)
                break
        else:
            if group:
                logger.debug(
                    f"Keeping '{ingredient.name}' ({unit}) separate: "
                    f"no unit compatible with {[e.unit for e in group]}"
                )
            entry = GroceryEntry(
                name=ingredient.name,
                category=category,
                quantity=quantity,
                unit=unit,
                source_recipe_ids=[recipe_id],
            )
            group.append(entry)
            entries.append(entry)

    return entries


def consolidate_ingredients(
    items: Iterable[ConsolidationItem | tuple[ParsedIngredient, str, float]],
    category_resolver: CategoryResolver | None = None,
    unit_table: UnitTable = DEFAULT_UNIT_TABLE,
) -> list[GroceryEntry]:
    """
    Consolidate parsed ingredients from multiple recipes.

    Groups by (normalized name, category) and sums quantities where units
    are identical or share a base unit; incompatible units stay as separate
    entries under the same name.

    Args:
        items: (ingredient, recipe_id, serving_multiplier) tuples
        category_resolver: Maps an ingredient name to a category id;
            defaults to the local keyword map
        unit_table: Units used to decide convertibility

    Returns:
        Grocery entries in first-seen order
    """
    resolve = category_resolver or guess_category

    return _fold(
        (
            (ingredient, recipe_id, multiplier, resolve(ingredient.name))
            for ingredient, recipe_id, multiplier in items
        ),
        unit_table,
    )


def _read_request(item: Mapping[str, Any]) -> tuple[str, str, float]:
    """Read (line, recipe_id, serving_multiplier) from a request mapping."""
    line = str(item.get("line", ""))
    recipe_id = str(item.get("recipe_id", item.get("recipeId", "")))
    multiplier = item.get("serving_multiplier", item.get("servingMultiplier"))
    return line, recipe_id, float(multiplier) if multiplier is not None else 1.0


def consolidate(
    items: Iterable[Mapping[str, Any]],
    category_resolver: CategoryResolver | None = None,
    unit_table: UnitTable = DEFAULT_UNIT_TABLE,
) -> list[GroceryEntry]:
    """
    Parse raw ingredient lines and consolidate them into grocery entries.

    Args:
        items: Mappings with "line", "recipe_id" and "serving_multiplier"
            ("recipeId" / "servingMultiplier" are accepted too)

    Returns:
        Grocery entries in first-seen order
    """
    parsed_items = []
    for item in items:
        line, recipe_id, multiplier = _read_request(item)
        parsed_items.append(
            ConsolidationItem(parse_ingredient(line, unit_table), recipe_id, multiplier)
        )
    return consolidate_ingredients(parsed_items, category_resolver, unit_table)


def generate_list_title(recipe_ids: list[str]) -> str:
    """Generate a grocery list title from the recipes it covers."""
    if not recipe_ids:
        return "Grocery List"
    if len(recipe_ids) == 1:
        return f"Grocery List for {recipe_ids[0]}"
    if len(recipe_ids) <= 3:
        return f"Grocery List for {', '.join(recipe_ids)}"
    return f"Grocery List for {len(recipe_ids)} Recipes"


def build_grocery_list(
    items: Iterable[Mapping[str, Any]],
    classifier: IngredientClassifier | None = None,
    include_prices: bool = False,
    unit_table: UnitTable = DEFAULT_UNIT_TABLE,
) -> GroceryList:
    """
    Build a grocery list from raw ingredient lines.

    Lines are classified by the external service when a classifier is given
    (falling back to the local parser on any failure), then consolidated.

    Args:
        items: Mappings with "line", "recipe_id" and "serving_multiplier"
        classifier: Optional classification service client
        include_prices: Also estimate the total price of the list
        unit_table: Units used to decide convertibility

    Returns:
        GroceryList
    """
    requests = [_read_request(item) for item in items]
    lines = [line for line, _, _ in requests]

    if classifier is not None:
        analyses = classifier.analyze_ingredients(lines)
    else:
        analyses = [fallback_analysis(line) for line in lines]

    entries = _fold(
        (
            (analysis.to_parsed(), recipe_id, multiplier, analysis.category_id)
            for analysis, (_, recipe_id, multiplier) in zip(analyses, requests)
        ),
        unit_table,
    )

    recipe_ids: list[str] = []
    for _, recipe_id, _ in requests:
        if recipe_id not in recipe_ids:
            recipe_ids.append(recipe_id)

    total_price = None
    if include_prices:
        names = [entry.name for entry in entries]
        if classifier is not None:
            estimates = classifier.estimate_prices(names)
        else:
            estimates = [fallback_price_estimate(name) for name in names]
        total_price = round(sum(e.estimated_price for e in estimates), 2)

    return GroceryList(
        title=generate_list_title(recipe_ids),
        entries=entries,
        recipe_ids=recipe_ids,
        total_estimated_price=total_price,
    )
