"""Recipe scaling and quantity math logic."""

import math
from dataclasses import dataclass

from .recipe_parser import ParsedIngredient
from .units import DEFAULT_UNIT_TABLE, UnitTable

# Seasoning intensity does not grow linearly with batch size; names containing
# any of these keywords scale by sqrt(factor).
SEASONING_KEYWORDS: tuple[str, ...] = ("salt", "pepper", "spice", "extract", "vanilla")

# Count amounts this close to a whole number snap to it
WHOLE_NUMBER_TOLERANCE = 0.1


@dataclass(frozen=True)
class ScaledIngredient:
    """An ingredient with scaled quantity."""

    original: ParsedIngredient
    scaled_amount: float | None
    scaled_unit: str | None
    scale_factor: float

    @property
    def name(self) -> str:
        return self.original.name

    @property
    def amount(self) -> float | None:
        return self.original.amount

    @property
    def unit(self) -> str | None:
        return self.original.unit

    def __str__(self) -> str:
        parts = []
        if self.scaled_amount is not None:
            # Format quantity nicely
            qty = self.scaled_amount
            if qty == int(qty):
                parts.append(str(int(qty)))
            else:
                parts.append(f"{qty:.2f}".rstrip("0").rstrip("."))
        if self.scaled_unit:
            parts.append(self.scaled_unit)
        parts.append(self.name)
        return " ".join(parts)


def calculate_scale_factor(
    original_servings: int | float | None,
    target_servings: int | float | None = None,
) -> float:
    """
    Calculate the scaling factor for a recipe.

    Args:
        original_servings: Original recipe serving size; zero or None counts as 1
        target_servings: Desired serving size; None means no scaling

    Returns:
        Scale factor to multiply quantities by
    """
    if target_servings is None:
        return 1.0

    if not original_servings:
        original_servings = 1

    return target_servings / original_servings


def is_seasoning(name: str) -> bool:
    """Check whether an ingredient name looks like a seasoning."""
    name_lower = name.lower()
    return any(keyword in name_lower for keyword in SEASONING_KEYWORDS)


def effective_scale_factor(name: str, scale_factor: float) -> float:
    """Return the factor actually applied to an ingredient's amount."""
    if is_seasoning(name) and scale_factor > 0:
        return math.sqrt(scale_factor)
    return scale_factor


def _round_half_up(value: float) -> float:
    # Exact halves go up, unlike round()
    return float(math.floor(value + 0.5))


def round_count_amount(amount: float) -> float:
    """
    Round a count amount (eggs, onions) to something you can actually buy.

    Snaps to the nearest whole number when within 0.1 of it, otherwise
    rounds to the nearest quarter. Halves round up (2.625 -> 2.75).
    """
    nearest = _round_half_up(amount)
    if abs(amount - nearest) < WHOLE_NUMBER_TOLERANCE:
        return nearest
    return _round_half_up(amount * 4) / 4


def round_convertible_amount(amount: float) -> float:
    """Round a measured amount (cups, grams) to two decimal places, halves up."""
    return _round_half_up(amount * 100) / 100


def scale_ingredient(
    parsed: ParsedIngredient,
    original_servings: int | float | None,
    target_servings: int | float | None,
    unit_table: UnitTable = DEFAULT_UNIT_TABLE,
) -> ScaledIngredient:
    """
    Scale a single ingredient to a new serving count.

    The unit label is never converted; only the amount changes.

    Args:
        parsed: The ingredient to scale
        original_servings: Servings the recipe was written for
        target_servings: Servings wanted
        unit_table: Units that count as measured (vs. counted) quantities

    Returns:
        ScaledIngredient with new amount
    """
    scale_factor = calculate_scale_factor(original_servings, target_servings)

    if parsed.amount is None:
        return ScaledIngredient(
            original=parsed, scaled_amount=None, scaled_unit=parsed.unit, scale_factor=scale_factor
        )

    # No scaling means no rounding either
    if scale_factor == 1:
        return ScaledIngredient(
            original=parsed,
            scaled_amount=parsed.amount,
            scaled_unit=parsed.unit,
            scale_factor=scale_factor,
        )

    scaled = parsed.amount * effective_scale_factor(parsed.name, scale_factor)

    if unit_table.is_unit(parsed.unit):
        scaled = round_convertible_amount(scaled)
    else:
        scaled = round_count_amount(scaled)

    return ScaledIngredient(
        original=parsed, scaled_amount=scaled, scaled_unit=parsed.unit, scale_factor=scale_factor
    )


def scale_ingredients(
    ingredients: list[ParsedIngredient],
    original_servings: int | float | None,
    target_servings: int | float | None,
    unit_table: UnitTable = DEFAULT_UNIT_TABLE,
) -> list[ScaledIngredient]:
    """Scale every ingredient of a recipe."""
    return [
        scale_ingredient(ing, original_servings, target_servings, unit_table)
        for ing in ingredients
    ]


def format_scale_info(
    scale_factor: float, original_servings: int | None, new_servings: int | None
) -> str:
    """
    Format scaling information for display.

    Args:
        scale_factor: The scaling factor used
        original_servings: Original serving size
        new_servings: New serving size after scaling

    Returns:
        Human-readable scaling description
    """
    if scale_factor == 1.0:
        if original_servings:
            return f"Original recipe ({original_servings} servings)"
        return "Original recipe"

    if scale_factor == 2.0:
        desc = "Doubled"
    elif scale_factor == 0.5:
        desc = "Halved"
    elif scale_factor == 3.0:
        desc = "Tripled"
    else:
        desc = f"Scaled {scale_factor:.2g}x"

    if original_servings and new_servings:
        return f"{desc} ({original_servings} → {new_servings} servings)"
    elif new_servings:
        return f"{desc} ({new_servings} servings)"

    return desc
