"""Display formatting: decimal amounts as cooking fractions."""

import math
from typing import TYPE_CHECKING

from .units import format_unit

if TYPE_CHECKING:
    from .planner import GroceryEntry
    from .scaler import ScaledIngredient

# (value, label) in ascending order; on an exact tie the earlier entry wins
COMMON_FRACTIONS: tuple[tuple[float, str], ...] = (
    (1 / 8, "1/8"),
    (1 / 4, "1/4"),
    (1 / 3, "1/3"),
    (3 / 8, "3/8"),
    (1 / 2, "1/2"),
    (5 / 8, "5/8"),
    (2 / 3, "2/3"),
    (3 / 4, "3/4"),
    (7 / 8, "7/8"),
)

FRACTION_EPSILON = 0.05


def closest_fraction(remainder: float) -> str | None:
    """Return the common fraction closest to `remainder`, if within epsilon."""
    best_label = None
    best_diff = math.inf

    for value, label in COMMON_FRACTIONS:
        diff = abs(remainder - value)
        if diff < best_diff and diff < FRACTION_EPSILON:
            best_diff = diff
            best_label = label

    return best_label


def format_amount(amount: float) -> str:
    """
    Format an amount as a cooking-friendly string.

    Examples:
        format_amount(1.5) -> "1 1/2"
        format_amount(0.25) -> "1/4"
        format_amount(3) -> "3"
        format_amount(0.19) -> "0.19"
        format_amount(2.19) -> "2.2"
    """
    whole = math.floor(amount)
    fraction = closest_fraction(amount - whole)

    if fraction and whole > 0:
        return f"{whole} {fraction}"
    if fraction:
        return fraction
    if amount < 1:
        return f"{amount:.2f}"
    if amount == whole:
        return str(whole)
    return f"{amount:.1f}"


def format_ingredient_line(scaled: "ScaledIngredient") -> str:
    """
    Render a scaled ingredient for display.

    Example:
        "1 1/2 cups flour"
    """
    if scaled.scaled_amount is None:
        return scaled.name

    parts = [format_amount(scaled.scaled_amount)]
    if scaled.scaled_unit:
        parts.append(scaled.scaled_unit)
    if scaled.name:
        parts.append(scaled.name)
    return " ".join(parts)


def format_grocery_entry(entry: "GroceryEntry") -> str:
    """
    Render a grocery list entry with a pluralized unit.

    Example:
        "4 cups milk"
    """
    unit = format_unit(entry.quantity, entry.unit)
    return " ".join(part for part in (format_amount(entry.quantity), unit, entry.name) if part)
