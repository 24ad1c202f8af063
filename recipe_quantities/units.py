"""Cooking unit registry: unit names to base units (ml, g) and conversion factors."""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal

BaseUnit = Literal["ml", "g"]


@dataclass(frozen=True)
class UnitConversion:
    """How one unit reduces to its base unit."""

    unit: str
    base_unit: BaseUnit
    factor: float  # base units per one `unit`


# Volume -> milliliters. Cup/tbsp/tsp/fl oz use the US legal cup (240 ml),
# so 1 cup == 16 tbsp == 48 tsp == 8 fl oz exactly.
VOLUME_FACTORS: dict[str, float] = {
    "tsp": 5.0,
    "teaspoon": 5.0,
    "tbsp": 15.0,
    "tbs": 15.0,
    "tablespoon": 15.0,
    "cup": 240.0,
    "fl oz": 30.0,
    "fluid ounce": 30.0,
    "pint": 473.176,
    "quart": 946.353,
    "gallon": 3785.41,
    "ml": 1.0,
    "milliliter": 1.0,
    "millilitre": 1.0,
    "cl": 10.0,
    "dl": 100.0,
    "l": 1000.0,
    "liter": 1000.0,
    "litre": 1000.0,
}

# Weight -> grams
WEIGHT_FACTORS: dict[str, float] = {
    "mg": 0.001,
    "g": 1.0,
    "gram": 1.0,
    "kg": 1000.0,
    "kilogram": 1000.0,
    "oz": 28.3495,
    "ounce": 28.3495,
    "lb": 453.592,
    "lbs": 453.592,
    "pound": 453.592,
}

# Long unit names that take a plural "s" when the amount is not exactly one
PLURALIZABLE_UNITS: frozenset[str] = frozenset(
    {
        "cup",
        "teaspoon",
        "tablespoon",
        "fluid ounce",
        "pint",
        "quart",
        "gallon",
        "milliliter",
        "millilitre",
        "liter",
        "litre",
        "gram",
        "kilogram",
        "ounce",
        "pound",
        "piece",
    }
)


def _normalize_token(token: str) -> str:
    return " ".join(token.lower().split())


class UnitTable:
    """Read-only lookup of unit tokens to UnitConversion records.

    Lookups are case-insensitive and tolerate a plural "s": the exact token
    is tried first, then the token with one trailing "s" removed.
    """

    def __init__(self, conversions: Mapping[str, UnitConversion]):
        self._conversions: Mapping[str, UnitConversion] = MappingProxyType(
            {_normalize_token(name): conv for name, conv in conversions.items()}
        )

    @classmethod
    def from_factors(
        cls,
        volume: Mapping[str, float],
        weight: Mapping[str, float],
    ) -> "UnitTable":
        conversions: dict[str, UnitConversion] = {}
        for name, factor in volume.items():
            conversions[name] = UnitConversion(unit=name, base_unit="ml", factor=factor)
        for name, factor in weight.items():
            conversions[name] = UnitConversion(unit=name, base_unit="g", factor=factor)
        return cls(conversions)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.lookup(token) is not None

    def __len__(self) -> int:
        return len(self._conversions)

    def lookup(self, token: str | None) -> UnitConversion | None:
        """Return the conversion for a unit token, or None if it is not a unit."""
        if not token:
            return None

        key = _normalize_token(token)
        if key in self._conversions:
            return self._conversions[key]

        # Plural tolerance: "cups" -> "cup", "fluid ounces" -> "fluid ounce"
        if key.endswith("s") and key[:-1] in self._conversions:
            return self._conversions[key[:-1]]

        return None

    def is_unit(self, token: str | None) -> bool:
        return self.lookup(token) is not None

    def base_unit_and_factor(self, token: str | None) -> tuple[BaseUnit, float] | None:
        """Return (base_unit, factor) for a unit token, or None."""
        conversion = self.lookup(token)
        if conversion is None:
            return None
        return conversion.base_unit, conversion.factor

    def same_base(self, unit_a: str | None, unit_b: str | None) -> bool:
        """Check whether two units reduce to the same base unit."""
        conv_a = self.lookup(unit_a)
        conv_b = self.lookup(unit_b)
        if conv_a is None or conv_b is None:
            return False
        return conv_a.base_unit == conv_b.base_unit

    def to_base(self, amount: float, unit: str | None) -> float | None:
        """Convert an amount to its base unit, or None if the unit is unknown."""
        conversion = self.lookup(unit)
        if conversion is None:
            return None
        return amount * conversion.factor

    def from_base(self, amount: float, unit: str | None) -> float | None:
        """Convert a base-unit amount into `unit`, or None if the unit is unknown."""
        conversion = self.lookup(unit)
        if conversion is None:
            return None
        return amount / conversion.factor


DEFAULT_UNIT_TABLE = UnitTable.from_factors(VOLUME_FACTORS, WEIGHT_FACTORS)


def format_unit(amount: float, unit: str) -> str:
    """
    Pluralize or singularize a unit name for display.

    Only long unit names change; abbreviations ("tsp", "g") are returned as-is.

    Examples:
        format_unit(1, "cups") -> "cup"
        format_unit(2, "cup") -> "cups"
        format_unit(2, "tbsp") -> "tbsp"
    """
    key = _normalize_token(unit)

    if key in PLURALIZABLE_UNITS:
        singular = key
    elif key.endswith("s") and key[:-1] in PLURALIZABLE_UNITS:
        singular = key[:-1]
    else:
        return unit

    if amount == 1:
        return singular
    return f"{singular}s"
