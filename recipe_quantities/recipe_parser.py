"""Ingredient line parsing: free text to structured quantity records."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .units import DEFAULT_UNIT_TABLE, UnitTable


@dataclass(frozen=True)
class ParsedIngredient:
    """A single parsed ingredient line."""

    original: str  # Original text
    name: str  # Extracted ingredient name
    amount: float | None = None
    unit: str | None = None  # None for bare counts ("3 eggs")

    def __str__(self) -> str:
        parts = []
        if self.amount is not None:
            amount = self.amount
            parts.append(str(int(amount)) if amount == int(amount) else f"{amount:g}")
        if self.unit:
            parts.append(self.unit)
        if self.name:
            parts.append(self.name)
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for serialization."""
        return {
            "original": self.original,
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParsedIngredient":
        """Create a ParsedIngredient from a dictionary."""
        amount = data.get("amount")
        return cls(
            original=data.get("original", data.get("name", "")),
            name=data.get("name", ""),
            amount=float(amount) if amount is not None else None,
            unit=data.get("unit") or None,
        )


# Words that describe an item rather than measure it ("2 large eggs")
DESCRIPTORS: frozenset[str] = frozenset(
    {
        "large",
        "medium",
        "small",
        "whole",
        "fresh",
        "dried",
        "chopped",
        "diced",
        "sliced",
        "minced",
    }
)

# Mixed number ("1 1/2"), fraction ("1/2"), or decimal/integer ("2", "1.5")
AMOUNT_PATTERN = r"(?P<amount>\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?)"


def parse_amount(token: str) -> float | None:
    """
    Parse an amount token into a float.

    Handles "2", "1.5", "1/2" and "1 1/2". Returns None for anything else,
    including fractions with a zero denominator.
    """
    token = token.strip()

    mixed = re.fullmatch(r"(\d+)\s+(\d+)/(\d+)", token)
    if mixed:
        whole, num, denom = (int(g) for g in mixed.groups())
        if denom == 0:
            return None
        return whole + num / denom

    fraction = re.fullmatch(r"(\d+)/(\d+)", token)
    if fraction:
        num, denom = (int(g) for g in fraction.groups())
        if denom == 0:
            return None
        return num / denom

    if re.fullmatch(r"\d+(?:\.\d+)?", token):
        return float(token)

    return None


def _clean_name(name: str) -> str:
    """Trim and normalize whitespace in an ingredient name."""
    return " ".join(name.split()).strip(" ,")


def _split_unit(rest: str, unit_table: UnitTable) -> tuple[str, str] | None:
    """
    Split "<unit> <name>" text, validating the unit against the table.

    Two-word units ("fl oz", "fluid ounces") are tried before single words.
    The name is empty when the text is a unit alone ("2 cups").
    Returns (unit, name) or None when the leading token is not a unit.
    """
    words = rest.split()

    if len(words) >= 2:
        two_word = f"{words[0]} {words[1]}"
        if unit_table.is_unit(two_word):
            return two_word, " ".join(words[2:])

    if words:
        first_word = words[0].rstrip(",.")
        if unit_table.is_unit(first_word):
            return first_word, " ".join(words[1:])

    return None


class IngredientMatcher(ABC):
    """One rule in the parsing cascade.

    Subclasses return a ParsedIngredient when the line has their shape and
    None otherwise; they never raise.
    """

    label = "matcher"
    pattern: re.Pattern[str]

    @abstractmethod
    def match(self, line: str, unit_table: UnitTable) -> ParsedIngredient | None:
        """Parse the line, or return None when it does not have this shape."""
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.label}>"


class AmountUnitNameMatcher(IngredientMatcher):
    """`<amount> <unit> <name>`, e.g. "2 cups flour" or "500g flour".

    A unit with no name after it ("2 cups") still counts as measured.
    """

    label = "amount-unit-name"
    pattern = re.compile(rf"^{AMOUNT_PATTERN}\s*(?P<rest>[^\d\s/].*)$")

    def match(self, line: str, unit_table: UnitTable) -> ParsedIngredient | None:
        m = self.pattern.match(line.strip())
        if not m:
            return None

        amount = parse_amount(m.group("amount"))
        if amount is None:
            return None

        split = _split_unit(m.group("rest"), unit_table)
        if split is None:
            return None

        unit, name = split
        name = _clean_name(name)

        return ParsedIngredient(original=line, name=name, amount=amount, unit=unit)


class NameAmountUnitMatcher(IngredientMatcher):
    """`<name>, <amount> <unit>`, e.g. "flour, 2 cups"."""

    label = "name-amount-unit"
    pattern = re.compile(
        rf"^(?P<name>[^,]+),\s*{AMOUNT_PATTERN}\s*(?P<unit>[A-Za-z]+(?:\s+[A-Za-z]+)?)\.?$"
    )

    def match(self, line: str, unit_table: UnitTable) -> ParsedIngredient | None:
        m = self.pattern.match(line.strip())
        if not m:
            return None

        unit = m.group("unit")
        if not unit_table.is_unit(unit):
            return None

        amount = parse_amount(m.group("amount"))
        name = _clean_name(m.group("name"))
        if amount is None or not name:
            return None

        return ParsedIngredient(original=line, name=name, amount=amount, unit=unit)


class AmountDescriptorNameMatcher(IngredientMatcher):
    """`<amount> <descriptor> <name>`, e.g. "2 large eggs".

    The descriptor is kept as part of the name; it is never a unit.
    """

    label = "amount-descriptor-name"
    pattern = re.compile(rf"^{AMOUNT_PATTERN}\s+(?P<descriptor>[A-Za-z]+)\s+(?P<name>.+)$")

    def __init__(self, descriptors: frozenset[str] = DESCRIPTORS):
        self.descriptors = descriptors

    def match(self, line: str, unit_table: UnitTable) -> ParsedIngredient | None:
        m = self.pattern.match(line.strip())
        if not m:
            return None

        descriptor = m.group("descriptor")
        if descriptor.lower() not in self.descriptors or unit_table.is_unit(descriptor):
            return None

        amount = parse_amount(m.group("amount"))
        name = _clean_name(f"{descriptor} {m.group('name')}")
        if amount is None or not name:
            return None

        return ParsedIngredient(original=line, name=name, amount=amount, unit=None)


class AmountNameMatcher(IngredientMatcher):
    """`<amount> <name>` bare count, e.g. "3 eggs"."""

    label = "amount-name"
    pattern = re.compile(rf"^{AMOUNT_PATTERN}\s+(?P<name>.+)$")

    def match(self, line: str, unit_table: UnitTable) -> ParsedIngredient | None:
        m = self.pattern.match(line.strip())
        if not m:
            return None

        amount = parse_amount(m.group("amount"))
        name = _clean_name(m.group("name"))
        if amount is None or not name:
            return None

        return ParsedIngredient(original=line, name=name, amount=amount, unit=None)


# Evaluated in order; the first matcher that recognizes a line wins
DEFAULT_MATCHERS: tuple[IngredientMatcher, ...] = (
    AmountUnitNameMatcher(),
    NameAmountUnitMatcher(),
    AmountDescriptorNameMatcher(),
    AmountNameMatcher(),
)


def parse_ingredient(
    line: str,
    unit_table: UnitTable = DEFAULT_UNIT_TABLE,
    matchers: tuple[IngredientMatcher, ...] = DEFAULT_MATCHERS,
) -> ParsedIngredient:
    """
    Parse a single ingredient line into structured data.

    Never raises: a line no matcher recognizes comes back as a name-only
    record with no amount and no unit.

    Args:
        line: Raw ingredient text (e.g., "2 cups flour")
        unit_table: Units used to tell a unit from a descriptor or count
        matchers: Cascade of matchers, tried in order

    Returns:
        ParsedIngredient
    """
    for matcher in matchers:
        parsed = matcher.match(line, unit_table)
        if parsed is not None:
            return parsed

    return ParsedIngredient(original=line, name=line.strip(), amount=None, unit=None)


def parse_ingredients_text(
    text: str, unit_table: UnitTable = DEFAULT_UNIT_TABLE
) -> list[ParsedIngredient]:
    """
    Parse multiple ingredients from text (one per line).

    Args:
        text: Multi-line text with ingredients

    Returns:
        List of ParsedIngredient objects
    """
    ingredients = []

    for line in text.strip().split("\n"):
        line = line.strip()
        # Skip empty lines and headers
        if not line or line.lower().startswith(("ingredients", "for the", "---")):
            continue
        # Skip bullet points and numbers at start
        line = re.sub(r"^[\-\*•]\s*", "", line)
        line = re.sub(r"^\d+\.\s+", "", line)

        if line:
            ingredients.append(parse_ingredient(line, unit_table))

    return ingredients
