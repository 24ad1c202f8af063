"""Tests for the unit table and unit formatting."""

import dataclasses

import pytest

from recipe_quantities.units import (
    DEFAULT_UNIT_TABLE,
    UnitConversion,
    UnitTable,
    format_unit,
)


class TestIsUnit:
    """Tests for UnitTable.is_unit."""

    def test_volume_units(self):
        for unit in ("cup", "tbsp", "tsp", "ml", "l", "fl oz", "pint", "quart", "gallon"):
            assert DEFAULT_UNIT_TABLE.is_unit(unit), unit

    def test_weight_units(self):
        for unit in ("g", "kg", "mg", "oz", "lb", "lbs", "pound", "gram"):
            assert DEFAULT_UNIT_TABLE.is_unit(unit), unit

    def test_plural_tolerance(self):
        assert DEFAULT_UNIT_TABLE.is_unit("cups")
        assert DEFAULT_UNIT_TABLE.is_unit("tablespoons")
        assert DEFAULT_UNIT_TABLE.is_unit("grams")
        assert DEFAULT_UNIT_TABLE.is_unit("fluid ounces")

    def test_case_insensitive(self):
        assert DEFAULT_UNIT_TABLE.is_unit("Cups")
        assert DEFAULT_UNIT_TABLE.is_unit("TBSP")
        assert DEFAULT_UNIT_TABLE.is_unit("ML")

    def test_descriptors_are_not_units(self):
        for word in ("large", "medium", "small", "whole", "fresh", "chopped"):
            assert not DEFAULT_UNIT_TABLE.is_unit(word), word

    def test_count_words_are_not_units(self):
        assert not DEFAULT_UNIT_TABLE.is_unit("eggs")
        assert not DEFAULT_UNIT_TABLE.is_unit("cloves")
        assert not DEFAULT_UNIT_TABLE.is_unit("pinch")

    def test_empty_and_none(self):
        assert not DEFAULT_UNIT_TABLE.is_unit("")
        assert not DEFAULT_UNIT_TABLE.is_unit(None)

    def test_contains(self):
        assert "cup" in DEFAULT_UNIT_TABLE
        assert "eggs" not in DEFAULT_UNIT_TABLE
        assert 5 not in DEFAULT_UNIT_TABLE


class TestBaseUnitAndFactor:
    """Tests for UnitTable.base_unit_and_factor."""

    def test_cup(self):
        assert DEFAULT_UNIT_TABLE.base_unit_and_factor("cup") == ("ml", 240.0)

    def test_plural_same_as_singular(self):
        assert DEFAULT_UNIT_TABLE.base_unit_and_factor(
            "cups"
        ) == DEFAULT_UNIT_TABLE.base_unit_and_factor("cup")

    def test_kilogram(self):
        assert DEFAULT_UNIT_TABLE.base_unit_and_factor("kg") == ("g", 1000.0)

    def test_pound(self):
        base, factor = DEFAULT_UNIT_TABLE.base_unit_and_factor("lb")
        assert base == "g"
        assert factor == pytest.approx(453.592)

    def test_unknown_returns_none(self):
        assert DEFAULT_UNIT_TABLE.base_unit_and_factor("pinch") is None
        assert DEFAULT_UNIT_TABLE.base_unit_and_factor(None) is None

    def test_cup_tablespoon_teaspoon_consistent(self):
        _, cup = DEFAULT_UNIT_TABLE.base_unit_and_factor("cup")
        _, tbsp = DEFAULT_UNIT_TABLE.base_unit_and_factor("tbsp")
        _, tsp = DEFAULT_UNIT_TABLE.base_unit_and_factor("tsp")
        assert cup == 16 * tbsp
        assert tbsp == 3 * tsp


class TestConversions:
    """Tests for to_base, from_base and same_base."""

    def test_to_base(self):
        assert DEFAULT_UNIT_TABLE.to_base(2, "cups") == 480.0
        assert DEFAULT_UNIT_TABLE.to_base(1.5, "kg") == 1500.0

    def test_from_base(self):
        assert DEFAULT_UNIT_TABLE.from_base(960, "cup") == 4.0
        assert DEFAULT_UNIT_TABLE.from_base(500, "kg") == 0.5

    def test_unknown_unit(self):
        assert DEFAULT_UNIT_TABLE.to_base(2, "pinch") is None
        assert DEFAULT_UNIT_TABLE.from_base(2, None) is None

    def test_same_base_volume(self):
        assert DEFAULT_UNIT_TABLE.same_base("cups", "ml")
        assert DEFAULT_UNIT_TABLE.same_base("tbsp", "tsp")

    def test_same_base_weight(self):
        assert DEFAULT_UNIT_TABLE.same_base("lb", "g")

    def test_volume_never_matches_weight(self):
        assert not DEFAULT_UNIT_TABLE.same_base("cup", "g")
        assert not DEFAULT_UNIT_TABLE.same_base("oz", "fl oz")

    def test_unknown_never_matches(self):
        assert not DEFAULT_UNIT_TABLE.same_base("piece", "piece")
        assert not DEFAULT_UNIT_TABLE.same_base(None, "g")


class TestCustomTable:
    """Tests for building a UnitTable from custom data."""

    def test_new_unit_only_needs_table_entry(self):
        table = UnitTable.from_factors({"cup": 240.0, "mug": 350.0}, {"g": 1.0})
        assert table.is_unit("mugs")
        assert table.base_unit_and_factor("mug") == ("ml", 350.0)
        assert len(table) == 3

    def test_conversion_records_are_frozen(self):
        conversion = DEFAULT_UNIT_TABLE.lookup("cup")
        assert isinstance(conversion, UnitConversion)
        with pytest.raises(dataclasses.FrozenInstanceError):
            conversion.factor = 1.0  # type: ignore[misc]

    def test_table_cannot_be_mutated(self):
        table = UnitTable({"cup": UnitConversion("cup", "ml", 240.0)})
        with pytest.raises(TypeError):
            table._conversions["mug"] = UnitConversion("mug", "ml", 350.0)  # type: ignore[index]


class TestFormatUnit:
    """Tests for format_unit function."""

    def test_singular_for_one(self):
        assert format_unit(1, "cups") == "cup"
        assert format_unit(1, "tablespoons") == "tablespoon"

    def test_plural_for_many(self):
        assert format_unit(2, "cup") == "cups"
        assert format_unit(0.5, "pound") == "pounds"

    def test_abbreviations_unchanged(self):
        assert format_unit(2, "tbsp") == "tbsp"
        assert format_unit(1, "g") == "g"

    def test_unknown_units_unchanged(self):
        assert format_unit(3, "pinch") == "pinch"

    def test_piece(self):
        assert format_unit(1, "piece") == "piece"
        assert format_unit(3, "piece") == "pieces"
