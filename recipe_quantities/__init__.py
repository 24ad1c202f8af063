"""Recipe Quantities - ingredient parsing, scaling, fractions and grocery consolidation."""

__version__ = "1.0.0"

from .classifier import ClassifierError, IngredientClassifier
from .formatting import format_amount
from .planner import GroceryEntry, GroceryList, build_grocery_list, consolidate
from .recipe_parser import ParsedIngredient, parse_ingredient
from .scaler import ScaledIngredient, scale_ingredient
from .units import DEFAULT_UNIT_TABLE, UnitConversion, UnitTable

__all__ = [
    "ParsedIngredient",
    "parse_ingredient",
    "ScaledIngredient",
    "scale_ingredient",
    "format_amount",
    "GroceryEntry",
    "GroceryList",
    "consolidate",
    "build_grocery_list",
    "UnitTable",
    "UnitConversion",
    "DEFAULT_UNIT_TABLE",
    "IngredientClassifier",
    "ClassifierError",
]
