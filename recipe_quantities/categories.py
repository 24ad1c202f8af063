"""Grocery categories and the local keyword-to-category fallback."""

from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class GroceryCategory:
    """A grocery store section."""

    id: str
    name: str
    icon: str
    sort_order: int


DEFAULT_CATEGORY_ID = "other"

DEFAULT_GROCERY_CATEGORIES: tuple[GroceryCategory, ...] = (
    GroceryCategory("produce", "Produce", "🥬", 1),
    GroceryCategory("meat-seafood", "Meat & Seafood", "🥩", 2),
    GroceryCategory("dairy-eggs", "Dairy & Eggs", "🥛", 3),
    GroceryCategory("pantry", "Pantry", "🏺", 4),
    GroceryCategory("grains-bread", "Grains & Bread", "🍞", 5),
    GroceryCategory("frozen", "Frozen", "🧊", 6),
    GroceryCategory("beverages", "Beverages", "🥤", 7),
    GroceryCategory("snacks", "Snacks", "🍿", 8),
    GroceryCategory("condiments", "Condiments", "🍯", 9),
    GroceryCategory("spices-herbs", "Spices & Herbs", "🌿", 10),
    GroceryCategory("baking", "Baking", "🧁", 11),
    GroceryCategory("household", "Household", "🧽", 12),
    GroceryCategory(DEFAULT_CATEGORY_ID, "Other", "📦", 13),
)

CATEGORIES_BY_ID = MappingProxyType({cat.id: cat for cat in DEFAULT_GROCERY_CATEGORIES})

# Keyword -> category id. Multi-word keywords come first so "garlic powder"
# lands in spices before "garlic" claims it for produce.
INGREDIENT_CATEGORY_KEYWORDS: tuple[tuple[str, str], ...] = (
    # Spices & Herbs
    ("garlic powder", "spices-herbs"),
    ("onion powder", "spices-herbs"),
    ("chili powder", "spices-herbs"),
    # Baking
    ("vanilla extract", "baking"),
    ("brown sugar", "baking"),
    ("baking powder", "baking"),
    ("baking soda", "baking"),
    ("cocoa powder", "baking"),
    ("chocolate chips", "baking"),
    # Dairy & Eggs
    ("sour cream", "dairy-eggs"),
    ("cottage cheese", "dairy-eggs"),
    # Meat & Seafood
    ("ground beef", "meat-seafood"),
    ("chicken breast", "meat-seafood"),
    # Pantry
    ("olive oil", "pantry"),
    ("vegetable oil", "pantry"),
    ("soy sauce", "pantry"),
    ("canned tomatoes", "pantry"),
    ("tomato sauce", "pantry"),
    # Produce
    ("bell pepper", "produce"),
    ("eggplant", "produce"),
    ("butternut squash", "produce"),
    ("apple", "produce"),
    ("banana", "produce"),
    ("orange", "produce"),
    ("lemon", "produce"),
    ("onion", "produce"),
    ("garlic", "produce"),
    ("tomato", "produce"),
    ("potato", "produce"),
    ("carrot", "produce"),
    ("celery", "produce"),
    ("spinach", "produce"),
    ("lettuce", "produce"),
    ("cucumber", "produce"),
    ("broccoli", "produce"),
    ("mushroom", "produce"),
    # Meat & Seafood
    ("chicken", "meat-seafood"),
    ("beef", "meat-seafood"),
    ("pork", "meat-seafood"),
    ("turkey", "meat-seafood"),
    ("salmon", "meat-seafood"),
    ("tuna", "meat-seafood"),
    ("shrimp", "meat-seafood"),
    ("fish", "meat-seafood"),
    ("bacon", "meat-seafood"),
    # Dairy & Eggs
    ("milk", "dairy-eggs"),
    ("cheese", "dairy-eggs"),
    ("butter", "dairy-eggs"),
    ("yogurt", "dairy-eggs"),
    ("egg", "dairy-eggs"),
    ("cream", "dairy-eggs"),
    # Pantry
    ("vinegar", "pantry"),
    ("pasta", "pantry"),
    ("rice", "pantry"),
    ("beans", "pantry"),
    ("lentils", "pantry"),
    ("broth", "pantry"),
    ("stock", "pantry"),
    # Grains & Bread
    ("bread", "grains-bread"),
    ("flour", "grains-bread"),
    ("oats", "grains-bread"),
    ("quinoa", "grains-bread"),
    ("tortilla", "grains-bread"),
    ("bagel", "grains-bread"),
    ("cereal", "grains-bread"),
    # Spices & Herbs
    ("salt", "spices-herbs"),
    ("pepper", "spices-herbs"),
    ("basil", "spices-herbs"),
    ("oregano", "spices-herbs"),
    ("thyme", "spices-herbs"),
    ("rosemary", "spices-herbs"),
    ("paprika", "spices-herbs"),
    ("cumin", "spices-herbs"),
    # Baking
    ("sugar", "baking"),
    ("vanilla", "baking"),
)

CategoryResolver = Callable[[str], str]


def guess_category(ingredient: str) -> str:
    """
    Guess a grocery category id from an ingredient name.

    Returns the id of the first keyword contained in the name, or "other".
    """
    name_lower = ingredient.lower()

    for keyword, category_id in INGREDIENT_CATEGORY_KEYWORDS:
        if keyword in name_lower:
            return category_id

    return DEFAULT_CATEGORY_ID


def get_category(category_id: str | None) -> GroceryCategory:
    """Look up a category by id, falling back to "Other"."""
    if category_id and category_id in CATEGORIES_BY_ID:
        return CATEGORIES_BY_ID[category_id]
    return CATEGORIES_BY_ID[DEFAULT_CATEGORY_ID]


def category_id_from_name(name: str | None) -> str:
    """Map a category display name or id (as returned by a classifier) to an id."""
    if not name:
        return DEFAULT_CATEGORY_ID

    key = name.strip().lower()
    for category in DEFAULT_GROCERY_CATEGORIES:
        if key in (category.id, category.name.lower()):
            return category.id

    return DEFAULT_CATEGORY_ID
