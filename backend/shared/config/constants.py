"""
Centralized constants for the backend application.

Usage:
    from shared.config.constants import Roles, MenuGroup, MENU_TAGS

    if group == MenuGroup.FOOD:
        ...
"""

from enum import Enum
from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants."""

    ADMIN: Final[str] = "admin"


# =============================================================================
# Menu Constants
# =============================================================================


class MenuGroup(str, Enum):
    """Top-level partition of the public menu. Declaration order is display order."""

    FOOD = "FOOD"
    DRINKS = "DRINKS"


# Fixed tag vocabulary accepted on menu items
MENU_TAGS: Final[tuple[str, ...]] = (
    "Spicy",
    "Vegetarian",
    "Chef's Special",
    "New",
    "Popular",
    "Healthy",
    "Classic",
    "Dessert",
)


# Canonical category structure used by `menu-api seed-categories`
CATEGORY_STRUCTURE: Final[dict[MenuGroup, tuple[str, ...]]] = {
    MenuGroup.FOOD: (
        "STARTERS",
        "PEPPER SOUP (NATIONAL)",
        "PEPPER SOUP (CONTINENTAL)",
        "NIGERIAN DISH",
        "GRILLS",
        "CONTINENTAL",
        "SANDWICH/BURGER",
        "PIZZA",
        "CHINESE CUISINE",
        "INDIAN CUISINE",
        "PASTA",
        "DESSERT",
        "SNACKS",
        "KIDS MENU",
        "EXTRAS",
    ),
    MenuGroup.DRINKS: (
        "NON ALCOHOLIC BEVERAGES",
        "COFFEE",
        "WINES",
        "BEER",
        "SPIRIT PER TOT",
        "SPIRIT PER BOTTLE",
        "CHAMPAGNE",
        "COCKTAILS/MOCKTAILS",
    ),
}


# =============================================================================
# Validation Limits
# =============================================================================


class Limits:
    """Validation limits shared by schemas and models."""

    NAME_MAX_LENGTH: Final[int] = 255
    DESCRIPTION_MAX_LENGTH: Final[int] = 2000
    URL_MAX_LENGTH: Final[int] = 2048
    PASSWORD_MIN_LENGTH: Final[int] = 8
    PASSWORD_MAX_LENGTH: Final[int] = 128
    PASSWORD_MAX_BYTES: Final[int] = 72  # bcrypt rejects longer input
    MAX_PRICE: Final[int] = 99_999_999  # Numeric(10, 2)
