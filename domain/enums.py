"""
Domain enums for the Pizzeria application.
Contains all enumeration types used across the domain models and API schemas.
"""

import enum


class IngredientCategory(str, enum.Enum):
    """Kind of catalog ingredient"""

    SAUCE = "SAUCE"
    TOPPING = "TOPPING"

    @property
    def label(self) -> str:
        """Lowercase name used in messages and URLs ("sauce", "topping")"""
        return self.value.lower()


class IngredientAmount(str, enum.Enum):
    """How much of an ingredient goes on the pizza"""

    LIGHT = "LIGHT"
    REGULAR = "REGULAR"
    EXTRA = "EXTRA"


class IngredientSection(str, enum.Enum):
    """Part of the pizza surface an ingredient covers"""

    WHOLE = "WHOLE"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class PizzaSize(str, enum.Enum):
    PERSONAL = "PERSONAL"
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"
    XL = "XL"
