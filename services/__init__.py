"""Services package - Business logic layer"""

from services.ingredient_service import IngredientService
from services.pizza_service import PizzaService

__all__ = [
    "IngredientService",
    "PizzaService",
]
