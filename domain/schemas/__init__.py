"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.ingredient_schemas import IngredientResponse
from domain.schemas.pizza_schemas import (
    PizzaIngredientPlacement,
    CreatePizzaRequest,
    PizzaIngredientResponse,
    PizzaResponse,
)

__all__ = [
    "IngredientResponse",
    "PizzaIngredientPlacement",
    "CreatePizzaRequest",
    "PizzaIngredientResponse",
    "PizzaResponse",
]
