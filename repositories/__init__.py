"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository, store_errors
from repositories.ingredient_repository import IngredientRepository
from repositories.pizza_repository import PizzaRepository, ResolvedPlacement

__all__ = [
    "BaseRepository",
    "store_errors",
    "IngredientRepository",
    "PizzaRepository",
    "ResolvedPlacement",
]
