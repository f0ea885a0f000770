"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import Base, Database
from domain.models.ingredient import Ingredient
from domain.models.pizza import Pizza, PizzaIngredient

__all__ = [
    # Database
    "Base",
    "Database",
    # Catalog models
    "Ingredient",
    # Pizza models
    "Pizza",
    "PizzaIngredient",
]
