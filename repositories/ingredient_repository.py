"""
Ingredient Repository - Data access layer for the sauce/topping catalog
"""

from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.exceptions import ConflictError, NotFoundError
from domain.enums import IngredientCategory
from domain.models.ingredient import Ingredient
from repositories.base import BaseRepository, store_errors


class IngredientRepository(BaseRepository[Ingredient]):
    """Repository for catalog ingredients. Lookups by name only see active rows."""

    def __init__(self, db: Session):
        super().__init__(db, Ingredient)

    def get_by_id(self, ingredient_id: UUID) -> Optional[Ingredient]:
        """Get ingredient by ID, including soft-deleted ones"""
        with store_errors(self.db, "get ingredient"):
            return (
                self.db.query(Ingredient)
                .filter(Ingredient.ingredient_id == ingredient_id)
                .first()
            )

    def find_active(self, name: str, category: IngredientCategory) -> Optional[Ingredient]:
        """Get the active ingredient with this exact (already normalized) name"""
        with store_errors(self.db, "find ingredient"):
            return (
                self.db.query(Ingredient)
                .filter(
                    Ingredient.name == name,
                    Ingredient.category == category,
                    Ingredient.deleted_at.is_(None),
                )
                .first()
            )

    def find_active_by_names(
        self, names: Iterable[str], category: IngredientCategory
    ) -> List[Ingredient]:
        """Get the active ingredients matching any of the names in one query"""
        names = list(names)
        if not names:
            return []
        with store_errors(self.db, "find ingredients"):
            return (
                self.db.query(Ingredient)
                .filter(
                    Ingredient.name.in_(names),
                    Ingredient.category == category,
                    Ingredient.deleted_at.is_(None),
                )
                .all()
            )

    def list_active(self, category: IngredientCategory) -> List[Ingredient]:
        """Get all active ingredients of a category ordered by name"""
        with store_errors(self.db, "list ingredients"):
            return (
                self.db.query(Ingredient)
                .filter(
                    Ingredient.category == category,
                    Ingredient.deleted_at.is_(None),
                )
                .order_by(Ingredient.name, Ingredient.created_at)
                .all()
            )

    def count_active(self, category: IngredientCategory) -> int:
        with store_errors(self.db, "count ingredients"):
            return (
                self.db.query(Ingredient)
                .filter(
                    Ingredient.category == category,
                    Ingredient.deleted_at.is_(None),
                )
                .count()
            )

    def insert(self, name: str, category: IngredientCategory) -> Ingredient:
        """
        Insert a new active ingredient.

        The partial unique index on (name, category) for active rows rejects a
        concurrent duplicate that slipped past the caller's existence check.

        Raises:
            ConflictError: If an active ingredient with this name and category exists
        """
        ingredient = Ingredient(name=name, category=category)
        with store_errors(self.db, "insert ingredient"):
            self.db.add(ingredient)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                raise ConflictError(
                    f"Failed to add {category.label} {name} since it already exists",
                    details={"category": category.value, "name": name},
                ) from e
            self.db.refresh(ingredient)
        return ingredient

    def bulk_insert(self, names: Iterable[str], category: IngredientCategory) -> List[Ingredient]:
        """Insert several ingredients in one transaction"""
        ingredients = [Ingredient(name=name, category=category) for name in names]
        with store_errors(self.db, "insert ingredients"):
            self.db.add_all(ingredients)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                raise ConflictError(
                    f"Failed to add {category.label}s since one already exists",
                    details={"category": category.value},
                ) from e
        return ingredients

    def soft_delete(self, ingredient_id: UUID, deleted_at: datetime) -> Ingredient:
        """
        Mark an active ingredient as deleted.

        Raises:
            NotFoundError: If no active ingredient has this ID
        """
        with store_errors(self.db, "delete ingredient"):
            ingredient = (
                self.db.query(Ingredient)
                .filter(
                    Ingredient.ingredient_id == ingredient_id,
                    Ingredient.deleted_at.is_(None),
                )
                .first()
            )
            if ingredient is None:
                raise NotFoundError(
                    f"Could not find ingredient {ingredient_id}",
                    details={"ingredient_id": str(ingredient_id)},
                )
            ingredient.deleted_at = deleted_at
            self.db.commit()
            self.db.refresh(ingredient)
        return ingredient
