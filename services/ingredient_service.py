"""Ingredient service - sauce and topping catalog management."""

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
import logging
from uuid import UUID

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.enums import IngredientCategory
from domain.models.ingredient import Ingredient
from domain.utils import normalize_ingredient_name
from repositories.ingredient_repository import IngredientRepository

logger = logging.getLogger("pizzeria.ingredient")


class IngredientService:
    """Authoritative source of which sauces and toppings can currently be ordered."""

    @staticmethod
    def _normalize(name: str) -> str:
        normalized = normalize_ingredient_name(name or "")
        if not normalized:
            raise ServiceValidationError(
                "Ingredient name must not be blank", details={"name": name}
            )
        return normalized

    @staticmethod
    def list_active(db: Session, category: IngredientCategory) -> List[Ingredient]:
        """Get all sauces or toppings that have not been deleted."""
        return IngredientRepository(db).list_active(category)

    @staticmethod
    def get_by_id(db: Session, ingredient_id: UUID) -> Optional[Ingredient]:
        """Get ingredient by ID, soft-deleted ones included."""
        return IngredientRepository(db).get_by_id(ingredient_id)

    @staticmethod
    def add(db: Session, name: str, category: IngredientCategory) -> Ingredient:
        """
        Add a sauce or topping to the catalog.

        Args:
            db: Database session
            name: Ingredient name, stored lowercased
            category: SAUCE or TOPPING

        Returns:
            The new active Ingredient

        Raises:
            ServiceValidationError: If the name is blank
            ConflictError: If an active ingredient with the same name and category exists
        """
        normalized = IngredientService._normalize(name)
        repo = IngredientRepository(db)

        if repo.find_active(normalized, category) is not None:
            logger.warning(f"add_{category.label} rejected: '{normalized}' already exists")
            raise ConflictError(
                f"Failed to add {category.label} {normalized} since it already exists",
                details={"category": category.value, "name": normalized},
            )

        ingredient = repo.insert(normalized, category)
        logger.info(
            f"{category.label}_added name='{normalized}' "
            f"ingredient_id={ingredient.ingredient_id}"
        )
        return ingredient

    @staticmethod
    def soft_delete(db: Session, name: str, category: IngredientCategory) -> Ingredient:
        """
        Remove a sauce or topping from the catalog by stamping deleted_at.

        The row stays retrievable by ID so existing pizzas keep their reference.

        Raises:
            NotFoundError: If no active ingredient matches
        """
        normalized = IngredientService._normalize(name)
        repo = IngredientRepository(db)

        ingredient = repo.find_active(normalized, category)
        if ingredient is None:
            logger.warning(f"delete_{category.label} failed: '{normalized}' not found")
            raise NotFoundError(
                f"Could not find {category.label} {normalized}",
                details={"category": category.value, "name": normalized},
            )

        deleted = repo.soft_delete(ingredient.ingredient_id, datetime.now(timezone.utc))
        logger.info(
            f"{category.label}_deleted name='{normalized}' "
            f"ingredient_id={deleted.ingredient_id}"
        )
        return deleted

    @staticmethod
    def resolve_many(
        db: Session, names: Iterable[str], category: IngredientCategory
    ) -> Dict[str, UUID]:
        """
        Map each distinct ingredient name to the ID of its active catalog entry.

        All names must resolve; nothing is returned for a partial match.

        Returns:
            Dict of normalized name -> ingredient_id, in first-seen order

        Raises:
            NotFoundError: Naming the first name (in request order) with no active match
        """
        distinct: List[str] = []
        for name in names:
            normalized = IngredientService._normalize(name)
            if normalized not in distinct:
                distinct.append(normalized)

        found = {
            ingredient.name: ingredient.ingredient_id
            for ingredient in IngredientRepository(db).find_active_by_names(
                distinct, category
            )
        }

        resolved: Dict[str, UUID] = {}
        for name in distinct:
            if name not in found:
                logger.warning(f"resolve failed: {category.label} '{name}' not found")
                raise NotFoundError(
                    f"Could not find {category.label} named {name}",
                    details={"category": category.value, "name": name},
                )
            resolved[name] = found[name]
        return resolved
