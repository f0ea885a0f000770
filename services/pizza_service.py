"""Pizza service - validates compositions and persists pizzas."""

from typing import Any, Iterable, List, Mapping, Optional, Union
from sqlalchemy.orm import Session
import logging
from uuid import UUID

from app.exceptions import InvalidCompositionError, NotFoundError, ServiceValidationError
from domain.enums import IngredientAmount, IngredientCategory, IngredientSection, PizzaSize
from domain.models.pizza import Pizza
from domain.schemas.pizza_schemas import PizzaIngredientPlacement
from domain.utils import normalize_ingredient_name
from repositories.pizza_repository import PizzaRepository, ResolvedPlacement
from services.ingredient_service import IngredientService

logger = logging.getLogger("pizzeria.pizza")


def _coerce(enum_cls, value, default):
    if value is None or value == "":
        return default
    if isinstance(value, enum_cls):
        return value
    return enum_cls(value.upper() if isinstance(value, str) else value)


class PizzaService:
    @staticmethod
    def apply_defaults(
        placement: Union[PizzaIngredientPlacement, Mapping[str, Any]]
    ) -> PizzaIngredientPlacement:
        """Fill in REGULAR amount and WHOLE section and lowercase the name."""
        if isinstance(placement, Mapping):
            name = placement.get("name") or ""
            amount = placement.get("amount")
            section = placement.get("section")
        else:
            name, amount, section = placement.name, placement.amount, placement.section

        try:
            amount = _coerce(IngredientAmount, amount, IngredientAmount.REGULAR)
            section = _coerce(IngredientSection, section, IngredientSection.WHOLE)
        except ValueError as e:
            raise ServiceValidationError(
                f"Invalid placement for {name}: {e}", details={"name": name}
            ) from e

        return PizzaIngredientPlacement.model_construct(
            name=normalize_ingredient_name(name), amount=amount, section=section
        )

    @staticmethod
    def covers_whole_pizza(placements: Iterable[PizzaIngredientPlacement]) -> bool:
        """
        Coverage predicate: some placement is WHOLE, or some placement is LEFT
        and some (possibly other) placement is RIGHT.

        Mixing WHOLE with halves and stacking several placements on the same
        section are both accepted.
        """
        sections = {p.section for p in placements}
        return IngredientSection.WHOLE in sections or (
            IngredientSection.LEFT in sections and IngredientSection.RIGHT in sections
        )

    @staticmethod
    def check_coverage(
        placements: List[PizzaIngredientPlacement], category: IngredientCategory
    ) -> None:
        """
        Raises:
            InvalidCompositionError: If the placements leave part of the pizza uncovered
        """
        if not PizzaService.covers_whole_pizza(placements):
            logger.warning(
                f"create_pizza rejected: {category.label}s do not cover entire pizza "
                f"sections={[p.section.value for p in placements]}"
            )
            raise InvalidCompositionError(
                details={
                    "category": category.value,
                    "sections": [p.section.value for p in placements],
                }
            )

    @staticmethod
    def create_pizza(
        db: Session,
        size: Union[PizzaSize, str],
        sauces: List[Union[PizzaIngredientPlacement, Mapping[str, Any]]],
        toppings: List[Union[PizzaIngredientPlacement, Mapping[str, Any]]],
    ) -> Pizza:
        """
        Validate a composition and persist it.

        Steps:
        1. Apply placement defaults
        2. Check sauce coverage and topping coverage independently
        3. Resolve every sauce and topping name against the active catalog
        4. Create the pizza with all placements in one transaction

        Nothing is written unless steps 1-3 succeed.

        Returns:
            The persisted Pizza with its placements (sauces first, then toppings)

        Raises:
            ServiceValidationError: If the size or a placement enum value is unknown
            InvalidCompositionError: If sauces or toppings do not cover the pizza
            NotFoundError: If a sauce or topping is not in the active catalog
        """
        try:
            size = _coerce(PizzaSize, size, None)
        except ValueError as e:
            raise ServiceValidationError(
                f"Invalid pizza size: {size}", details={"size": str(size)}
            ) from e
        if size is None:
            raise ServiceValidationError("Pizza size is required")

        sauces = [PizzaService.apply_defaults(p) for p in sauces]
        toppings = [PizzaService.apply_defaults(p) for p in toppings]

        PizzaService.check_coverage(sauces, IngredientCategory.SAUCE)
        PizzaService.check_coverage(toppings, IngredientCategory.TOPPING)

        sauce_ids = IngredientService.resolve_many(
            db, [p.name for p in sauces], IngredientCategory.SAUCE
        )
        topping_ids = IngredientService.resolve_many(
            db, [p.name for p in toppings], IngredientCategory.TOPPING
        )

        placements = [
            ResolvedPlacement(sauce_ids[p.name], p.amount, p.section) for p in sauces
        ] + [
            ResolvedPlacement(topping_ids[p.name], p.amount, p.section) for p in toppings
        ]

        pizza = PizzaRepository(db).create_with_placements(size, placements)
        logger.info(
            f"pizza_created pizza_id={pizza.pizza_id} size={size.value} "
            f"sauces={len(sauces)} toppings={len(toppings)}"
        )
        return pizza

    @staticmethod
    def get_pizza(db: Session, pizza_id: UUID) -> Pizza:
        """
        Raises:
            NotFoundError: If no pizza has this ID
        """
        pizza: Optional[Pizza] = PizzaRepository(db).get_by_id(pizza_id)
        if pizza is None:
            raise NotFoundError(
                f"Could not find pizza with ID {pizza_id}",
                details={"pizza_id": str(pizza_id)},
            )
        return pizza

    @staticmethod
    def delete_pizza(db: Session, pizza_id: UUID) -> None:
        """
        Delete a pizza and its placements.

        Raises:
            NotFoundError: If no pizza has this ID
        """
        if not PizzaRepository(db).delete(pizza_id):
            logger.warning(f"delete_pizza failed: pizza {pizza_id} not found")
            raise NotFoundError(
                f"Could not find pizza with ID {pizza_id}",
                details={"pizza_id": str(pizza_id)},
            )
        logger.info(f"pizza_deleted pizza_id={pizza_id}")
