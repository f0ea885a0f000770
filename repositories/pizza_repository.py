"""
Pizza Repository - Data access layer for pizzas and their ingredient placements
"""

from typing import List, NamedTuple, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from domain.enums import IngredientAmount, IngredientSection, PizzaSize
from domain.models.pizza import Pizza, PizzaIngredient
from repositories.base import BaseRepository, store_errors


class ResolvedPlacement(NamedTuple):
    """Placement whose ingredient name has been resolved to a catalog ID"""

    ingredient_id: UUID
    amount: IngredientAmount
    section: IngredientSection


class PizzaRepository(BaseRepository[Pizza]):
    """Repository for pizza data access"""

    def __init__(self, db: Session):
        super().__init__(db, Pizza)

    def get_by_id(self, pizza_id: UUID) -> Optional[Pizza]:
        """Get pizza by ID with its placements loaded"""
        with store_errors(self.db, "get pizza"):
            return self.db.query(Pizza).filter(Pizza.pizza_id == pizza_id).first()

    def count_placements(self, pizza_id: UUID) -> int:
        with store_errors(self.db, "count placements"):
            return (
                self.db.query(PizzaIngredient)
                .filter(PizzaIngredient.pizza_id == pizza_id)
                .count()
            )

    def create_with_placements(
        self, size: PizzaSize, placements: List[ResolvedPlacement]
    ) -> Pizza:
        """
        Create a pizza and all its placements in a single transaction.

        Placements keep the order they are given in. On any failure the
        transaction is rolled back, so no pizza or placement row remains.
        """
        pizza = Pizza(size=size)
        pizza.ingredients = [
            PizzaIngredient(
                ingredient_id=p.ingredient_id,
                amount=p.amount,
                section=p.section,
                position=position,
            )
            for position, p in enumerate(placements)
        ]

        with store_errors(self.db, "create pizza"):
            self.db.add(pizza)
            try:
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
            self.db.refresh(pizza)
        return pizza

    def delete(self, pizza_id: UUID) -> bool:
        """Delete a pizza and its placements; returns False if it does not exist"""
        with store_errors(self.db, "delete pizza"):
            pizza = self.db.query(Pizza).filter(Pizza.pizza_id == pizza_id).first()
            if pizza is None:
                return False
            self.db.delete(pizza)
            try:
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
        return True
