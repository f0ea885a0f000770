"""
Pizza and pizza-ingredient association models.
"""

from sqlalchemy import Column, Integer, TIMESTAMP, ForeignKey, Enum, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.enums import IngredientAmount, IngredientSection, PizzaSize
from domain.models.database import Base


class Pizza(Base):
    """A composed pizza"""

    __tablename__ = "pizza"

    pizza_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    size = Column(Enum(PizzaSize, name="pizza_size"), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    ingredients = relationship(
        "PizzaIngredient",
        back_populates="pizza",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PizzaIngredient.position",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Pizza(id={self.pizza_id}, size={self.size})>"


class PizzaIngredient(Base):
    """Placement of one catalog ingredient on a pizza"""

    __tablename__ = "pizza_ingredient"

    pizza_ingredient_id = Column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    pizza_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("pizza.pizza_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    ingredient_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("ingredient.ingredient_id"),
        nullable=False,
    )
    amount = Column(
        Enum(IngredientAmount, name="ingredient_amount"),
        nullable=False,
        default=IngredientAmount.REGULAR,
    )
    section = Column(
        Enum(IngredientSection, name="ingredient_section"),
        nullable=False,
        default=IngredientSection.WHOLE,
    )
    position = Column(Integer, nullable=False, default=0)

    pizza = relationship("Pizza", back_populates="ingredients")
    ingredient = relationship("Ingredient", lazy="joined")
