"""
Ingredient model - catalog of sauces and toppings.
Rows are never hard-deleted; removal sets deleted_at.
"""

from sqlalchemy import Column, Text, TIMESTAMP, Enum, Index, Uuid, text
from sqlalchemy.sql import func
import uuid

from domain.enums import IngredientCategory
from domain.models.database import Base


class Ingredient(Base):
    """
    Catalog ingredient (sauce or topping).

    Pizza associations reference ingredients by ingredient_id, never by name,
    because a name can be deleted and added again as a new row.
    """

    __tablename__ = "ingredient"

    ingredient_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    category = Column(
        Enum(IngredientCategory, name="ingredient_category"), nullable=False
    )
    deleted_at = Column(TIMESTAMP(timezone=True), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    # One active row per (name, category); soft-deleted rows are outside the index
    __table_args__ = (
        Index(
            "uq_ingredient_active_name_category",
            "name",
            "category",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None

    def __repr__(self):
        return (
            f"<Ingredient(id={self.ingredient_id}, name='{self.name}', "
            f"category={self.category})>"
        )
