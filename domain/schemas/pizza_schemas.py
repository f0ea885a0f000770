from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from domain.enums import IngredientAmount, IngredientSection, PizzaSize
from domain.schemas.ingredient_schemas import IngredientResponse
from domain.utils import normalize_ingredient_name


def _upper_enum_value(v):
    """Accept enum values in any case ("left" -> "LEFT")"""
    if isinstance(v, str):
        return v.strip().upper()
    return v


class PizzaIngredientPlacement(BaseModel):
    """
    Requested use of a catalog ingredient on a pizza.

    A missing or null amount defaults to REGULAR, a missing or null section
    to WHOLE. The name is stored in catalog form (lowercase).
    """

    name: str = Field(..., min_length=1, description="Sauce or topping name")
    amount: IngredientAmount = Field(
        default=IngredientAmount.REGULAR, description="LIGHT, REGULAR or EXTRA"
    )
    section: IngredientSection = Field(
        default=IngredientSection.WHOLE, description="WHOLE, LEFT or RIGHT"
    )

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        normalized = normalize_ingredient_name(v)
        if not normalized:
            raise ValueError("name must not be blank")
        return normalized

    @field_validator("amount", mode="before")
    @classmethod
    def default_amount(cls, v):
        if v is None or v == "":
            return IngredientAmount.REGULAR
        return _upper_enum_value(v)

    @field_validator("section", mode="before")
    @classmethod
    def default_section(cls, v):
        if v is None or v == "":
            return IngredientSection.WHOLE
        return _upper_enum_value(v)


class CreatePizzaRequest(BaseModel):
    """Body of POST /pizza"""

    size: PizzaSize
    sauces: List[PizzaIngredientPlacement]
    toppings: List[PizzaIngredientPlacement]

    @field_validator("size", mode="before")
    @classmethod
    def normalize_size(cls, v):
        return _upper_enum_value(v)


class PizzaIngredientResponse(BaseModel):
    ingredient_id: UUID
    amount: IngredientAmount
    section: IngredientSection
    position: int
    ingredient: IngredientResponse

    model_config = {"from_attributes": True}


class PizzaResponse(BaseModel):
    pizza_id: UUID
    size: PizzaSize
    created_at: Optional[datetime] = None
    ingredients: List[PizzaIngredientResponse]

    model_config = {"from_attributes": True}
