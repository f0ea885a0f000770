"""Pizza and ingredient catalog routes"""

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import Annotated, List

from api.dependencies import get_db
from domain.enums import IngredientCategory
from domain.schemas.ingredient_schemas import IngredientResponse
from domain.schemas.pizza_schemas import CreatePizzaRequest, PizzaResponse
from services.ingredient_service import IngredientService
from services.pizza_service import PizzaService

router = APIRouter(prefix="/pizza", tags=["Pizza"])
logger = logging.getLogger("pizzeria.api.pizza")

IngredientName = Annotated[
    str, Path(min_length=1, max_length=100, description="Ingredient name")
]


# =============================================================================
# SAUCES
# =============================================================================


@router.get("/sauces", response_model=List[IngredientResponse])
def get_sauces(db: Session = Depends(get_db)):
    """List all sauces that can currently be ordered"""
    sauces = IngredientService.list_active(db, IngredientCategory.SAUCE)
    return [IngredientResponse.model_validate(s) for s in sauces]


@router.post(
    "/sauce/{name}",
    response_model=IngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_sauce(name: IngredientName, db: Session = Depends(get_db)):
    """Add a sauce to the catalog (name is stored lowercased)"""
    sauce = IngredientService.add(db, name, IngredientCategory.SAUCE)
    return IngredientResponse.model_validate(sauce)


@router.delete("/sauce/{name}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sauce(name: IngredientName, db: Session = Depends(get_db)):
    """Remove a sauce from the catalog; existing pizzas keep referencing it"""
    IngredientService.soft_delete(db, name, IngredientCategory.SAUCE)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# TOPPINGS
# =============================================================================


@router.get("/toppings", response_model=List[IngredientResponse])
def get_toppings(db: Session = Depends(get_db)):
    """List all toppings that can currently be ordered"""
    toppings = IngredientService.list_active(db, IngredientCategory.TOPPING)
    return [IngredientResponse.model_validate(t) for t in toppings]


@router.post(
    "/topping/{name}",
    response_model=IngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_topping(name: IngredientName, db: Session = Depends(get_db)):
    """Add a topping to the catalog (name is stored lowercased)"""
    topping = IngredientService.add(db, name, IngredientCategory.TOPPING)
    return IngredientResponse.model_validate(topping)


@router.delete("/topping/{name}", status_code=status.HTTP_204_NO_CONTENT)
def delete_topping(name: IngredientName, db: Session = Depends(get_db)):
    """Remove a topping from the catalog; existing pizzas keep referencing it"""
    IngredientService.soft_delete(db, name, IngredientCategory.TOPPING)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# PIZZAS
# =============================================================================


@router.post("", response_model=PizzaResponse, status_code=status.HTTP_201_CREATED)
def create_pizza(payload: CreatePizzaRequest, db: Session = Depends(get_db)):
    """
    Create a pizza from a size and lists of sauce and topping placements.

    Placements default to amount REGULAR and section WHOLE. Sauces must cover
    the whole pizza (one WHOLE placement, or LEFT and RIGHT), and so must
    toppings.

    Example:
        {
            "size": "LARGE",
            "sauces": [{"name": "tomato"}],
            "toppings": [
                {"name": "cheese", "section": "LEFT"},
                {"name": "olives", "section": "RIGHT", "amount": "EXTRA"}
            ]
        }
    """
    pizza = PizzaService.create_pizza(db, payload.size, payload.sauces, payload.toppings)
    return PizzaResponse.model_validate(pizza)


@router.get("/{pizza_id}", response_model=PizzaResponse)
def get_pizza(pizza_id: UUID, db: Session = Depends(get_db)):
    """Get a pizza with its sauces and toppings"""
    pizza = PizzaService.get_pizza(db, pizza_id)
    return PizzaResponse.model_validate(pizza)


@router.delete("/{pizza_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pizza(pizza_id: UUID, db: Session = Depends(get_db)):
    """Delete a pizza and its ingredient placements"""
    PizzaService.delete_pizza(db, pizza_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
