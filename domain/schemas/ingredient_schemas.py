from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from domain.enums import IngredientCategory


class IngredientResponse(BaseModel):
    """Catalog ingredient as returned by the API"""

    ingredient_id: UUID
    name: str
    category: IngredientCategory
    deleted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
