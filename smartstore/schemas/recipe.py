from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field


class RecipeItemCreate(BaseModel):
    ingredient_id: int
    quantity: float = Field(..., gt=0)
    unit_type: str = Field("pcs", min_length=1)


class RecipeItemUpdate(BaseModel):
    quantity: float | None = Field(None, gt=0)
    unit_type: str | None = Field(None, min_length=1)

    class Config:
        extra = "forbid"


class RecipeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    servings: int = Field(1, ge=1)
    items: List[RecipeItemCreate] = []

    class Config:
        str_strip_whitespace = True


class RecipeUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    servings: int | None = Field(None, ge=1)

    # When given, replaces the whole item list
    items: List[RecipeItemCreate] | None = None

    class Config:
        str_strip_whitespace = True
        extra = "forbid"


class RecipeResponse(BaseModel):
    id: int
    name: str
    description: str | None
    servings: int
    total_cost: Decimal
    cost_per_serving: Decimal
    created_at: str
    updated_at: str
    is_active: bool

    class Config:
        from_attributes = True


class RecipeItemResponse(BaseModel):
    id: int
    recipe_id: int
    ingredient_id: int
    ingredient_name: str
    quantity: float
    unit_type: str
    cost_per_unit: Decimal
    line_cost: Decimal
    is_active: bool


class RecipeDetailResponse(RecipeResponse):
    items: List[RecipeItemResponse]
