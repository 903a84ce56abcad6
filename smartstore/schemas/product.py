from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from smartstore.schemas.recipe import RecipeResponse


ProductCategory = Literal["food", "beverage", "dessert", "snack", "other"]


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    category: ProductCategory = "other"

    selling_price: Decimal = Field(
        ...,
        ge=0,
        lt=100_000_000,
        description="Selling price must be below 100 million"
    )

    recipe_id: int | None = None
    is_inventory_tracked: bool = True
    image_uri: str | None = None

    class Config:
        str_strip_whitespace = True


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    category: ProductCategory | None = None
    selling_price: Decimal | None = Field(None, ge=0, lt=100_000_000)
    recipe_id: int | None = None
    is_inventory_tracked: bool | None = None
    image_uri: str | None = None

    class Config:
        str_strip_whitespace = True
        extra = "forbid"


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str | None
    category: ProductCategory
    selling_price: Decimal
    recipe_id: int | None
    is_inventory_tracked: bool
    image_uri: str | None
    created_at: str
    updated_at: str
    is_active: bool

    class Config:
        from_attributes = True


class ProductMarginResponse(ProductResponse):
    recipe: RecipeResponse | None = None
    unit_cost: Decimal
    profit_margin: Decimal
