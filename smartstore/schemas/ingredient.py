from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class IngredientCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None

    cost_per_unit: Decimal = Field(
        Decimal("0"),
        ge=0,
        lt=100_000_000,
        description="Cost of one unit (unit_type) of the ingredient",
    )
    unit_type: str = Field("pcs", min_length=1)

    quantity_in_stock: float = Field(
        0,
        ge=0,
        description="Opening stock. Recorded as a stock_in ledger entry.",
    )
    low_stock_threshold: float = Field(10, ge=0)

    supplier: str | None = None
    expiration_date: date | None = None

    class Config:
        str_strip_whitespace = True


class IngredientUpdate(BaseModel):
    # Stock is not editable here; use a stock_in/stock_out/adjustment entry
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    cost_per_unit: Decimal | None = Field(None, ge=0, lt=100_000_000)
    unit_type: str | None = Field(None, min_length=1)
    low_stock_threshold: float | None = Field(None, ge=0)
    supplier: str | None = None
    expiration_date: date | None = None

    class Config:
        str_strip_whitespace = True
        extra = "forbid"


class IngredientResponse(BaseModel):
    id: int
    name: str
    description: str | None
    cost_per_unit: Decimal
    unit_type: str
    quantity_in_stock: float
    low_stock_threshold: float
    supplier: str | None
    expiration_date: date | None
    created_at: str
    updated_at: str
    is_active: bool

    class Config:
        from_attributes = True
