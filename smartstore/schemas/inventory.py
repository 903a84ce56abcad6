from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


TransactionType = Literal["stock_in", "stock_out", "adjustment", "sale"]

# "sale" rows are only written by the sale recording flow
OperatorTransactionType = Literal["stock_in", "stock_out", "adjustment"]


class InventoryTransactionCreate(BaseModel):
    transaction_type: OperatorTransactionType
    quantity: float = Field(
        ...,
        description=(
            "stock_in/stock_out: amount moved (> 0). "
            "adjustment: signed correction (non-zero)."
        ),
    )
    unit_cost: Decimal | None = Field(None, ge=0)
    reference_id: int | None = None
    notes: str | None = None


class InventoryTransactionResponse(BaseModel):
    id: int
    ingredient_id: int
    transaction_type: TransactionType
    quantity: float
    unit_cost: Decimal | None
    notes: str | None
    reference_id: int | None
    created_at: str

    class Config:
        from_attributes = True
