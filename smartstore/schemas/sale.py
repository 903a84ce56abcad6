# schemas/sale.py

from pydantic import BaseModel, Field
from datetime import date
from typing import List, Literal
from decimal import Decimal


PaymentMethod = Literal["cash", "gcash", "maya", "card", "other"]


class SaleItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(..., gt=0)

    # Defaults to the product's current selling price
    unit_price: Decimal | None = Field(None, ge=0, lt=100_000_000)


class SaleCreate(BaseModel):
    items: List[SaleItemCreate] = Field(..., min_length=1)
    payment_method: PaymentMethod = "cash"

    # Defaults to the exact total (no change)
    amount_received: Decimal | None = Field(None, ge=0)

    discount_amount: Decimal = Field(Decimal("0"), ge=0)
    discount_percent: Decimal = Field(Decimal("0"), ge=0, le=100)
    notes: str | None = None


class SaleItemResponse(BaseModel):
    id: int
    sale_id: int
    product_id: int
    product_name: str | None = None
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

    class Config:
        from_attributes = True


class SaleResponse(BaseModel):
    id: int
    subtotal: Decimal
    discount_amount: Decimal
    discount_percent: Decimal
    total: Decimal
    payment_method: PaymentMethod
    amount_received: Decimal
    change_amount: Decimal
    notes: str | None
    created_at: str
    is_active: bool

    class Config:
        from_attributes = True


class SaleDetailResponse(SaleResponse):
    items: List[SaleItemResponse]


class DailySalesSummary(BaseModel):
    date: date
    total_sales: Decimal
    transaction_count: int
    average_transaction: Decimal
    total_discount: Decimal
