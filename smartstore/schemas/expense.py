from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


ExpenseCategory = Literal["rent", "utilities", "supplies", "labor", "other"]
RecurrenceType = Literal["daily", "monthly"]


class ExpenseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: ExpenseCategory = "other"
    amount: Decimal = Field(..., ge=0, lt=100_000_000)
    is_recurring: bool = False
    recurrence_type: RecurrenceType | None = None
    expense_date: date | None = None
    notes: str | None = None

    class Config:
        str_strip_whitespace = True


class ExpenseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    category: ExpenseCategory | None = None
    amount: Decimal | None = Field(None, ge=0, lt=100_000_000)
    is_recurring: bool | None = None
    recurrence_type: RecurrenceType | None = None
    expense_date: date | None = None
    notes: str | None = None

    class Config:
        str_strip_whitespace = True
        extra = "forbid"


class ExpenseResponse(BaseModel):
    id: int
    name: str
    category: ExpenseCategory
    amount: Decimal
    is_recurring: bool
    recurrence_type: RecurrenceType | None
    expense_date: date
    notes: str | None
    created_at: str
    updated_at: str
    is_active: bool

    class Config:
        from_attributes = True


class CategoryTotalResponse(BaseModel):
    category: ExpenseCategory
    total: Decimal
