from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


EmployeeRole = Literal["owner", "cashier", "staff"]
WageType = Literal["hourly", "daily", "monthly"]


class EmployeeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: EmployeeRole = "staff"
    wage_type: WageType = "daily"
    wage_amount: Decimal = Field(Decimal("0"), ge=0)
    pin_hash: str | None = None

    class Config:
        str_strip_whitespace = True


class EmployeeUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    role: EmployeeRole | None = None
    wage_type: WageType | None = None
    wage_amount: Decimal | None = Field(None, ge=0)
    pin_hash: str | None = None

    class Config:
        str_strip_whitespace = True
        extra = "forbid"


class EmployeeResponse(BaseModel):
    id: int
    name: str
    role: EmployeeRole
    wage_type: WageType
    wage_amount: Decimal
    created_at: str
    updated_at: str
    is_active: bool

    class Config:
        from_attributes = True
