# schemas/report.py

from pydantic import BaseModel
from datetime import date
from decimal import Decimal


class DailyReportResponse(BaseModel):
    date: date
    subtotal: Decimal
    total_discount: Decimal
    total_revenue: Decimal
    transaction_count: int
    average_order_value: Decimal
    cost_of_goods: Decimal
    total_expenses: Decimal
    labor_cost: Decimal
    net_profit: Decimal


class BreakEvenResponse(BaseModel):
    fixed_costs: Decimal
    average_selling_price: Decimal
    average_variable_cost: Decimal
    contribution_margin: Decimal

    # None when price does not cover variable cost (no break-even point)
    break_even_units: int | None
    break_even_revenue: Decimal | None
    is_defined: bool

    current_daily_units: Decimal
    is_above_break_even: bool


class BestSellerResponse(BaseModel):
    product_id: int
    product_name: str
    quantity_sold: int
    revenue: Decimal


class HourlySalesResponse(BaseModel):
    hour: int
    count: int
    revenue: Decimal
