# smartstore/repositories/reports.py
#
# Read-only analytics derived from sales, recipes, expenses and employees.
# Each report is built from one session so its figures are consistent.

import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_CEILING

from sqlalchemy import Integer, and_, cast, func
from sqlalchemy.orm import Session

from smartstore.core.config import Settings, settings as default_settings
from smartstore.core.exceptions import ValidationError
from smartstore.core.utils import iso_date, money, safe_div, to_decimal
from smartstore.database import Database
from smartstore.models.expenses import Expense
from smartstore.models.products import Product
from smartstore.models.recipes import Recipe
from smartstore.models.sale_items import SaleItem
from smartstore.models.sales import Sale
from smartstore.repositories.employees import daily_labor_cost
from smartstore.repositories.expenses import daily_fixed_expenses
from smartstore.schemas.report import (
    BestSellerResponse,
    BreakEvenResponse,
    DailyReportResponse,
    HourlySalesResponse,
)

logger = logging.getLogger("smartstore")


class ReportRepository:
    def __init__(self, db: Database, settings: Settings | None = None):
        self.db = db
        self.settings = settings or default_settings

    def _today(self) -> date:
        return date.fromisoformat(self.db.today())

    @staticmethod
    def _window(query, start_date, end_date):
        if start_date is not None:
            query = query.filter(func.date(Sale.created_at) >= iso_date(start_date))
        if end_date is not None:
            query = query.filter(func.date(Sale.created_at) <= iso_date(end_date))
        if start_date is not None and end_date is not None and iso_date(start_date) > iso_date(end_date):
            raise ValidationError("start_date cannot be after end_date")
        return query

    # =========================================================
    # DAILY / WEEKLY
    # =========================================================

    def _daily_report(self, session: Session, day: str) -> DailyReportResponse:
        subtotal, discount, revenue, count = (
            session.query(
                func.coalesce(func.sum(Sale.subtotal), 0),
                func.coalesce(func.sum(Sale.discount_amount), 0),
                func.coalesce(func.sum(Sale.total), 0),
                func.count(Sale.id),
            )
            .filter(Sale.is_active.is_(True), func.date(Sale.created_at) == day)
            .one()
        )

        # Cost of goods: sold quantity x recipe cost of recipe-backed products
        cogs_rows = (
            session.query(SaleItem.quantity, Recipe.total_cost)
            .join(Sale, Sale.id == SaleItem.sale_id)
            .join(Product, Product.id == SaleItem.product_id)
            .join(Recipe, Recipe.id == Product.recipe_id)
            .filter(
                Sale.is_active.is_(True),
                SaleItem.is_active.is_(True),
                Recipe.is_active.is_(True),
                func.date(Sale.created_at) == day,
            )
            .all()
        )
        cogs = sum(
            (to_decimal(quantity) * to_decimal(cost) for quantity, cost in cogs_rows),
            Decimal("0"),
        )

        expenses = (
            session.query(func.coalesce(func.sum(Expense.amount), 0))
            .filter(Expense.is_active.is_(True), Expense.expense_date == day)
            .scalar()
        )
        labor = daily_labor_cost(session, self.settings)

        revenue = money(revenue)
        cogs, expenses, labor = money(cogs), money(expenses), money(labor)

        return DailyReportResponse(
            date=date.fromisoformat(day),
            subtotal=money(subtotal),
            total_discount=money(discount),
            total_revenue=revenue,
            transaction_count=count,
            average_order_value=money(safe_div(revenue, to_decimal(count))),
            cost_of_goods=cogs,
            total_expenses=expenses,
            labor_cost=labor,
            net_profit=revenue - cogs - expenses - labor,
        )

    def get_daily_report(self, day: date | str | None = None) -> DailyReportResponse:
        day = iso_date(day) if day is not None else self.db.today()
        with self.db.session() as session:
            return self._daily_report(session, day)

    def get_weekly_trend(self, today: date | str | None = None) -> list[DailyReportResponse]:
        """Seven daily reports ending today, oldest first."""
        end = date.fromisoformat(iso_date(today)) if today is not None else self._today()
        days = [(end - timedelta(days=offset)).isoformat() for offset in range(6, -1, -1)]

        with self.db.session() as session:
            return [self._daily_report(session, day) for day in days]

    # =========================================================
    # BREAK-EVEN
    # =========================================================

    def get_break_even_analysis(self) -> BreakEvenResponse:
        window = max(self.settings.BREAK_EVEN_WINDOW_DAYS, 1)
        today = self._today()
        window_start = (today - timedelta(days=window - 1)).isoformat()

        with self.db.session() as session:
            fixed = daily_fixed_expenses(session, self.settings) + daily_labor_cost(
                session, self.settings
            )

            # Price and cost both averaged over recipe-backed products only
            rows = (
                session.query(Product.selling_price, Recipe.total_cost)
                .join(
                    Recipe,
                    and_(Recipe.id == Product.recipe_id, Recipe.is_active.is_(True)),
                )
                .filter(Product.is_active.is_(True))
                .all()
            )

            units_sold = (
                session.query(func.coalesce(func.sum(SaleItem.quantity), 0))
                .join(Sale, Sale.id == SaleItem.sale_id)
                .filter(
                    Sale.is_active.is_(True),
                    SaleItem.is_active.is_(True),
                    func.date(Sale.created_at) >= window_start,
                    func.date(Sale.created_at) <= today.isoformat(),
                )
                .scalar()
            )

        n = Decimal(len(rows))
        avg_price = safe_div(sum((to_decimal(price) for price, _ in rows), Decimal("0")), n)
        avg_cost = safe_div(sum((to_decimal(cost) for _, cost in rows), Decimal("0")), n)
        margin = avg_price - avg_cost
        current_daily_units = to_decimal(units_sold) / Decimal(window)

        if margin <= 0:
            # Price does not cover variable cost: no volume ever breaks even
            units = None
            revenue = None
            is_defined = False
            logger.info("Break-even undefined: average price does not cover variable cost")
        else:
            units = int((fixed / margin).to_integral_value(rounding=ROUND_CEILING))
            revenue = money(Decimal(units) * avg_price)
            is_defined = True

        return BreakEvenResponse(
            fixed_costs=money(fixed),
            average_selling_price=money(avg_price),
            average_variable_cost=money(avg_cost),
            contribution_margin=money(margin),
            break_even_units=units,
            break_even_revenue=revenue,
            is_defined=is_defined,
            current_daily_units=money(current_daily_units),
            is_above_break_even=is_defined and current_daily_units > units,
        )

    # =========================================================
    # BEST SELLERS / PEAK HOURS
    # =========================================================

    def get_best_sellers(
        self,
        limit: int | None = None,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[BestSellerResponse]:
        if limit is None:
            limit = self.settings.BEST_SELLERS_LIMIT
        if limit < 1:
            raise ValidationError("limit must be at least 1")

        quantity_sold = func.sum(SaleItem.quantity).label("quantity_sold")

        with self.db.session() as session:
            query = (
                session.query(
                    SaleItem.product_id,
                    Product.name,
                    quantity_sold,
                    func.sum(SaleItem.subtotal).label("revenue"),
                )
                .join(Sale, Sale.id == SaleItem.sale_id)
                .join(Product, Product.id == SaleItem.product_id)
                .filter(Sale.is_active.is_(True), SaleItem.is_active.is_(True))
            )
            query = self._window(query, start_date, end_date)

            rows = (
                query.group_by(SaleItem.product_id, Product.name)
                .order_by(quantity_sold.desc(), SaleItem.product_id.asc())
                .limit(limit)
                .all()
            )

        return [
            BestSellerResponse(
                product_id=product_id,
                product_name=name,
                quantity_sold=int(quantity),
                revenue=money(revenue),
            )
            for product_id, name, quantity, revenue in rows
        ]

    def get_peak_hours(
        self,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[HourlySalesResponse]:
        hour = cast(func.strftime("%H", Sale.created_at), Integer).label("hour")

        with self.db.session() as session:
            query = (
                session.query(
                    hour,
                    func.count(Sale.id),
                    func.coalesce(func.sum(Sale.total), 0),
                )
                .filter(Sale.is_active.is_(True))
            )
            query = self._window(query, start_date, end_date)
            rows = query.group_by(hour).all()

        by_hour = {int(h): (count, total) for h, count, total in rows}
        return [
            HourlySalesResponse(
                hour=h,
                count=by_hour.get(h, (0, 0))[0],
                revenue=money(by_hour.get(h, (0, 0))[1]),
            )
            for h in range(24)
        ]
