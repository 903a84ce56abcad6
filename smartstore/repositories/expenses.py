# smartstore/repositories/expenses.py

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from smartstore.core.config import Settings
from smartstore.core.exceptions import ValidationError
from smartstore.core.utils import iso_date, money, to_decimal
from smartstore.models.expenses import EXPENSE_CATEGORIES, RECURRENCE_TYPES, Expense
from smartstore.repositories.base import BaseRepository, column_value, parse
from smartstore.schemas.expense import CategoryTotalResponse, ExpenseCreate, ExpenseUpdate

logger = logging.getLogger("smartstore")


def daily_fixed_expenses(session: Session, settings: Settings) -> Decimal:
    """Recurring expenses expressed per day: daily as is, monthly spread over the month."""
    rows = (
        session.query(Expense.recurrence_type, Expense.amount)
        .filter(Expense.is_active.is_(True), Expense.is_recurring.is_(True))
        .all()
    )
    total = Decimal("0")
    for recurrence_type, amount in rows:
        if recurrence_type == "monthly":
            total += to_decimal(amount) / Decimal(settings.DAYS_PER_MONTH)
        elif recurrence_type == "daily":
            total += to_decimal(amount)
    return total


def _check_recurrence(is_recurring: bool, recurrence_type: str | None) -> None:
    allowed = " or ".join(RECURRENCE_TYPES)
    if recurrence_type is not None and recurrence_type not in RECURRENCE_TYPES:
        raise ValidationError(f"Unknown recurrence_type '{recurrence_type}'. Use {allowed}.")
    if is_recurring and recurrence_type is None:
        raise ValidationError(f"A recurring expense needs a recurrence_type ({allowed})")
    if not is_recurring and recurrence_type is not None:
        raise ValidationError("recurrence_type is only allowed on recurring expenses")


class ExpenseRepository(BaseRepository):
    model = Expense
    entity = "Expense"
    required_fields = ("name", "category", "amount", "is_recurring", "expense_date")

    def create(self, data) -> Expense:
        data = parse(ExpenseCreate, data)
        _check_recurrence(data.is_recurring, data.recurrence_type)

        with self.db.transaction() as session:
            now = self.db.now()
            expense = Expense(
                name=data.name,
                category=data.category,
                amount=column_value(money(data.amount)),
                is_recurring=data.is_recurring,
                recurrence_type=data.recurrence_type,
                expense_date=column_value(data.expense_date) or self.db.today(),
                notes=data.notes,
                created_at=now,
                updated_at=now,
                is_active=True,
            )
            session.add(expense)
            session.flush()

        logger.info(f"Expense recorded: {expense.name} {expense.amount:.2f} ({expense.category})")
        return expense

    def update(self, id: int, data) -> Expense:
        changes = parse(ExpenseUpdate, data).model_dump(exclude_unset=True)
        if changes.get("amount") is not None:
            changes["amount"] = money(changes["amount"])

        with self.db.transaction() as session:
            expense = self._get_active_or_raise(session, id)

            # Check the combination the row will end up with
            is_recurring = changes.get("is_recurring", expense.is_recurring)
            if "recurrence_type" in changes:
                recurrence_type = changes["recurrence_type"]
            elif is_recurring:
                recurrence_type = expense.recurrence_type
            else:
                recurrence_type = None
                changes["recurrence_type"] = None
            _check_recurrence(bool(is_recurring), recurrence_type)

            self._apply_changes(expense, changes, self.db.now())

        return expense

    def _dated(self, session: Session):
        return self._query(session).order_by(Expense.expense_date.desc(), Expense.id.desc())

    def get_by_date(self, day: date | str) -> list[Expense]:
        day = iso_date(day)
        with self.db.session() as session:
            return self._dated(session).filter(Expense.expense_date == day).all()

    def get_by_date_range(self, start_date: date | str, end_date: date | str) -> list[Expense]:
        start, end = iso_date(start_date), iso_date(end_date)
        if start > end:
            raise ValidationError("start_date cannot be after end_date")
        with self.db.session() as session:
            return (
                self._dated(session)
                .filter(Expense.expense_date >= start, Expense.expense_date <= end)
                .all()
            )

    def get_by_category(self, category: str) -> list[Expense]:
        if category not in EXPENSE_CATEGORIES:
            raise ValidationError(
                f"Unknown category '{category}'. Use one of: {', '.join(EXPENSE_CATEGORIES)}."
            )
        with self.db.session() as session:
            return self._dated(session).filter(Expense.category == category).all()

    def get_recurring_expenses(self) -> list[Expense]:
        with self.db.session() as session:
            return (
                self._query(session)
                .filter(Expense.is_recurring.is_(True))
                .order_by(Expense.name, Expense.id)
                .all()
            )

    def get_daily_total(self, day: date | str | None = None) -> Decimal:
        day = iso_date(day) if day is not None else self.db.today()
        with self.db.session() as session:
            total = (
                self._query(session)
                .with_entities(func.coalesce(func.sum(Expense.amount), 0))
                .filter(Expense.expense_date == day)
                .scalar()
            )
        return money(total)

    def get_category_breakdown(
        self,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[CategoryTotalResponse]:
        with self.db.session() as session:
            query = (
                self._query(session)
                .with_entities(Expense.category, func.sum(Expense.amount).label("total"))
            )
            if start_date is not None:
                query = query.filter(Expense.expense_date >= iso_date(start_date))
            if end_date is not None:
                query = query.filter(Expense.expense_date <= iso_date(end_date))

            rows = (
                query.group_by(Expense.category)
                .order_by(func.sum(Expense.amount).desc(), Expense.category)
                .all()
            )

        return [
            CategoryTotalResponse(category=category, total=money(total))
            for category, total in rows
        ]

    def get_daily_fixed_cost(self) -> Decimal:
        with self.db.session() as session:
            return money(daily_fixed_expenses(session, self.settings))
