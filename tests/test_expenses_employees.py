from datetime import date
from decimal import Decimal

import pytest

from smartstore.core.exceptions import NotFoundError, ValidationError
from smartstore.models.expenses import RECURRENCE_TYPES
from smartstore.repositories.expenses import _check_recurrence


# =========================================================
# Employees
# =========================================================

def test_daily_labor_cost(store):
    store.employees.create({"name": "Ana", "role": "cashier", "wage_type": "daily", "wage_amount": 500})
    store.employees.create({"name": "Ben", "wage_type": "hourly", "wage_amount": 50})
    cora = store.employees.create({"name": "Cora", "role": "owner", "wage_type": "monthly", "wage_amount": 15000})
    gone = store.employees.create({"name": "Dan", "wage_type": "daily", "wage_amount": 999})
    store.employees.soft_delete(gone.id)

    # 500 + 50*8 + 15000/30
    assert store.employees.get_daily_labor_cost() == Decimal("1400.00")
    assert [e.name for e in store.employees.get_active_employees()] == ["Ana", "Ben", "Cora"]

    store.employees.update(cora.id, {"wage_amount": 9000})
    assert store.employees.get_daily_labor_cost() == Decimal("1200.00")


def test_labor_cost_follows_settings(store, settings):
    store.employees.settings = settings.model_copy(update={"HOURS_PER_WORKDAY": 10})
    store.employees.create({"name": "Ben", "wage_type": "hourly", "wage_amount": 50})

    assert store.employees.get_daily_labor_cost() == Decimal("500.00")


def test_employee_validation(store):
    with pytest.raises(ValidationError):
        store.employees.create({"name": "Eve", "role": "manager"})
    with pytest.raises(ValidationError):
        store.employees.create({"name": "Eve", "wage_amount": -1})
    with pytest.raises(NotFoundError):
        store.employees.update(42, {"name": "Nobody"})


# =========================================================
# Expenses
# =========================================================

def test_expense_defaults_to_today(store):
    expense = store.expenses.create({"name": "Plastic bags", "category": "supplies", "amount": "45.5"})

    assert expense.expense_date == "2026-03-10"
    assert expense.amount == 45.50
    assert expense.is_recurring is False
    assert expense.recurrence_type is None


@pytest.mark.parametrize(
    "data",
    [
        {"name": "Rent", "amount": 100, "is_recurring": True},
        {"name": "Rent", "amount": 100, "recurrence_type": "monthly"},
        {"name": "Rent", "amount": 100, "is_recurring": True, "recurrence_type": "weekly"},
        {"name": "Rent", "amount": 100, "category": "marketing"},
        {"name": "Rent", "amount": -1},
    ],
)
def test_expense_validation(store, data):
    with pytest.raises(ValidationError):
        store.expenses.create(data)
    assert store.expenses.count() == 0


@pytest.mark.parametrize("recurrence_type", RECURRENCE_TYPES)
def test_recurrence_check_accepts_known_types(recurrence_type):
    _check_recurrence(True, recurrence_type)


def test_recurrence_check_rejects_unknown_type():
    with pytest.raises(ValidationError, match="daily or monthly"):
        _check_recurrence(True, "weekly")


def test_update_recurrence(store):
    rent = store.expenses.create(
        {"name": "Rent", "category": "rent", "amount": 3000, "is_recurring": True, "recurrence_type": "monthly"}
    )

    updated = store.expenses.update(rent.id, {"is_recurring": False})
    assert updated.recurrence_type is None

    with pytest.raises(ValidationError):
        store.expenses.update(rent.id, {"is_recurring": True})

    updated = store.expenses.update(rent.id, {"is_recurring": True, "recurrence_type": "daily"})
    assert (updated.is_recurring, updated.recurrence_type) == (True, "daily")


def test_expense_queries(store):
    store.expenses.create({"name": "Rice sack", "category": "supplies", "amount": 1200, "expense_date": date(2026, 3, 1)})
    store.expenses.create({"name": "Water bill", "category": "utilities", "amount": 350, "expense_date": "2026-03-05"})
    store.expenses.create({"name": "Ice", "category": "supplies", "amount": 80})
    store.expenses.create({"name": "Power", "category": "utilities", "amount": 40, "is_recurring": True, "recurrence_type": "daily"})
    store.expenses.create({"name": "Rent", "category": "rent", "amount": 6000, "is_recurring": True, "recurrence_type": "monthly"})

    assert [e.name for e in store.expenses.get_by_date("2026-03-01")] == ["Rice sack"]
    assert [e.name for e in store.expenses.get_by_date_range("2026-03-01", "2026-03-05")] == [
        "Water bill",
        "Rice sack",
    ]
    assert [e.name for e in store.expenses.get_by_category("utilities")] == ["Power", "Water bill"]
    assert [e.name for e in store.expenses.get_recurring_expenses()] == ["Power", "Rent"]

    assert store.expenses.get_daily_total() == Decimal("6120.00")
    assert store.expenses.get_daily_total("2026-03-04") == Decimal("0.00")

    # 40 daily + 6000 / 30
    assert store.expenses.get_daily_fixed_cost() == Decimal("240.00")

    breakdown = store.expenses.get_category_breakdown()
    assert [(c.category, c.total) for c in breakdown] == [
        ("rent", Decimal("6000.00")),
        ("supplies", Decimal("1280.00")),
        ("utilities", Decimal("390.00")),
    ]

    march_start = store.expenses.get_category_breakdown("2026-03-01", "2026-03-05")
    assert [(c.category, c.total) for c in march_start] == [
        ("supplies", Decimal("1200.00")),
        ("utilities", Decimal("350.00")),
    ]


def test_deleted_expense_is_excluded(store):
    expense = store.expenses.create({"name": "Ice", "amount": 80})
    store.expenses.soft_delete(expense.id)

    assert store.expenses.get_daily_total() == Decimal("0.00")
    assert store.expenses.get_category_breakdown() == []
