from datetime import date, datetime
from decimal import Decimal

import pytest

from smartstore.core.exceptions import ValidationError


def sell(store, product, quantity, **extra):
    return store.sales.record_sale(
        {"items": [{"product_id": product.id, "quantity": quantity}], **extra}
    )


def costed_product(store, name, price, cost):
    """Product whose recipe costs exactly `cost` per unit sold."""
    ingredient = store.ingredients.create({"name": f"{name} base", "cost_per_unit": cost})
    recipe = store.recipes.create(
        {"name": f"{name} recipe", "items": [{"ingredient_id": ingredient.id, "quantity": 1}]}
    )
    return store.products.create({"name": name, "selling_price": price, "recipe_id": recipe.id})


# =========================================================
# Daily / weekly
# =========================================================

def test_daily_report(store, pandesal, iced_tea):
    sell(store, pandesal, 2)
    sell(store, iced_tea, 1, discount_amount="5")
    store.expenses.create({"name": "LPG refill", "category": "supplies", "amount": 100})
    store.employees.create({"name": "Ana", "wage_type": "daily", "wage_amount": 500})

    report = store.reports.get_daily_report()

    assert report.date == date(2026, 3, 10)
    assert report.subtotal == Decimal("25.00")
    assert report.total_discount == Decimal("5.00")
    assert report.total_revenue == Decimal("20.00")
    assert report.transaction_count == 2
    assert report.average_order_value == Decimal("10.00")
    assert report.cost_of_goods == Decimal("6.60")
    assert report.total_expenses == Decimal("100.00")
    assert report.labor_cost == Decimal("500.00")
    assert report.net_profit == Decimal("-586.60")


def test_daily_report_excludes_voided_sales(store, pandesal):
    kept = sell(store, pandesal, 1)
    voided = sell(store, pandesal, 3)
    store.sales.void_sale(voided.id)

    report = store.reports.get_daily_report("2026-03-10")
    assert report.transaction_count == 1
    assert report.total_revenue == Decimal("5.00")
    assert report.cost_of_goods == Decimal("3.30")
    assert kept.id != voided.id


def test_empty_day_is_zero(store):
    report = store.reports.get_daily_report(date(2026, 1, 1))
    assert report.transaction_count == 0
    assert report.total_revenue == report.average_order_value == Decimal("0.00")
    assert report.net_profit == Decimal("0.00")


def test_weekly_trend_has_seven_days_oldest_first(store, pandesal, clock):
    clock.set(datetime(2026, 3, 8, 10, 0))
    sell(store, pandesal, 4)
    clock.set(datetime(2026, 3, 10, 17, 0))
    sell(store, pandesal, 1)

    trend = store.reports.get_weekly_trend()

    assert [r.date for r in trend] == [date(2026, 3, d) for d in range(4, 11)]
    assert [r.total_revenue for r in trend] == [Decimal("0.00")] * 4 + [
        Decimal("20.00"),
        Decimal("0.00"),
        Decimal("5.00"),
    ]


def test_weekly_trend_for_given_day(store):
    trend = store.reports.get_weekly_trend("2026-02-28")
    assert len(trend) == 7
    assert trend[0].date == date(2026, 2, 22)
    assert trend[-1].date == date(2026, 2, 28)


# =========================================================
# Break-even
# =========================================================

def test_break_even_example(store):
    costed_product(store, "Coffee", 50, 30)
    store.expenses.create(
        {
            "name": "Stall fees",
            "category": "rent",
            "amount": 10000,
            "is_recurring": True,
            "recurrence_type": "daily",
        }
    )

    result = store.reports.get_break_even_analysis()

    assert result.is_defined is True
    assert result.fixed_costs == Decimal("10000.00")
    assert result.average_selling_price == Decimal("50.00")
    assert result.average_variable_cost == Decimal("30.00")
    assert result.contribution_margin == Decimal("20.00")
    assert result.break_even_units == 500
    assert result.break_even_revenue == Decimal("25000.00")


def test_break_even_fixed_costs_from_recurring_expenses_and_labor(store):
    costed_product(store, "Lemonade", 30, 10)
    store.expenses.create(
        {"name": "Rent", "category": "rent", "amount": 3000, "is_recurring": True, "recurrence_type": "monthly"}
    )
    store.expenses.create({"name": "One-off repair", "amount": 999})
    store.employees.create({"name": "Ben", "wage_type": "hourly", "wage_amount": 50})
    store.employees.create({"name": "Cora", "wage_type": "monthly", "wage_amount": 15000})

    result = store.reports.get_break_even_analysis()

    # 3000/30 + 50*8 + 15000/30
    assert result.fixed_costs == Decimal("1000.00")
    assert result.break_even_units == 50
    assert result.break_even_revenue == Decimal("1500.00")


def test_break_even_ignores_products_without_recipe(store, iced_tea):
    costed_product(store, "Bread", 50, 30)
    store.products.create({"name": "Bottled water", "selling_price": 50})
    store.expenses.create(
        {"name": "Stall fees", "amount": 10000, "is_recurring": True, "recurrence_type": "daily"}
    )

    result = store.reports.get_break_even_analysis()

    assert result.average_selling_price == Decimal("50.00")
    assert result.average_variable_cost == Decimal("30.00")
    assert result.break_even_units == 500


def test_break_even_without_recipe_backed_products_is_undefined(store, iced_tea):
    result = store.reports.get_break_even_analysis()
    assert result.is_defined is False
    assert result.average_variable_cost == Decimal("0.00")


def test_break_even_rounds_units_up(store):
    costed_product(store, "Bun", 7, 4)
    store.expenses.create(
        {"name": "Power", "amount": 100, "is_recurring": True, "recurrence_type": "daily"}
    )
    # 100 / 3 = 33.3 -> 34
    assert store.reports.get_break_even_analysis().break_even_units == 34


@pytest.mark.parametrize("price, cost", [(30, 30), (20, 25)])
def test_break_even_undefined_when_margin_not_positive(store, price, cost):
    costed_product(store, "Loss leader", price, cost)

    result = store.reports.get_break_even_analysis()

    assert result.is_defined is False
    assert result.break_even_units is None
    assert result.break_even_revenue is None
    assert result.is_above_break_even is False


def test_break_even_without_products_is_undefined(store):
    result = store.reports.get_break_even_analysis()
    assert result.is_defined is False
    assert result.average_selling_price == Decimal("0.00")


def test_current_daily_units(store, clock):
    coffee = costed_product(store, "Coffee", 50, 30)

    sell(store, coffee, 60)
    clock.set(datetime(2026, 2, 8, 12, 0))
    sell(store, coffee, 500)  # outside the 30 day window
    clock.set(datetime(2026, 3, 10, 12, 0))

    result = store.reports.get_break_even_analysis()
    assert result.break_even_units == 0
    assert result.current_daily_units == Decimal("2.00")
    assert result.is_above_break_even is True


# =========================================================
# Best sellers / peak hours
# =========================================================

def test_best_sellers_order_and_ties(store, pandesal, iced_tea, clock):
    cake = store.products.create({"name": "Ube cake", "category": "dessert", "selling_price": 120})

    sell(store, cake, 5)
    sell(store, iced_tea, 3)
    sell(store, pandesal, 3)
    voided = sell(store, iced_tea, 10)
    store.sales.void_sale(voided.id)

    top = store.reports.get_best_sellers()
    assert [(b.product_name, b.quantity_sold) for b in top] == [
        ("Ube cake", 5),
        ("Pandesal", 3),
        ("Iced tea", 3),
    ]
    assert top[0].revenue == Decimal("600.00")

    assert [b.product_id for b in store.reports.get_best_sellers(limit=2)] == [cake.id, pandesal.id]


def test_best_sellers_date_window(store, pandesal, iced_tea, clock):
    clock.set(datetime(2026, 3, 9, 12, 0))
    sell(store, iced_tea, 9)
    clock.set(datetime(2026, 3, 10, 12, 0))
    sell(store, pandesal, 1)

    today = store.reports.get_best_sellers(start_date="2026-03-10", end_date="2026-03-10")
    assert [b.product_name for b in today] == ["Pandesal"]

    with pytest.raises(ValidationError):
        store.reports.get_best_sellers(limit=0)
    with pytest.raises(ValidationError):
        store.reports.get_best_sellers(start_date="2026-03-10", end_date="2026-03-01")


def test_peak_hours_has_24_slots(store, pandesal, clock):
    sell(store, pandesal, 1)
    sell(store, pandesal, 2)
    clock.set(datetime(2026, 3, 10, 14, 5))
    sell(store, pandesal, 4)

    hours = store.reports.get_peak_hours()

    assert [h.hour for h in hours] == list(range(24))
    assert (hours[9].count, hours[9].revenue) == (2, Decimal("15.00"))
    assert (hours[14].count, hours[14].revenue) == (1, Decimal("20.00"))
    assert sum(h.count for h in hours) == 3


def test_peak_hours_empty(store):
    hours = store.reports.get_peak_hours(start_date="2026-03-01", end_date="2026-03-31")
    assert len(hours) == 24
    assert all(h.count == 0 and h.revenue == Decimal("0.00") for h in hours)
