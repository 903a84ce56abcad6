from datetime import date

import pytest

from smartstore.core.exceptions import NotFoundError, ValidationError
from smartstore.schemas.ingredient import IngredientCreate


def test_create_records_opening_stock_in_ledger(store, flour):
    assert flour.id is not None
    assert flour.quantity_in_stock == 1000
    assert flour.created_at == "2026-03-10 09:30:00"

    history = store.inventory.get_by_ingredient(flour.id)
    assert len(history) == 1
    assert history[0].transaction_type == "stock_in"
    assert history[0].quantity == 1000
    assert history[0].notes == "Opening stock"
    assert store.inventory.stock_from_ledger(flour.id) == 1000


def test_create_without_stock_writes_no_ledger_row(store):
    salt = store.ingredients.create(IngredientCreate(name="Salt", cost_per_unit="0.02"))

    assert salt.quantity_in_stock == 0
    assert salt.unit_type == "pcs"
    assert salt.low_stock_threshold == 10
    assert store.inventory.get_by_ingredient(salt.id) == []


@pytest.mark.parametrize(
    "data",
    [
        {"name": ""},
        {"name": "Butter", "cost_per_unit": -1},
        {"name": "Butter", "quantity_in_stock": -5},
        {"name": "Butter", "expiration_date": "next week"},
    ],
)
def test_invalid_input_writes_nothing(store, data):
    with pytest.raises(ValidationError):
        store.ingredients.create(data)
    assert store.ingredients.count() == 0


def test_update_fields(store, flour, clock):
    clock.advance(hours=1)
    updated = store.ingredients.update(flour.id, {"supplier": "Mill Co.", "low_stock_threshold": 50})

    assert updated.supplier == "Mill Co."
    assert updated.low_stock_threshold == 50
    assert updated.updated_at == "2026-03-10 10:30:00"
    assert store.ingredients.get_by_id(flour.id).supplier == "Mill Co."


def test_stock_cannot_be_set_directly(store, flour):
    with pytest.raises(ValidationError):
        store.ingredients.update(flour.id, {"quantity_in_stock": 5})
    assert store.ingredients.get_by_id(flour.id).quantity_in_stock == 1000


def test_required_field_cannot_be_cleared(store, flour):
    with pytest.raises(ValidationError):
        store.ingredients.update(flour.id, {"name": None})


def test_update_missing_or_inactive_raises_not_found(store, flour):
    with pytest.raises(NotFoundError):
        store.ingredients.update(9999, {"supplier": "x"})

    store.ingredients.soft_delete(flour.id)
    with pytest.raises(NotFoundError):
        store.ingredients.update(flour.id, {"supplier": "x"})


def test_soft_delete_hides_row_until_restored(store, flour, sugar):
    assert store.ingredients.soft_delete(flour.id) is True

    assert store.ingredients.get_by_id(flour.id) is None
    assert [i.name for i in store.ingredients.list()] == ["Sugar"]
    assert store.ingredients.exists(flour.id) is False
    assert store.ingredients.count() == 1

    historical = store.ingredients.get_by_id(flour.id, include_inactive=True)
    assert historical.is_active is False
    assert len(store.ingredients.list(include_inactive=True)) == 2

    assert store.ingredients.soft_delete(flour.id) is False
    assert store.ingredients.restore(flour.id) is True
    assert store.ingredients.get_by_id(flour.id).is_active is True
    assert store.ingredients.restore(flour.id) is False


def test_search_is_case_insensitive_substring(store, flour, sugar):
    store.ingredients.create({"name": "Brown sugar"})

    assert [i.name for i in store.ingredients.search("SUGAR")] == ["Brown sugar", "Sugar"]
    assert [i.name for i in store.ingredients.search("lou")] == ["Flour"]
    assert store.ingredients.search("%") == []


def test_search_skips_inactive(store, flour):
    store.ingredients.soft_delete(flour.id)
    assert store.ingredients.search("flour") == []


def test_low_stock(store, flour):
    yeast = store.ingredients.create(
        {"name": "Yeast", "unit_type": "g", "quantity_in_stock": 5, "low_stock_threshold": 20}
    )
    store.inventory.record_transaction(flour.id, {"transaction_type": "stock_out", "quantity": 850})

    low = store.ingredients.get_low_stock()
    assert [i.id for i in low] == [yeast.id, flour.id]


def test_expiring_soon_uses_clock(store):
    store.ingredients.create({"name": "Milk", "expiration_date": date(2026, 3, 15)})
    store.ingredients.create({"name": "Eggs", "expiration_date": "2026-03-30"})
    store.ingredients.create({"name": "Cream", "expiration_date": "2026-03-01"})
    store.ingredients.create({"name": "Salt"})

    assert [i.name for i in store.ingredients.get_expiring_soon()] == ["Cream", "Milk"]
    assert [i.name for i in store.ingredients.get_expiring_soon(days=30)] == ["Cream", "Milk", "Eggs"]

    with pytest.raises(ValidationError):
        store.ingredients.get_expiring_soon(days=-1)
