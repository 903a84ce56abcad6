from decimal import Decimal

import pytest

from smartstore.core.exceptions import ConstraintViolation, NotFoundError, ValidationError


def test_create_product(pandesal, pandesal_recipe):
    assert pandesal.selling_price == 5.0
    assert pandesal.recipe_id == pandesal_recipe.id
    assert pandesal.is_inventory_tracked is True
    assert pandesal.category == "food"


def test_recipe_reference_must_be_active(store, pandesal_recipe):
    with pytest.raises(ConstraintViolation):
        store.products.create({"name": "Ghost bun", "selling_price": 5, "recipe_id": 999})

    store.recipes.soft_delete(pandesal_recipe.id)
    with pytest.raises(ConstraintViolation):
        store.products.create(
            {"name": "Old bun", "selling_price": 5, "recipe_id": pandesal_recipe.id}
        )
    assert store.products.count() == 0


def test_invalid_category_or_price(store):
    with pytest.raises(ValidationError):
        store.products.create({"name": "Thing", "selling_price": 5, "category": "hardware"})
    with pytest.raises(ValidationError):
        store.products.create({"name": "Thing", "selling_price": -1})


def test_update_product(store, pandesal, iced_tea):
    updated = store.products.update(pandesal.id, {"selling_price": "6.505", "description": "Soft roll"})
    assert updated.selling_price == 6.51
    assert updated.description == "Soft roll"

    with pytest.raises(ConstraintViolation):
        store.products.update(pandesal.id, {"recipe_id": 999})
    with pytest.raises(NotFoundError):
        store.products.update(12345, {"name": "x"})

    unlinked = store.products.update(pandesal.id, {"recipe_id": None})
    assert unlinked.recipe_id is None


def test_margin_uses_recipe_total_cost(store, pandesal, iced_tea):
    margin = store.products.get_with_recipe(pandesal.id)
    assert margin.unit_cost == Decimal("3.30")
    assert margin.profit_margin == Decimal("1.70")
    assert margin.recipe.name == "Pandesal dough"

    tea = store.products.get_with_recipe(iced_tea.id)
    assert tea.recipe is None
    assert tea.unit_cost == Decimal("0.00")
    assert tea.profit_margin == Decimal("15.00")

    assert store.products.get_with_recipe(999) is None


def test_margin_ignores_deleted_recipe(store, pandesal, pandesal_recipe):
    store.recipes.soft_delete(pandesal_recipe.id)

    margin = store.products.get_with_recipe(pandesal.id)
    assert margin.recipe is None
    assert margin.unit_cost == Decimal("0.00")


def test_all_margins_sorted_by_name(store, pandesal, iced_tea):
    margins = store.products.get_all_with_profit_margins()
    assert [(m.name, m.profit_margin) for m in margins] == [
        ("Iced tea", Decimal("15.00")),
        ("Pandesal", Decimal("1.70")),
    ]


def test_category_queries(store, pandesal, iced_tea):
    cake = store.products.create({"name": "Ube cake", "category": "dessert", "selling_price": 120})

    assert [p.name for p in store.products.get_by_category("food")] == ["Pandesal"]
    assert [p.name for p in store.products.list(category="beverage")] == ["Iced tea"]
    assert [p.name for p in store.products.get_for_pos()] == ["Iced tea", "Ube cake", "Pandesal"]

    store.products.soft_delete(cake.id)
    assert store.products.get_by_category("dessert") == []

    with pytest.raises(ValidationError):
        store.products.get_by_category("hardware")


def test_list_rejects_unknown_filter(store, pandesal):
    with pytest.raises(ValidationError):
        store.products.list(colour="red")
