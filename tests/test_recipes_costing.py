from decimal import Decimal

import pytest

from smartstore.core.exceptions import ConstraintViolation, NotFoundError, ValidationError
from smartstore.schemas.recipe import RecipeItemCreate
from smartstore.services import costing


def costs(store, recipe_id):
    recipe = store.recipes.get_by_id(recipe_id, include_inactive=True)
    return recipe.total_cost, recipe.cost_per_serving


def test_create_computes_costs(store, pandesal_recipe):
    assert pandesal_recipe.total_cost == 3.30
    assert pandesal_recipe.cost_per_serving == 0.33


def test_recipe_without_items_costs_nothing(store):
    recipe = store.recipes.create({"name": "Placeholder"})
    assert (recipe.total_cost, recipe.cost_per_serving) == (0, 0)


def test_servings_must_be_positive(store):
    with pytest.raises(ValidationError):
        store.recipes.create({"name": "Broken", "servings": 0})
    with pytest.raises(ValidationError):
        store.recipes.create({"name": "Broken", "servings": None})
    assert store.recipes.count() == 0


def test_item_with_unknown_or_inactive_ingredient(store, flour):
    with pytest.raises(ConstraintViolation):
        store.recipes.create({"name": "Ghost", "items": [{"ingredient_id": 404, "quantity": 1}]})

    store.ingredients.soft_delete(flour.id)
    with pytest.raises(ConstraintViolation):
        store.recipes.create(
            {"name": "Stale", "items": [{"ingredient_id": flour.id, "quantity": 1}]}
        )
    assert store.recipes.count() == 0


def test_item_quantity_must_be_positive(store, flour):
    with pytest.raises(ValidationError):
        store.recipes.create({"name": "Bad", "items": [{"ingredient_id": flour.id, "quantity": 0}]})


def test_add_update_remove_item_recompute(store, pandesal_recipe, flour):
    butter = store.ingredients.create({"name": "Butter", "cost_per_unit": "0.40", "unit_type": "g"})

    item = store.recipes.add_item(pandesal_recipe.id, {"ingredient_id": butter.id, "quantity": 5})
    assert costs(store, pandesal_recipe.id) == (5.30, 0.53)

    store.recipes.update_item(item.id, {"quantity": 10})
    assert costs(store, pandesal_recipe.id) == (7.30, 0.73)

    assert store.recipes.remove_item(item.id) is True
    assert costs(store, pandesal_recipe.id) == (3.30, 0.33)
    assert store.recipes.remove_item(item.id) is False


def test_item_must_belong_to_recipe(store, pandesal_recipe):
    other = store.recipes.create({"name": "Other"})
    item_id = store.recipes.get_with_items(pandesal_recipe.id).items[0].id

    with pytest.raises(NotFoundError):
        store.recipes.update_item(item_id, {"quantity": 1}, recipe_id=other.id)
    assert store.recipes.remove_item(item_id, recipe_id=other.id) is False


def test_servings_change_recomputes(store, pandesal_recipe):
    store.recipes.update(pandesal_recipe.id, {"servings": 3})
    assert costs(store, pandesal_recipe.id) == (3.30, 1.10)


def test_update_replaces_items(store, pandesal_recipe, flour):
    store.recipes.update(
        pandesal_recipe.id,
        {"items": [{"ingredient_id": flour.id, "quantity": 100, "unit_type": "g"}]},
    )

    detail = store.recipes.get_with_items(pandesal_recipe.id)
    assert [(i.ingredient_name, i.quantity) for i in detail.items] == [("Flour", 100)]
    assert detail.total_cost == Decimal("5.0")


def test_ingredient_price_change_recomputes_every_recipe(store, pandesal_recipe, flour):
    roll = store.recipes.create(
        {"name": "Dinner roll", "servings": 4, "items": [{"ingredient_id": flour.id, "quantity": 80}]}
    )
    assert costs(store, roll.id) == (4.00, 1.00)

    store.ingredients.update(flour.id, {"cost_per_unit": "0.10"})

    assert costs(store, pandesal_recipe.id) == (5.80, 0.58)
    assert costs(store, roll.id) == (8.00, 2.00)


def test_deleted_ingredient_leaves_rollup_until_restored(store, pandesal_recipe, flour):
    store.ingredients.soft_delete(flour.id)
    assert costs(store, pandesal_recipe.id) == (0.80, 0.08)

    store.ingredients.restore(flour.id)
    assert costs(store, pandesal_recipe.id) == (3.30, 0.33)


def test_rounding_happens_once_on_full_precision_total(store):
    spice = store.ingredients.create({"name": "Spice", "cost_per_unit": "0.333"})
    recipe = store.recipes.create(
        {"name": "Rub", "servings": 3, "items": [{"ingredient_id": spice.id, "quantity": 3}]}
    )
    # 0.999 -> 1.00 total, 0.333 -> 0.33 per serving
    assert (recipe.total_cost, recipe.cost_per_serving) == (1.00, 0.33)


def test_soft_delete_and_restore_recipe_with_items(store, pandesal_recipe, flour, clock):
    butter = store.ingredients.create({"name": "Butter", "cost_per_unit": "0.40"})
    extra = store.recipes.add_item(pandesal_recipe.id, {"ingredient_id": butter.id, "quantity": 1})
    store.recipes.remove_item(extra.id)

    clock.advance(minutes=5)
    assert store.recipes.soft_delete(pandesal_recipe.id) is True
    assert store.recipes.get_with_items(pandesal_recipe.id) is None

    deleted = store.recipes.get_with_items(pandesal_recipe.id, include_inactive=True)
    # only the items that went down with the recipe
    assert [i.ingredient_name for i in deleted.items] == ["Flour", "Sugar"]
    assert all(not item.is_active for item in deleted.items)

    clock.advance(minutes=5)
    assert store.recipes.restore(pandesal_recipe.id) is True

    restored = store.recipes.get_with_items(pandesal_recipe.id)
    # the item removed before the delete stays removed
    assert [i.ingredient_name for i in restored.items] == ["Flour", "Sugar"]
    assert restored.total_cost == Decimal("3.3")


def test_item_removed_in_same_second_as_delete_stays_removed(store, pandesal_recipe):
    sugar_item = store.recipes.get_with_items(pandesal_recipe.id).items[1]

    # clock does not move between the removal, the delete and the restore
    assert store.recipes.remove_item(sugar_item.id) is True
    assert costs(store, pandesal_recipe.id) == (2.50, 0.25)
    store.recipes.soft_delete(pandesal_recipe.id)

    deleted = store.recipes.get_with_items(pandesal_recipe.id, include_inactive=True)
    assert [i.ingredient_name for i in deleted.items] == ["Flour"]

    store.recipes.restore(pandesal_recipe.id)

    restored = store.recipes.get_with_items(pandesal_recipe.id)
    assert [i.ingredient_name for i in restored.items] == ["Flour"]
    assert restored.total_cost == Decimal("2.50")


def test_get_with_items_line_costs(store, pandesal_recipe):
    detail = store.recipes.get_with_items(pandesal_recipe.id)

    assert [(i.ingredient_name, i.line_cost) for i in detail.items] == [
        ("Flour", Decimal("2.50")),
        ("Sugar", Decimal("0.80")),
    ]
    assert store.recipes.get_with_items(999) is None


def test_recalculate_cost(store, pandesal_recipe, flour):
    store.database.run("UPDATE recipes SET total_cost = 99 WHERE id = :id", {"id": pandesal_recipe.id})

    recipe = store.recipes.recalculate_cost(pandesal_recipe.id)
    assert recipe.total_cost == 3.30

    with pytest.raises(NotFoundError):
        store.recipes.recalculate_cost(999)


def test_calculate_total_cost_is_full_precision(store, flour, sugar):
    with store.database.session() as session:
        total = costing.calculate_total_cost(
            session,
            [
                RecipeItemCreate(ingredient_id=flour.id, quantity=3),
                RecipeItemCreate(ingredient_id=sugar.id, quantity=0.5),
            ],
        )
    assert total == Decimal("0.19")


def test_search_recipes(store, pandesal_recipe):
    store.recipes.create({"name": "Ensaymada"})
    assert [r.name for r in store.recipes.search("pandesal")] == ["Pandesal dough"]
