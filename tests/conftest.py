# tests/conftest.py

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from smartstore.core.config import Settings
from smartstore.store import bootstrap


class FakeClock:
    """Settable clock handed to the database in place of datetime.now."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def set(self, moment: datetime) -> None:
        self.current = moment

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 10, 9, 30, 0))


@pytest.fixture
def settings():
    return Settings(DATABASE_BACKEND="memory", _env_file=None)


@pytest.fixture
def store(settings, clock):
    store = bootstrap(settings, clock=clock)
    yield store
    store.close()


@pytest.fixture
def client(store):
    from smartstore.main import create_app

    with TestClient(create_app(store)) as test_client:
        yield test_client


# =========================================================
# Sample data: a bakery selling pandesal
# =========================================================

@pytest.fixture
def flour(store):
    return store.ingredients.create(
        {
            "name": "Flour",
            "cost_per_unit": "0.05",
            "unit_type": "g",
            "quantity_in_stock": 1000,
            "low_stock_threshold": 200,
        }
    )


@pytest.fixture
def sugar(store):
    return store.ingredients.create(
        {
            "name": "Sugar",
            "cost_per_unit": "0.08",
            "unit_type": "g",
            "quantity_in_stock": 500,
            "low_stock_threshold": 100,
        }
    )


@pytest.fixture
def pandesal_recipe(store, flour, sugar):
    # 50 g flour (2.50) + 10 g sugar (0.80) = 3.30 for 10 pieces
    return store.recipes.create(
        {
            "name": "Pandesal dough",
            "servings": 10,
            "items": [
                {"ingredient_id": flour.id, "quantity": 50, "unit_type": "g"},
                {"ingredient_id": sugar.id, "quantity": 10, "unit_type": "g"},
            ],
        }
    )


@pytest.fixture
def pandesal(store, pandesal_recipe):
    return store.products.create(
        {
            "name": "Pandesal",
            "category": "food",
            "selling_price": "5.00",
            "recipe_id": pandesal_recipe.id,
        }
    )


@pytest.fixture
def iced_tea(store):
    # Sold from a pre-made batch: no recipe, no stock deduction
    return store.products.create(
        {
            "name": "Iced tea",
            "category": "beverage",
            "selling_price": "15.00",
            "is_inventory_tracked": False,
        }
    )
