# smartstore/store.py
#
# Startup sequence: open the database, migrate it to the latest version,
# then build the repositories on top of the one handle.

import logging
from datetime import datetime
from typing import Callable, Iterable, Optional

from smartstore.core.config import Settings, settings as default_settings
from smartstore.core.exceptions import MigrationFailure
from smartstore.database import Database, open_database
from smartstore.migrations.base import Migration
from smartstore.migrations.engine import MigrationEngine
from smartstore.repositories.employees import EmployeeRepository
from smartstore.repositories.expenses import ExpenseRepository
from smartstore.repositories.ingredients import IngredientRepository
from smartstore.repositories.inventory import InventoryRepository
from smartstore.repositories.products import ProductRepository
from smartstore.repositories.recipes import RecipeRepository
from smartstore.repositories.reports import ReportRepository
from smartstore.repositories.sales import SaleRepository

logger = logging.getLogger("smartstore")


class Store:
    def __init__(self, database: Database, settings: Settings):
        self.database = database
        self.settings = settings

        self.ingredients = IngredientRepository(database, settings)
        self.inventory = InventoryRepository(database, settings)
        self.recipes = RecipeRepository(database, settings)
        self.products = ProductRepository(database, settings)
        self.sales = SaleRepository(database, settings)
        self.employees = EmployeeRepository(database, settings)
        self.expenses = ExpenseRepository(database, settings)
        self.reports = ReportRepository(database, settings)

    def close(self) -> None:
        self.database.close()


def bootstrap(
    settings: Optional[Settings] = None,
    *,
    database: Optional[Database] = None,
    migrations: Optional[Iterable[Migration]] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> Store:
    settings = settings or default_settings
    database = database or open_database(settings, clock=clock)

    try:
        version = MigrationEngine(database, migrations).run()
    except MigrationFailure:
        logger.error("[Database] Startup aborted: schema migration failed")
        database.close()
        raise

    logger.info(f"SmartStore ready (schema version {version}, {database.backend.name} backend)")
    return Store(database, settings)
