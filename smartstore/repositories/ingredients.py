# smartstore/repositories/ingredients.py

import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from smartstore.core.exceptions import ValidationError
from smartstore.core.utils import to_decimal
from smartstore.models.ingredients import Ingredient
from smartstore.repositories.base import BaseRepository, column_value, parse
from smartstore.schemas.ingredient import IngredientCreate, IngredientUpdate
from smartstore.services import costing, ledger

logger = logging.getLogger("smartstore")


class IngredientRepository(BaseRepository):
    model = Ingredient
    entity = "Ingredient"
    required_fields = ("name", "cost_per_unit", "unit_type", "low_stock_threshold")

    def create(self, data) -> Ingredient:
        data = parse(IngredientCreate, data)

        with self.db.transaction() as session:
            now = self.db.now()
            ingredient = Ingredient(
                name=data.name,
                description=data.description,
                cost_per_unit=column_value(data.cost_per_unit),
                unit_type=data.unit_type,
                quantity_in_stock=0,
                low_stock_threshold=data.low_stock_threshold,
                supplier=data.supplier,
                expiration_date=column_value(data.expiration_date),
                created_at=now,
                updated_at=now,
                is_active=True,
            )
            session.add(ingredient)
            session.flush()

            # Opening stock goes through the ledger like any other movement
            if data.quantity_in_stock > 0:
                ledger.record_transaction(
                    session,
                    ingredient.id,
                    "stock_in",
                    data.quantity_in_stock,
                    now=now,
                    unit_cost=data.cost_per_unit,
                    notes="Opening stock",
                    allow_negative=self.settings.ALLOW_NEGATIVE_STOCK,
                )

        logger.info(f"Ingredient created: {ingredient.name} (id={ingredient.id})")
        return ingredient

    def update(self, id: int, data) -> Ingredient:
        changes = parse(IngredientUpdate, data).model_dump(exclude_unset=True)

        with self.db.transaction() as session:
            ingredient = self._get_active_or_raise(session, id)
            now = self.db.now()

            cost_changed = (
                "cost_per_unit" in changes
                and changes["cost_per_unit"] is not None
                and to_decimal(changes["cost_per_unit"]) != to_decimal(ingredient.cost_per_unit)
            )

            self._apply_changes(ingredient, changes, now)

            if cost_changed:
                costing.recompute_for_ingredient(session, ingredient.id, now)

        return ingredient

    def _on_soft_delete(self, session: Session, ingredient, now: str) -> None:
        costing.recompute_for_ingredient(session, ingredient.id, now)

    def _on_restore(self, session: Session, ingredient, now: str, deleted_at: str) -> None:
        costing.recompute_for_ingredient(session, ingredient.id, now)

    def get_low_stock(self) -> list[Ingredient]:
        with self.db.session() as session:
            return (
                self._query(session)
                .filter(Ingredient.quantity_in_stock <= Ingredient.low_stock_threshold)
                .order_by(Ingredient.quantity_in_stock.asc(), Ingredient.name)
                .all()
            )

    def get_expiring_soon(self, days: int | None = None) -> list[Ingredient]:
        """Active ingredients expiring within `days` from today, already expired included."""
        if days is None:
            days = self.settings.EXPIRING_SOON_DAYS
        if days < 0:
            raise ValidationError("days cannot be negative")

        limit = (date.fromisoformat(self.db.today()) + timedelta(days=days)).isoformat()

        with self.db.session() as session:
            return (
                self._query(session)
                .filter(
                    Ingredient.expiration_date.isnot(None),
                    Ingredient.expiration_date <= limit,
                )
                .order_by(Ingredient.expiration_date.asc(), Ingredient.name)
                .all()
            )
