# smartstore/repositories/inventory.py
#
# Operator-facing access to the stock ledger. Rows are never updated or
# removed; corrections are new adjustment rows.

import logging
from datetime import date

from smartstore.core.exceptions import ValidationError
from smartstore.core.utils import iso_date
from smartstore.models.inventory_transactions import TRANSACTION_TYPES, InventoryTransaction
from smartstore.repositories.base import BaseRepository, parse
from smartstore.schemas.inventory import InventoryTransactionCreate
from smartstore.services import ledger

logger = logging.getLogger("smartstore")


class InventoryRepository(BaseRepository):
    model = InventoryTransaction
    entity = "Inventory transaction"

    def record_transaction(self, ingredient_id: int, data) -> InventoryTransaction:
        data = parse(InventoryTransactionCreate, data)

        with self.db.transaction() as session:
            transaction = ledger.record_transaction(
                session,
                ingredient_id,
                data.transaction_type,
                data.quantity,
                now=self.db.now(),
                unit_cost=data.unit_cost,
                reference_id=data.reference_id,
                notes=data.notes,
                allow_negative=self.settings.ALLOW_NEGATIVE_STOCK,
            )

        logger.info(
            f"{data.transaction_type} recorded for ingredient {ingredient_id}: {transaction.quantity:g}"
        )
        return transaction

    def _history(self, *criteria) -> list[InventoryTransaction]:
        with self.db.session() as session:
            return (
                self._query(session)
                .filter(*criteria)
                .order_by(InventoryTransaction.created_at.desc(), InventoryTransaction.id.desc())
                .all()
            )

    def get_by_ingredient(self, ingredient_id: int) -> list[InventoryTransaction]:
        return self._history(InventoryTransaction.ingredient_id == ingredient_id)

    def get_by_type(self, transaction_type: str) -> list[InventoryTransaction]:
        if transaction_type not in TRANSACTION_TYPES:
            raise ValidationError(f"Unknown transaction type '{transaction_type}'")
        return self._history(InventoryTransaction.transaction_type == transaction_type)

    def get_by_date_range(self, start_date: date | str, end_date: date | str) -> list[InventoryTransaction]:
        start, end = iso_date(start_date), iso_date(end_date)
        if start > end:
            raise ValidationError("start_date cannot be after end_date")
        # created_at is 'YYYY-MM-DD HH:MM:SS'; compare on the date prefix
        return self._history(
            InventoryTransaction.created_at >= f"{start} 00:00:00",
            InventoryTransaction.created_at <= f"{end} 23:59:59",
        )

    def get_by_reference(self, reference_id: int) -> list[InventoryTransaction]:
        return self._history(InventoryTransaction.reference_id == reference_id)

    def stock_from_ledger(self, ingredient_id: int) -> float:
        with self.db.session() as session:
            return ledger.ledger_balance(session, ingredient_id)

    def search(self, text: str):
        raise ValidationError("Inventory transactions are not searchable by name")

    def soft_delete(self, id: int) -> bool:
        raise ValidationError(
            "Inventory transactions are immutable; record an adjustment instead"
        )

    def restore(self, id: int) -> bool:
        raise ValidationError("Inventory transactions are immutable")
