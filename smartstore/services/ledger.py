# =========================================================
# INVENTORY LEDGER
#
# Every stock movement is an immutable inventory_transactions row holding
# the signed delta. ingredients.quantity_in_stock is kept equal to the sum
# of those deltas, updated in the same transaction as the insert.
# =========================================================

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from smartstore.core.exceptions import (
    ConstraintViolation,
    InsufficientStockError,
    ValidationError,
)
from smartstore.core.utils import Number, to_decimal
from smartstore.models.ingredients import Ingredient
from smartstore.models.inventory_transactions import (
    TRANSACTION_TYPES,
    InventoryTransaction,
)

logger = logging.getLogger("smartstore")

# Quantities are kg, litres, pieces... six places is plenty and keeps
# float noise out of the stored balance.
QUANTITY_PLACES = 6


def stock_delta(transaction_type: str, quantity: float) -> float:
    if transaction_type not in TRANSACTION_TYPES:
        raise ValidationError(
            f"Unknown transaction type '{transaction_type}'. "
            f"Use one of: {', '.join(TRANSACTION_TYPES)}."
        )

    quantity = float(quantity)

    if transaction_type == "adjustment":
        if quantity == 0:
            raise ValidationError("Adjustment quantity cannot be zero")
        return round(quantity, QUANTITY_PLACES)

    if quantity <= 0:
        raise ValidationError(
            f"{transaction_type} quantity must be greater than zero"
        )

    if transaction_type == "stock_in":
        return round(quantity, QUANTITY_PLACES)
    return -round(quantity, QUANTITY_PLACES)


def record_transaction(
    session: Session,
    ingredient_id: int,
    transaction_type: str,
    quantity: float,
    *,
    now: str,
    unit_cost: Number | None = None,
    reference_id: int | None = None,
    notes: str | None = None,
    allow_negative: bool = True,
    allow_inactive: bool = False,
) -> InventoryTransaction:
    """
    Append one ledger row and move the ingredient's stock by the same delta.
    Runs inside the caller's transaction; nothing is committed here.
    """
    delta = stock_delta(transaction_type, quantity)

    ingredient = (
        session.query(Ingredient)
        .filter(Ingredient.id == ingredient_id)
        .first()
    )
    if not ingredient:
        raise ConstraintViolation(f"Ingredient {ingredient_id} not found")
    if not ingredient.is_active and not allow_inactive:
        raise ConstraintViolation(f"Ingredient '{ingredient.name}' is inactive")

    new_stock = round(float(ingredient.quantity_in_stock) + delta, QUANTITY_PLACES)

    if delta < 0 and new_stock < 0:
        if not allow_negative:
            raise InsufficientStockError(
                f"Insufficient stock for {ingredient.name}: "
                f"{ingredient.quantity_in_stock:g} {ingredient.unit_type} on hand, "
                f"{-delta:g} needed"
            )
        logger.warning(
            f"Stock for {ingredient.name} (id={ingredient.id}) goes negative: {new_stock:g}"
        )

    if unit_cost is None:
        unit_cost = ingredient.cost_per_unit

    transaction = InventoryTransaction(
        ingredient_id=ingredient.id,
        transaction_type=transaction_type,
        quantity=delta,
        unit_cost=float(to_decimal(unit_cost)),
        notes=notes,
        reference_id=reference_id,
        created_at=now,
        updated_at=now,
    )
    session.add(transaction)

    ingredient.quantity_in_stock = new_stock
    ingredient.updated_at = now

    session.flush()
    return transaction


def ledger_balance(session: Session, ingredient_id: int) -> float:
    total = (
        session.query(func.coalesce(func.sum(InventoryTransaction.quantity), 0))
        .filter(InventoryTransaction.ingredient_id == ingredient_id)
        .scalar()
    )
    return round(float(total or 0), QUANTITY_PLACES)
