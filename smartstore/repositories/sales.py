# smartstore/repositories/sales.py
#
# Recording a sale is the main multi-row write of the system: the sale,
# its items and the ingredient deductions commit together or not at all.

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from smartstore.core.exceptions import ValidationError
from smartstore.core.utils import iso_date, money, safe_div, to_decimal
from smartstore.models.ingredients import Ingredient
from smartstore.models.inventory_transactions import InventoryTransaction
from smartstore.models.products import Product
from smartstore.models.recipe_items import RecipeItem
from smartstore.models.recipes import Recipe
from smartstore.models.sale_items import SaleItem
from smartstore.models.sales import PAYMENT_METHODS, Sale
from smartstore.repositories.base import BaseRepository, column_value, parse
from smartstore.schemas.sale import (
    DailySalesSummary,
    SaleCreate,
    SaleDetailResponse,
    SaleItemResponse,
    SaleResponse,
)
from smartstore.services import ledger

logger = logging.getLogger("smartstore")


class SaleRepository(BaseRepository):
    model = Sale
    entity = "Sale"

    # =========================================================
    # RECORD SALE
    # =========================================================

    def record_sale(self, data) -> Sale:
        data = parse(SaleCreate, data)

        with self.db.transaction() as session:
            now = self.db.now()

            # Validate everything before the first insert
            lines = []
            subtotal = Decimal("0")
            for item in data.items:
                product = self._require_active(session, Product, item.product_id, "Product")
                unit_price = money(
                    item.unit_price if item.unit_price is not None else product.selling_price
                )
                line_total = money(unit_price * item.quantity)
                subtotal += line_total
                lines.append((product, item.quantity, unit_price, line_total))

            subtotal = money(subtotal)
            discount = money(
                data.discount_amount + subtotal * data.discount_percent / Decimal("100")
            )
            if discount > subtotal:
                raise ValidationError(
                    f"Discount {discount} exceeds the subtotal {subtotal}"
                )
            total = money(subtotal - discount)

            received = money(data.amount_received) if data.amount_received is not None else total
            if received < total:
                raise ValidationError(
                    f"Amount received {received} is less than the total {total}"
                )

            sale = Sale(
                subtotal=column_value(subtotal),
                discount_amount=column_value(discount),
                discount_percent=column_value(data.discount_percent),
                total=column_value(total),
                payment_method=data.payment_method,
                amount_received=column_value(received),
                change_amount=column_value(money(received - total)),
                notes=data.notes,
                created_at=now,
                updated_at=now,
                is_active=True,
            )
            session.add(sale)
            session.flush()

            for product, quantity, unit_price, line_total in lines:
                session.add(
                    SaleItem(
                        sale_id=sale.id,
                        product_id=product.id,
                        quantity=quantity,
                        unit_price=column_value(unit_price),
                        subtotal=column_value(line_total),
                        created_at=now,
                        updated_at=now,
                        is_active=True,
                    )
                )
            session.flush()

            for product, quantity, _, _ in lines:
                self._consume_ingredients(session, sale.id, product, quantity, now)

        logger.info(
            f"Sale {sale.id} recorded: {len(lines)} line(s), total {total} via {sale.payment_method}"
        )
        return sale

    def _consume_ingredients(
        self,
        session: Session,
        sale_id: int,
        product: Product,
        quantity: int,
        now: str,
    ) -> None:
        if not product.is_inventory_tracked or product.recipe_id is None:
            return

        recipe = (
            session.query(Recipe)
            .filter(Recipe.id == product.recipe_id, Recipe.is_active.is_(True))
            .first()
        )
        if not recipe:
            return

        items = (
            session.query(RecipeItem)
            .join(Ingredient, Ingredient.id == RecipeItem.ingredient_id)
            .filter(
                RecipeItem.recipe_id == recipe.id,
                RecipeItem.is_active.is_(True),
                Ingredient.is_active.is_(True),
            )
            .order_by(RecipeItem.id)
            .all()
        )

        for item in items:
            ledger.record_transaction(
                session,
                item.ingredient_id,
                "sale",
                item.quantity * quantity,
                now=now,
                reference_id=sale_id,
                notes=f"Sale #{sale_id}: {product.name} x{quantity}",
                allow_negative=self.settings.ALLOW_NEGATIVE_STOCK,
            )

    # =========================================================
    # VOID
    # =========================================================

    def void_sale(self, id: int, restock: bool = True) -> bool:
        """
        Soft-delete a sale and its items. With restock, every ingredient
        deducted by the sale gets a compensating adjustment row.
        """
        with self.db.transaction() as session:
            sale = self._query(session).filter(Sale.id == id).first()
            if not sale:
                return False

            now = self.db.now()
            sale.is_active = False
            sale.updated_at = now
            self._deactivate_items(session, sale.id, now)

            restocked = 0
            if restock:
                deductions = (
                    session.query(InventoryTransaction, Ingredient)
                    .join(Ingredient, Ingredient.id == InventoryTransaction.ingredient_id)
                    .filter(
                        InventoryTransaction.reference_id == sale.id,
                        InventoryTransaction.transaction_type == "sale",
                    )
                    .order_by(InventoryTransaction.id)
                    .all()
                )
                for deduction, ingredient in deductions:
                    if not ingredient.is_active:
                        # Stock still goes back so a later restore sees the right balance
                        logger.warning(
                            f"Restocking inactive ingredient {ingredient.name} "
                            f"(id={ingredient.id}) for void of sale #{sale.id}"
                        )
                    ledger.record_transaction(
                        session,
                        deduction.ingredient_id,
                        "adjustment",
                        -deduction.quantity,
                        now=now,
                        unit_cost=deduction.unit_cost,
                        reference_id=sale.id,
                        notes=f"Void of sale #{sale.id}",
                        allow_inactive=True,
                    )
                    restocked += 1

        logger.info(f"Sale {id} voided ({restocked} ingredient(s) restocked)")
        return True

    @staticmethod
    def _deactivate_items(session: Session, sale_id: int, now: str) -> None:
        items = (
            session.query(SaleItem)
            .filter(SaleItem.sale_id == sale_id, SaleItem.is_active.is_(True))
            .all()
        )
        for item in items:
            item.is_active = False
            item.updated_at = now

    def _on_soft_delete(self, session: Session, sale, now: str) -> None:
        self._deactivate_items(session, sale.id, now)

    def restore(self, id: int) -> bool:
        raise ValidationError("A voided sale cannot be restored; record a new sale")

    def search(self, text: str):
        raise ValidationError("Sales are not searchable by name")

    # =========================================================
    # READS
    # =========================================================

    def get_with_items(self, id: int, include_inactive: bool = False) -> SaleDetailResponse | None:
        with self.db.session() as session:
            sale = self._query(session, include_inactive).filter(Sale.id == id).first()
            if not sale:
                return None

            query = (
                session.query(SaleItem, Product.name)
                .outerjoin(Product, Product.id == SaleItem.product_id)
                .filter(SaleItem.sale_id == sale.id)
            )
            if sale.is_active:
                query = query.filter(SaleItem.is_active.is_(True))

            items = [
                SaleItemResponse(
                    id=item.id,
                    sale_id=item.sale_id,
                    product_id=item.product_id,
                    product_name=product_name,
                    quantity=item.quantity,
                    unit_price=money(item.unit_price),
                    subtotal=money(item.subtotal),
                )
                for item, product_name in query.order_by(SaleItem.id).all()
            ]

            return SaleDetailResponse(
                **SaleResponse.model_validate(sale).model_dump(),
                items=items,
            )

    def get_by_date_range(self, start_date: date | str, end_date: date | str) -> list[Sale]:
        start, end = iso_date(start_date), iso_date(end_date)
        if start > end:
            raise ValidationError("start_date cannot be after end_date")

        with self.db.session() as session:
            return (
                self._query(session)
                .filter(
                    func.date(Sale.created_at) >= start,
                    func.date(Sale.created_at) <= end,
                )
                .order_by(Sale.created_at.desc(), Sale.id.desc())
                .all()
            )

    def get_by_payment_method(self, payment_method: str) -> list[Sale]:
        if payment_method not in PAYMENT_METHODS:
            raise ValidationError(
                f"Unknown payment method '{payment_method}'. "
                f"Use one of: {', '.join(PAYMENT_METHODS)}."
            )
        with self.db.session() as session:
            return (
                self._query(session)
                .filter(Sale.payment_method == payment_method)
                .order_by(Sale.created_at.desc(), Sale.id.desc())
                .all()
            )

    def get_today(self) -> list[Sale]:
        today = self.db.today()
        return self.get_by_date_range(today, today)

    def get_daily_summary(self, day: date | str | None = None) -> DailySalesSummary:
        day = iso_date(day) if day is not None else self.db.today()

        with self.db.session() as session:
            total, count, discount = (
                session.query(
                    func.coalesce(func.sum(Sale.total), 0),
                    func.count(Sale.id),
                    func.coalesce(func.sum(Sale.discount_amount), 0),
                )
                .filter(
                    Sale.is_active.is_(True),
                    func.date(Sale.created_at) == day,
                )
                .one()
            )

        total = money(total)
        return DailySalesSummary(
            date=date.fromisoformat(day),
            total_sales=total,
            transaction_count=count,
            average_transaction=money(safe_div(total, to_decimal(count))),
            total_discount=money(discount),
        )
