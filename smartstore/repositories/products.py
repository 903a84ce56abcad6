# smartstore/repositories/products.py

import logging

from sqlalchemy import and_
from sqlalchemy.orm import Session

from smartstore.core.exceptions import ValidationError
from smartstore.core.utils import money, to_decimal
from smartstore.models.products import PRODUCT_CATEGORIES, Product
from smartstore.models.recipes import Recipe
from smartstore.repositories.base import BaseRepository, column_value, parse
from smartstore.schemas.product import (
    ProductCreate,
    ProductMarginResponse,
    ProductResponse,
    ProductUpdate,
)
from smartstore.schemas.recipe import RecipeResponse

logger = logging.getLogger("smartstore")


class ProductRepository(BaseRepository):
    model = Product
    entity = "Product"
    required_fields = ("name", "category", "selling_price", "is_inventory_tracked")

    def create(self, data) -> Product:
        data = parse(ProductCreate, data)

        with self.db.transaction() as session:
            if data.recipe_id is not None:
                self._require_active(session, Recipe, data.recipe_id, "Recipe")

            now = self.db.now()
            product = Product(
                name=data.name,
                description=data.description,
                category=data.category,
                selling_price=column_value(money(data.selling_price)),
                recipe_id=data.recipe_id,
                is_inventory_tracked=data.is_inventory_tracked,
                image_uri=data.image_uri,
                created_at=now,
                updated_at=now,
                is_active=True,
            )
            session.add(product)
            session.flush()

        logger.info(f"Product created: {product.name} (id={product.id})")
        return product

    def update(self, id: int, data) -> Product:
        changes = parse(ProductUpdate, data).model_dump(exclude_unset=True)

        with self.db.transaction() as session:
            product = self._get_active_or_raise(session, id)

            if changes.get("recipe_id") is not None:
                self._require_active(session, Recipe, changes["recipe_id"], "Recipe")
            if changes.get("selling_price") is not None:
                changes["selling_price"] = money(changes["selling_price"])

            self._apply_changes(product, changes, self.db.now())

        return product

    def get_by_category(self, category: str) -> list[Product]:
        if category not in PRODUCT_CATEGORIES:
            raise ValidationError(
                f"Unknown category '{category}'. Use one of: {', '.join(PRODUCT_CATEGORIES)}."
            )
        with self.db.session() as session:
            return (
                self._query(session)
                .filter(Product.category == category)
                .order_by(Product.name, Product.id)
                .all()
            )

    def get_for_pos(self) -> list[Product]:
        """Active products grouped by category for the register screen."""
        with self.db.session() as session:
            return (
                self._query(session)
                .order_by(Product.category, Product.name, Product.id)
                .all()
            )

    # =========================================================
    # Costing view
    # =========================================================

    def _with_recipe(self, session: Session):
        # Only an active recipe contributes cost
        return (
            session.query(Product, Recipe)
            .outerjoin(
                Recipe,
                and_(Recipe.id == Product.recipe_id, Recipe.is_active.is_(True)),
            )
        )

    @staticmethod
    def _margin(product: Product, recipe: Recipe | None) -> ProductMarginResponse:
        unit_cost = money(recipe.total_cost) if recipe else money(0)
        return ProductMarginResponse(
            **ProductResponse.model_validate(product).model_dump(),
            recipe=RecipeResponse.model_validate(recipe) if recipe else None,
            unit_cost=unit_cost,
            profit_margin=money(to_decimal(product.selling_price) - unit_cost),
        )

    def get_with_recipe(self, id: int) -> ProductMarginResponse | None:
        with self.db.session() as session:
            row = (
                self._with_recipe(session)
                .filter(Product.id == id, Product.is_active.is_(True))
                .first()
            )
            if not row:
                return None
            return self._margin(*row)

    def get_all_with_profit_margins(self) -> list[ProductMarginResponse]:
        with self.db.session() as session:
            rows = (
                self._with_recipe(session)
                .filter(Product.is_active.is_(True))
                .order_by(Product.name, Product.id)
                .all()
            )
            return [self._margin(product, recipe) for product, recipe in rows]
