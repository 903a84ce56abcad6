# smartstore/repositories/recipes.py

import logging

from sqlalchemy.orm import Session

from smartstore.core.exceptions import NotFoundError
from smartstore.core.utils import money, to_decimal
from smartstore.models.ingredients import Ingredient
from smartstore.models.recipe_items import RecipeItem
from smartstore.models.recipes import Recipe
from smartstore.repositories.base import BaseRepository, parse
from smartstore.schemas.recipe import (
    RecipeCreate,
    RecipeDetailResponse,
    RecipeItemCreate,
    RecipeItemResponse,
    RecipeItemUpdate,
    RecipeResponse,
    RecipeUpdate,
)
from smartstore.services import costing

logger = logging.getLogger("smartstore")


class RecipeRepository(BaseRepository):
    model = Recipe
    entity = "Recipe"
    required_fields = ("name", "servings")

    # =========================================================
    # Recipes
    # =========================================================

    def create(self, data) -> Recipe:
        data = parse(RecipeCreate, data)

        with self.db.transaction() as session:
            now = self.db.now()
            recipe = Recipe(
                name=data.name,
                description=data.description,
                servings=data.servings,
                total_cost=0,
                cost_per_serving=0,
                created_at=now,
                updated_at=now,
                is_active=True,
            )
            session.add(recipe)
            session.flush()

            for item in data.items:
                self._insert_item(session, recipe.id, item, now)

            costing.recompute_recipe(session, recipe, now)

        logger.info(
            f"Recipe created: {recipe.name} (id={recipe.id}, cost={recipe.total_cost:.2f})"
        )
        return recipe

    def update(self, id: int, data) -> Recipe:
        data = parse(RecipeUpdate, data)
        changes = data.model_dump(exclude_unset=True)
        replace_items = "items" in changes and data.items is not None
        changes.pop("items", None)

        with self.db.transaction() as session:
            recipe = self._get_active_or_raise(session, id)
            now = self.db.now()

            self._apply_changes(recipe, changes, now)

            if replace_items:
                for item in self._active_items(session, recipe.id):
                    item.is_active = False
                    item.updated_at = now
                for item in data.items:
                    self._insert_item(session, recipe.id, item, now)

            costing.recompute_recipe(session, recipe, now)

        return recipe

    def recalculate_cost(self, id: int) -> Recipe:
        with self.db.transaction() as session:
            recipe = self._get_active_or_raise(session, id)
            costing.recompute_recipe(session, recipe, self.db.now())
        return recipe

    def _on_soft_delete(self, session: Session, recipe, now: str) -> None:
        # Marked items are the ones restore brings back
        for item in self._active_items(session, recipe.id):
            item.is_active = False
            item.deleted_with_recipe = True
            item.updated_at = now

    def _on_restore(self, session: Session, recipe, now: str, deleted_at: str) -> None:
        for item in self._items_deleted_with_recipe(session, recipe.id):
            item.is_active = True
            item.deleted_with_recipe = False
            item.updated_at = now
        costing.recompute_recipe(session, recipe, now)

    # =========================================================
    # Recipe items
    # =========================================================

    @staticmethod
    def _active_items(session: Session, recipe_id: int) -> list[RecipeItem]:
        return (
            session.query(RecipeItem)
            .filter(RecipeItem.recipe_id == recipe_id, RecipeItem.is_active.is_(True))
            .order_by(RecipeItem.id)
            .all()
        )

    @staticmethod
    def _items_deleted_with_recipe(session: Session, recipe_id: int) -> list[RecipeItem]:
        return (
            session.query(RecipeItem)
            .filter(
                RecipeItem.recipe_id == recipe_id,
                RecipeItem.is_active.is_(False),
                RecipeItem.deleted_with_recipe.is_(True),
            )
            .order_by(RecipeItem.id)
            .all()
        )

    def _insert_item(self, session: Session, recipe_id: int, item: RecipeItemCreate, now: str) -> RecipeItem:
        self._require_active(session, Ingredient, item.ingredient_id, "Ingredient")
        recipe_item = RecipeItem(
            recipe_id=recipe_id,
            ingredient_id=item.ingredient_id,
            quantity=item.quantity,
            unit_type=item.unit_type,
            created_at=now,
            updated_at=now,
            is_active=True,
        )
        session.add(recipe_item)
        session.flush()
        return recipe_item

    def _active_item_or_raise(
        self, session: Session, item_id: int, recipe_id: int | None = None
    ) -> tuple[RecipeItem, Recipe]:
        query = session.query(RecipeItem).filter(
            RecipeItem.id == item_id, RecipeItem.is_active.is_(True)
        )
        if recipe_id is not None:
            query = query.filter(RecipeItem.recipe_id == recipe_id)
        item = query.first()
        if not item:
            raise NotFoundError(f"Recipe item {item_id} not found")
        recipe = self._get_active_or_raise(session, item.recipe_id)
        return item, recipe

    def add_item(self, recipe_id: int, data) -> RecipeItem:
        data = parse(RecipeItemCreate, data)

        with self.db.transaction() as session:
            recipe = self._get_active_or_raise(session, recipe_id)
            now = self.db.now()
            item = self._insert_item(session, recipe.id, data, now)
            costing.recompute_recipe(session, recipe, now)

        return item

    def update_item(self, item_id: int, data, recipe_id: int | None = None) -> RecipeItem:
        changes = parse(RecipeItemUpdate, data).model_dump(exclude_unset=True)

        with self.db.transaction() as session:
            item, recipe = self._active_item_or_raise(session, item_id, recipe_id)
            now = self.db.now()

            for field, value in changes.items():
                if value is not None:
                    setattr(item, field, value)
            item.updated_at = now

            costing.recompute_recipe(session, recipe, now)

        return item

    def remove_item(self, item_id: int, recipe_id: int | None = None) -> bool:
        with self.db.transaction() as session:
            query = session.query(RecipeItem).filter(
                RecipeItem.id == item_id, RecipeItem.is_active.is_(True)
            )
            if recipe_id is not None:
                query = query.filter(RecipeItem.recipe_id == recipe_id)
            item = query.first()
            if not item:
                return False
            recipe = self._get_active_or_raise(session, item.recipe_id)
            now = self.db.now()
            item.is_active = False
            item.updated_at = now
            costing.recompute_recipe(session, recipe, now)

        return True

    def get_with_items(self, id: int, include_inactive: bool = False) -> RecipeDetailResponse | None:
        with self.db.session() as session:
            recipe = (
                self._query(session, include_inactive)
                .filter(Recipe.id == id)
                .first()
            )
            if not recipe:
                return None

            query = (
                session.query(RecipeItem, Ingredient)
                .join(Ingredient, Ingredient.id == RecipeItem.ingredient_id)
                .filter(RecipeItem.recipe_id == recipe.id)
            )
            if recipe.is_active:
                query = query.filter(RecipeItem.is_active.is_(True))
            else:
                # what a restore would bring back, not items removed before the delete
                query = query.filter(RecipeItem.deleted_with_recipe.is_(True))
            rows = query.order_by(RecipeItem.id).all()

            items = [
                RecipeItemResponse(
                    id=item.id,
                    recipe_id=item.recipe_id,
                    ingredient_id=item.ingredient_id,
                    ingredient_name=ingredient.name,
                    quantity=item.quantity,
                    unit_type=item.unit_type,
                    cost_per_unit=to_decimal(ingredient.cost_per_unit),
                    line_cost=money(to_decimal(item.quantity) * to_decimal(ingredient.cost_per_unit)),
                    is_active=item.is_active,
                )
                for item, ingredient in rows
            ]

            return RecipeDetailResponse(
                **RecipeResponse.model_validate(recipe).model_dump(),
                items=items,
            )
