# =========================================================
# COSTING ENGINE
#
# recipe.total_cost = sum(item.quantity * ingredient.cost_per_unit) over
# active items of active ingredients; cost_per_serving = total / servings.
# Sums run on Decimal at full precision; only the stored values are
# rounded to 2 places. Always called inside the triggering write.
# =========================================================

import logging
from decimal import Decimal
from typing import Iterable

from sqlalchemy.orm import Session

from smartstore.core.exceptions import ConstraintViolation, ValidationError
from smartstore.core.utils import money_float, to_decimal
from smartstore.models.ingredients import Ingredient
from smartstore.models.recipe_items import RecipeItem
from smartstore.models.recipes import Recipe

logger = logging.getLogger("smartstore")


def calculate_total_cost(session: Session, items: Iterable) -> Decimal:
    """Full-precision cost of prospective items (anything with ingredient_id and quantity)."""
    total = Decimal("0")
    for item in items:
        ingredient = (
            session.query(Ingredient)
            .filter(
                Ingredient.id == item.ingredient_id,
                Ingredient.is_active.is_(True),
            )
            .first()
        )
        if not ingredient:
            raise ConstraintViolation(
                f"Ingredient {item.ingredient_id} not found or inactive"
            )
        total += to_decimal(item.quantity) * to_decimal(ingredient.cost_per_unit)
    return total


def current_total_cost(session: Session, recipe_id: int) -> Decimal:
    rows = (
        session.query(RecipeItem.quantity, Ingredient.cost_per_unit)
        .join(Ingredient, Ingredient.id == RecipeItem.ingredient_id)
        .filter(
            RecipeItem.recipe_id == recipe_id,
            RecipeItem.is_active.is_(True),
            Ingredient.is_active.is_(True),
        )
        .all()
    )
    return sum(
        (to_decimal(quantity) * to_decimal(cost) for quantity, cost in rows),
        Decimal("0"),
    )


def recompute_recipe(session: Session, recipe: Recipe, now: str) -> Recipe:
    session.flush()

    if not recipe.servings or recipe.servings < 1:
        raise ValidationError("Servings must be at least 1")

    total = current_total_cost(session, recipe.id)

    recipe.total_cost = money_float(total)
    recipe.cost_per_serving = money_float(total / Decimal(recipe.servings))
    recipe.updated_at = now

    session.flush()
    return recipe


def recompute_for_ingredient(session: Session, ingredient_id: int, now: str) -> list[int]:
    """Recompute every active recipe that uses the ingredient. Returns their ids."""
    session.flush()

    recipes = (
        session.query(Recipe)
        .join(RecipeItem, RecipeItem.recipe_id == Recipe.id)
        .filter(
            RecipeItem.ingredient_id == ingredient_id,
            RecipeItem.is_active.is_(True),
            Recipe.is_active.is_(True),
        )
        .distinct()
        .order_by(Recipe.id)
        .all()
    )

    for recipe in recipes:
        recompute_recipe(session, recipe, now)

    if recipes:
        logger.info(
            f"Recomputed cost of {len(recipes)} recipe(s) after ingredient {ingredient_id} changed"
        )
    return [recipe.id for recipe in recipes]
