# smartstore/routers/recipes.py

from fastapi import APIRouter, Depends, HTTPException, status

from smartstore.dependencies import get_store
from smartstore.schemas.recipe import (
    RecipeCreate,
    RecipeDetailResponse,
    RecipeItemCreate,
    RecipeItemUpdate,
    RecipeResponse,
    RecipeUpdate,
)
from smartstore.store import Store

router = APIRouter(prefix="/recipes", tags=["Recipes"])


def _detail(store: Store, recipe_id: int) -> RecipeDetailResponse:
    recipe = store.recipes.get_with_items(recipe_id)
    if not recipe:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Recipe not found",
        )
    return recipe


@router.post(
    "",
    response_model=RecipeDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_recipe(
    recipe_data: RecipeCreate,
    store: Store = Depends(get_store),
):
    recipe = store.recipes.create(recipe_data)
    return _detail(store, recipe.id)


@router.get("", response_model=list[RecipeResponse])
def list_recipes(
    include_inactive: bool = False,
    store: Store = Depends(get_store),
):
    return store.recipes.list(include_inactive=include_inactive)


@router.get("/search", response_model=list[RecipeResponse])
def search_recipes(q: str = "", store: Store = Depends(get_store)):
    return store.recipes.search(q)


@router.get("/{recipe_id}", response_model=RecipeDetailResponse)
def get_recipe(recipe_id: int, store: Store = Depends(get_store)):
    return _detail(store, recipe_id)


@router.put("/{recipe_id}", response_model=RecipeDetailResponse)
def update_recipe(
    recipe_id: int,
    recipe_data: RecipeUpdate,
    store: Store = Depends(get_store),
):
    store.recipes.update(recipe_id, recipe_data)
    return _detail(store, recipe_id)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(recipe_id: int, store: Store = Depends(get_store)):
    if not store.recipes.soft_delete(recipe_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Recipe not found",
        )


@router.post("/{recipe_id}/restore", response_model=RecipeDetailResponse)
def restore_recipe(recipe_id: int, store: Store = Depends(get_store)):
    if not store.recipes.restore(recipe_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No deleted recipe with this id",
        )
    return _detail(store, recipe_id)


@router.post("/{recipe_id}/recalculate", response_model=RecipeResponse)
def recalculate_recipe(recipe_id: int, store: Store = Depends(get_store)):
    return store.recipes.recalculate_cost(recipe_id)


# =========================================================
# ITEMS
# =========================================================

@router.post(
    "/{recipe_id}/items",
    response_model=RecipeDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_recipe_item(
    recipe_id: int,
    item_data: RecipeItemCreate,
    store: Store = Depends(get_store),
):
    store.recipes.add_item(recipe_id, item_data)
    return _detail(store, recipe_id)


@router.put("/{recipe_id}/items/{item_id}", response_model=RecipeDetailResponse)
def update_recipe_item(
    recipe_id: int,
    item_id: int,
    item_data: RecipeItemUpdate,
    store: Store = Depends(get_store),
):
    store.recipes.update_item(item_id, item_data, recipe_id=recipe_id)
    return _detail(store, recipe_id)


@router.delete("/{recipe_id}/items/{item_id}", response_model=RecipeDetailResponse)
def remove_recipe_item(
    recipe_id: int,
    item_id: int,
    store: Store = Depends(get_store),
):
    if not store.recipes.remove_item(item_id, recipe_id=recipe_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Recipe item not found",
        )
    return _detail(store, recipe_id)
