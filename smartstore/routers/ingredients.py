# smartstore/routers/ingredients.py

from fastapi import APIRouter, Depends, HTTPException, Query, status

from smartstore.dependencies import get_store
from smartstore.schemas.ingredient import (
    IngredientCreate,
    IngredientResponse,
    IngredientUpdate,
)
from smartstore.schemas.inventory import (
    InventoryTransactionCreate,
    InventoryTransactionResponse,
)
from smartstore.store import Store

router = APIRouter(
    prefix="/ingredients",
    tags=["Ingredients"],
)


@router.post(
    "",
    response_model=IngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_ingredient(
    ingredient_data: IngredientCreate,
    store: Store = Depends(get_store),
):
    return store.ingredients.create(ingredient_data)


@router.get("", response_model=list[IngredientResponse])
def list_ingredients(
    include_inactive: bool = False,
    store: Store = Depends(get_store),
):
    return store.ingredients.list(include_inactive=include_inactive)


@router.get("/search", response_model=list[IngredientResponse])
def search_ingredients(
    q: str = Query("", description="Case-insensitive part of the name"),
    store: Store = Depends(get_store),
):
    return store.ingredients.search(q)


@router.get("/low-stock", response_model=list[IngredientResponse])
def low_stock_ingredients(store: Store = Depends(get_store)):
    return store.ingredients.get_low_stock()


@router.get("/expiring", response_model=list[IngredientResponse])
def expiring_ingredients(
    days: int | None = Query(None, ge=0),
    store: Store = Depends(get_store),
):
    return store.ingredients.get_expiring_soon(days)


@router.get("/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient(
    ingredient_id: int,
    store: Store = Depends(get_store),
):
    ingredient = store.ingredients.get_by_id(ingredient_id)
    if not ingredient:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ingredient not found",
        )
    return ingredient


@router.put("/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: int,
    ingredient_data: IngredientUpdate,
    store: Store = Depends(get_store),
):
    return store.ingredients.update(ingredient_id, ingredient_data)


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(
    ingredient_id: int,
    store: Store = Depends(get_store),
):
    if not store.ingredients.soft_delete(ingredient_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ingredient not found",
        )


@router.post("/{ingredient_id}/restore", response_model=IngredientResponse)
def restore_ingredient(
    ingredient_id: int,
    store: Store = Depends(get_store),
):
    if not store.ingredients.restore(ingredient_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No deleted ingredient with this id",
        )
    return store.ingredients.get_by_id(ingredient_id)


# =========================================================
# STOCK LEDGER
# =========================================================

@router.get(
    "/{ingredient_id}/transactions",
    response_model=list[InventoryTransactionResponse],
)
def ingredient_transactions(
    ingredient_id: int,
    store: Store = Depends(get_store),
):
    return store.inventory.get_by_ingredient(ingredient_id)


@router.post(
    "/{ingredient_id}/transactions",
    response_model=InventoryTransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
def record_stock_movement(
    ingredient_id: int,
    transaction_data: InventoryTransactionCreate,
    store: Store = Depends(get_store),
):
    return store.inventory.record_transaction(ingredient_id, transaction_data)
