# smartstore/routers/products.py

from fastapi import APIRouter, Depends, HTTPException, status

from smartstore.dependencies import get_store
from smartstore.schemas.product import (
    ProductCategory,
    ProductCreate,
    ProductMarginResponse,
    ProductResponse,
    ProductUpdate,
)
from smartstore.store import Store

router = APIRouter(
    prefix="/products",
    tags=["Products"],
)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    product_data: ProductCreate,
    store: Store = Depends(get_store),
):
    return store.products.create(product_data)


@router.get("", response_model=list[ProductResponse])
def list_products(
    category: ProductCategory | None = None,
    include_inactive: bool = False,
    store: Store = Depends(get_store),
):
    return store.products.list(include_inactive=include_inactive, category=category)


@router.get("/search", response_model=list[ProductResponse])
def search_products(q: str = "", store: Store = Depends(get_store)):
    return store.products.search(q)


@router.get("/pos", response_model=list[ProductResponse])
def pos_products(store: Store = Depends(get_store)):
    return store.products.get_for_pos()


@router.get("/margins", response_model=list[ProductMarginResponse])
def product_margins(store: Store = Depends(get_store)):
    return store.products.get_all_with_profit_margins()


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, store: Store = Depends(get_store)):
    product = store.products.get_by_id(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return product


@router.get("/{product_id}/margin", response_model=ProductMarginResponse)
def product_margin(product_id: int, store: Store = Depends(get_store)):
    product = store.products.get_with_recipe(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return product


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    store: Store = Depends(get_store),
):
    return store.products.update(product_id, product_data)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, store: Store = Depends(get_store)):
    if not store.products.soft_delete(product_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )


@router.post("/{product_id}/restore", response_model=ProductResponse)
def restore_product(product_id: int, store: Store = Depends(get_store)):
    if not store.products.restore(product_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No deleted product with this id",
        )
    return store.products.get_by_id(product_id)
