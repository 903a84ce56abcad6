# smartstore/routers/sales.py

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from smartstore.dependencies import get_store
from smartstore.schemas.sale import (
    DailySalesSummary,
    PaymentMethod,
    SaleCreate,
    SaleDetailResponse,
    SaleResponse,
)
from smartstore.store import Store

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.post(
    "",
    response_model=SaleDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_sale(
    sale_data: SaleCreate,
    store: Store = Depends(get_store),
):
    sale = store.sales.record_sale(sale_data)
    return store.sales.get_with_items(sale.id)


@router.get("", response_model=list[SaleResponse])
def list_sales(
    start_date: date | None = None,
    end_date: date | None = None,
    payment_method: PaymentMethod | None = None,
    store: Store = Depends(get_store),
):
    if start_date or end_date:
        today = store.database.today()
        sales = store.sales.get_by_date_range(start_date or today, end_date or today)
        if payment_method:
            sales = [s for s in sales if s.payment_method == payment_method]
        return sales
    if payment_method:
        return store.sales.get_by_payment_method(payment_method)
    return store.sales.list()


@router.get("/today", response_model=list[SaleResponse])
def todays_sales(store: Store = Depends(get_store)):
    return store.sales.get_today()


@router.get("/summary", response_model=DailySalesSummary)
def daily_summary(
    day: date | None = Query(None, alias="date"),
    store: Store = Depends(get_store),
):
    return store.sales.get_daily_summary(day)


@router.get("/{sale_id}", response_model=SaleDetailResponse)
def get_sale(
    sale_id: int,
    include_inactive: bool = False,
    store: Store = Depends(get_store),
):
    sale = store.sales.get_with_items(sale_id, include_inactive=include_inactive)
    if not sale:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sale not found",
        )
    return sale


@router.post("/{sale_id}/void", response_model=SaleDetailResponse)
def void_sale(
    sale_id: int,
    restock: bool = True,
    store: Store = Depends(get_store),
):
    if not store.sales.void_sale(sale_id, restock=restock):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sale not found or already voided",
        )
    return store.sales.get_with_items(sale_id, include_inactive=True)
