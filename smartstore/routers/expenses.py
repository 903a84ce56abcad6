# smartstore/routers/expenses.py

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from smartstore.dependencies import get_store
from smartstore.schemas.expense import (
    CategoryTotalResponse,
    ExpenseCategory,
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
)
from smartstore.store import Store

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_expense(
    expense_data: ExpenseCreate,
    store: Store = Depends(get_store),
):
    return store.expenses.create(expense_data)


@router.get("", response_model=list[ExpenseResponse])
def list_expenses(
    start_date: date | None = None,
    end_date: date | None = None,
    category: ExpenseCategory | None = None,
    store: Store = Depends(get_store),
):
    if start_date or end_date:
        today = store.database.today()
        expenses = store.expenses.get_by_date_range(start_date or today, end_date or today)
        if category:
            expenses = [e for e in expenses if e.category == category]
        return expenses
    if category:
        return store.expenses.get_by_category(category)
    return store.expenses.list()


@router.get("/recurring", response_model=list[ExpenseResponse])
def recurring_expenses(store: Store = Depends(get_store)):
    return store.expenses.get_recurring_expenses()


@router.get("/breakdown", response_model=list[CategoryTotalResponse])
def category_breakdown(
    start_date: date | None = None,
    end_date: date | None = None,
    store: Store = Depends(get_store),
):
    return store.expenses.get_category_breakdown(start_date, end_date)


@router.get("/daily-total")
def daily_total(
    day: date | None = Query(None, alias="date"),
    store: Store = Depends(get_store),
) -> dict[str, Decimal]:
    return {
        "total": store.expenses.get_daily_total(day),
        "daily_fixed_cost": store.expenses.get_daily_fixed_cost(),
    }


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: int, store: Store = Depends(get_store)):
    expense = store.expenses.get_by_id(expense_id)
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found",
        )
    return expense


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: int,
    expense_data: ExpenseUpdate,
    store: Store = Depends(get_store),
):
    return store.expenses.update(expense_id, expense_data)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: int, store: Store = Depends(get_store)):
    if not store.expenses.soft_delete(expense_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found",
        )
