# smartstore/routers/employees.py

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status

from smartstore.dependencies import get_store
from smartstore.schemas.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
)
from smartstore.store import Store

router = APIRouter(prefix="/employees", tags=["Employees"])


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_employee(
    employee_data: EmployeeCreate,
    store: Store = Depends(get_store),
):
    return store.employees.create(employee_data)


@router.get("", response_model=list[EmployeeResponse])
def list_employees(store: Store = Depends(get_store)):
    return store.employees.get_active_employees()


@router.get("/labor-cost")
def daily_labor_cost(store: Store = Depends(get_store)) -> dict[str, Decimal]:
    return {"daily_labor_cost": store.employees.get_daily_labor_cost()}


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: int, store: Store = Depends(get_store)):
    employee = store.employees.get_by_id(employee_id)
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )
    return employee


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    employee_data: EmployeeUpdate,
    store: Store = Depends(get_store),
):
    return store.employees.update(employee_id, employee_data)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(employee_id: int, store: Store = Depends(get_store)):
    if not store.employees.soft_delete(employee_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )
