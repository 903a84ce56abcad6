# smartstore/repositories/employees.py

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from smartstore.core.config import Settings
from smartstore.core.utils import money, to_decimal
from smartstore.models.employees import Employee
from smartstore.repositories.base import BaseRepository, column_value, parse
from smartstore.schemas.employee import EmployeeCreate, EmployeeUpdate

logger = logging.getLogger("smartstore")


def daily_wage(wage_type: str, amount, settings: Settings) -> Decimal:
    amount = to_decimal(amount)
    if wage_type == "hourly":
        return amount * settings.HOURS_PER_WORKDAY
    if wage_type == "monthly":
        return amount / Decimal(settings.DAYS_PER_MONTH)
    return amount


def daily_labor_cost(session: Session, settings: Settings) -> Decimal:
    """Full-precision daily labor cost of all active employees."""
    rows = (
        session.query(Employee.wage_type, Employee.wage_amount)
        .filter(Employee.is_active.is_(True))
        .all()
    )
    return sum(
        (daily_wage(wage_type, amount, settings) for wage_type, amount in rows),
        Decimal("0"),
    )


class EmployeeRepository(BaseRepository):
    model = Employee
    entity = "Employee"
    required_fields = ("name", "role", "wage_type", "wage_amount")

    def create(self, data) -> Employee:
        data = parse(EmployeeCreate, data)

        with self.db.transaction() as session:
            now = self.db.now()
            employee = Employee(
                name=data.name,
                role=data.role,
                wage_type=data.wage_type,
                wage_amount=column_value(data.wage_amount),
                pin_hash=data.pin_hash,
                created_at=now,
                updated_at=now,
                is_active=True,
            )
            session.add(employee)
            session.flush()

        logger.info(f"Employee created: {employee.name} ({employee.role})")
        return employee

    def update(self, id: int, data) -> Employee:
        changes = parse(EmployeeUpdate, data).model_dump(exclude_unset=True)

        with self.db.transaction() as session:
            employee = self._get_active_or_raise(session, id)
            self._apply_changes(employee, changes, self.db.now())

        return employee

    def get_active_employees(self) -> list[Employee]:
        with self.db.session() as session:
            return self._query(session).order_by(Employee.name, Employee.id).all()

    def get_daily_labor_cost(self) -> Decimal:
        with self.db.session() as session:
            return money(daily_labor_cost(session, self.settings))
