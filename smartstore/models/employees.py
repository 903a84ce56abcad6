# smartstore/models/employees.py

from sqlalchemy import Boolean, CheckConstraint, Column, Float, Integer, String, text

from smartstore.database import Base


EMPLOYEE_ROLES = ("owner", "cashier", "staff")
WAGE_TYPES = ("hourly", "daily", "monthly")


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)

    role = Column(String, nullable=False, server_default=text("'staff'"))
    wage_type = Column(String, nullable=False, server_default=text("'daily'"))
    wage_amount = Column(Float, nullable=False, server_default=text("0"))
    pin_hash = Column(String, nullable=True)

    created_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    updated_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    is_active = Column(Boolean, nullable=False, server_default=text("1"), index=True)

    __table_args__ = (
        CheckConstraint("role IN ('owner', 'cashier', 'staff')", name="ck_employee_role"),
        CheckConstraint("wage_type IN ('hourly', 'daily', 'monthly')", name="ck_employee_wage_type"),
    )
