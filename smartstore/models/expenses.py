# smartstore/models/expenses.py

from sqlalchemy import Boolean, CheckConstraint, Column, Float, Integer, String, Text, text

from smartstore.database import Base


EXPENSE_CATEGORIES = ("rent", "utilities", "supplies", "labor", "other")
RECURRENCE_TYPES = ("daily", "monthly")


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, server_default=text("'other'"), index=True)
    amount = Column(Float, nullable=False, server_default=text("0"))

    is_recurring = Column(Boolean, nullable=False, server_default=text("0"))
    recurrence_type = Column(String, nullable=True)

    expense_date = Column(String, nullable=False, server_default=text("(date('now', 'localtime'))"), index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    updated_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    is_active = Column(Boolean, nullable=False, server_default=text("1"), index=True)

    __table_args__ = (
        CheckConstraint(
            "category IN ('rent', 'utilities', 'supplies', 'labor', 'other')",
            name="ck_expense_category",
        ),
        CheckConstraint(
            "recurrence_type IN ('daily', 'monthly') OR recurrence_type IS NULL",
            name="ck_expense_recurrence_type",
        ),
    )
