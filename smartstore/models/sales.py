# models/sales.py

from sqlalchemy import Boolean, CheckConstraint, Column, Float, Integer, String, Text, text
from smartstore.database import Base


PAYMENT_METHODS = ("cash", "gcash", "maya", "card", "other")


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    subtotal = Column(Float, nullable=False, server_default=text("0"))
    # Full discount: fixed amount plus the percent-derived part
    discount_amount = Column(Float, nullable=False, server_default=text("0"))
    discount_percent = Column(Float, nullable=False, server_default=text("0"))
    total = Column(Float, nullable=False, server_default=text("0"))

    payment_method = Column(String, nullable=False, server_default=text("'cash'"), index=True)
    amount_received = Column(Float, nullable=False, server_default=text("0"))
    change_amount = Column(Float, nullable=False, server_default=text("0"))
    notes = Column(Text, nullable=True)

    created_at = Column(
        String,
        nullable=False,
        server_default=text("(datetime('now', 'localtime'))"),
        index=True,
    )
    updated_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    is_active = Column(Boolean, nullable=False, server_default=text("1"), index=True)

    __table_args__ = (
        CheckConstraint(
            "payment_method IN ('cash', 'gcash', 'maya', 'card', 'other')",
            name="ck_sale_payment_method",
        ),
    )
