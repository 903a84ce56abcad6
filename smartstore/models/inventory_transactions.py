# smartstore/models/inventory_transactions.py

from sqlalchemy import Boolean, CheckConstraint, Column, Float, ForeignKey, Integer, String, Text, text
from smartstore.database import Base


TRANSACTION_TYPES = ("stock_in", "stock_out", "adjustment", "sale")


class InventoryTransaction(Base):
    __tablename__ = "inventory_transactions"

    id = Column(Integer, primary_key=True, index=True)

    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    transaction_type = Column(String, nullable=False, index=True)

    # Signed stock delta: stock_out and sale rows are negative
    quantity = Column(Float, nullable=False)
    unit_cost = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)

    # Sale id (or other source document) that caused the movement
    reference_id = Column(Integer, nullable=True)

    created_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"), index=True)
    updated_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    is_active = Column(Boolean, nullable=False, server_default=text("1"))

    __table_args__ = (
        CheckConstraint(
            "transaction_type IN ('stock_in', 'stock_out', 'adjustment', 'sale')",
            name="ck_inventory_transaction_type",
        ),
    )
