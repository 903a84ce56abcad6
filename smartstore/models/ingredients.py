# smartstore/models/ingredients.py

from sqlalchemy import Boolean, Column, Float, Integer, String, Text, text
from smartstore.database import Base


class Ingredient(Base):
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)

    cost_per_unit = Column(Float, nullable=False, server_default=text("0"))
    unit_type = Column(String, nullable=False, server_default=text("'pcs'"))

    # Derived from inventory_transactions; only the ledger writes it
    quantity_in_stock = Column(Float, nullable=False, server_default=text("0"))
    low_stock_threshold = Column(Float, nullable=False, server_default=text("10"))

    supplier = Column(String, nullable=True)
    expiration_date = Column(String, nullable=True)

    created_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    updated_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    is_active = Column(Boolean, nullable=False, server_default=text("1"), index=True)
