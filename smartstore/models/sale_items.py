# models/sale_items.py

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, text
from smartstore.database import Base


class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)

    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False, server_default=text("1"))
    unit_price = Column(Float, nullable=False, server_default=text("0"))
    subtotal = Column(Float, nullable=False, server_default=text("0"))

    created_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    updated_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    is_active = Column(Boolean, nullable=False, server_default=text("1"))
