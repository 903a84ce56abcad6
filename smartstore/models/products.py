# smartstore/models/products.py

from sqlalchemy import Boolean, CheckConstraint, Column, Float, ForeignKey, Integer, String, Text, text
from smartstore.database import Base


PRODUCT_CATEGORIES = ("food", "beverage", "dessert", "snack", "other")


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False, server_default=text("'other'"), index=True)

    selling_price = Column(Float, nullable=False, server_default=text("0"))

    # Optional: products without a recipe are sold without stock deduction
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=True)
    is_inventory_tracked = Column(Boolean, nullable=False, server_default=text("1"))
    image_uri = Column(String, nullable=True)

    created_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    updated_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    is_active = Column(Boolean, nullable=False, server_default=text("1"), index=True)

    __table_args__ = (
        CheckConstraint(
            "category IN ('food', 'beverage', 'dessert', 'snack', 'other')",
            name="ck_product_category",
        ),
    )
