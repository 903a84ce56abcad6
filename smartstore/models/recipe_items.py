# models/recipe_items.py

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, text
from smartstore.database import Base


class RecipeItem(Base):
    __tablename__ = "recipe_items"

    id = Column(Integer, primary_key=True, index=True)

    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)

    quantity = Column(Float, nullable=False)
    unit_type = Column(String, nullable=False, server_default=text("'pcs'"))

    created_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    updated_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    is_active = Column(Boolean, nullable=False, server_default=text("1"))
    deleted_with_recipe = Column(Boolean, nullable=False, server_default=text("0"))
