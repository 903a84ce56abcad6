# smartstore/models/recipes.py

from sqlalchemy import Boolean, Column, Float, Integer, String, Text, text
from smartstore.database import Base


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)

    servings = Column(Integer, nullable=False, server_default=text("1"))

    # Maintained by the costing engine, never written by callers
    total_cost = Column(Float, nullable=False, server_default=text("0"))
    cost_per_serving = Column(Float, nullable=False, server_default=text("0"))

    created_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    updated_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
    is_active = Column(Boolean, nullable=False, server_default=text("1"), index=True)
