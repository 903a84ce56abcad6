"""mark_recipe_items_deleted_with_recipe

Version: 3
Revises: 2
"""

from smartstore.migrations.base import Migration


upgrade = """
ALTER TABLE recipe_items ADD COLUMN deleted_with_recipe INTEGER NOT NULL DEFAULT 0;
"""


downgrade = """
ALTER TABLE recipe_items DROP COLUMN deleted_with_recipe;
"""


migration = Migration(
    version=3,
    description="Mark recipe items deactivated together with their recipe",
    up=upgrade,
    down=downgrade,
)
