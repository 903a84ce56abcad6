# smartstore/migrations/versions/registry.py
#
# Ordered migration chain. Append new versions here; the engine checks the
# chain is contiguous from the baseline before anything runs.

from smartstore.migrations.versions import (
    v0002_employees_expenses,
    v0003_recipe_item_delete_marker,
)

MIGRATIONS = [
    v0002_employees_expenses.migration,
    v0003_recipe_item_delete_marker.migration,
]
