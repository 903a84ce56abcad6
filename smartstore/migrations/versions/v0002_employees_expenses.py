"""add_employees_and_expenses

Version: 2
Revises: 1 (baseline schema)
"""

from smartstore.migrations.base import Migration


upgrade = """
CREATE TABLE IF NOT EXISTS employees (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  role TEXT NOT NULL DEFAULT 'staff' CHECK (role IN ('owner', 'cashier', 'staff')),
  wage_type TEXT NOT NULL DEFAULT 'daily' CHECK (wage_type IN ('hourly', 'daily', 'monthly')),
  wage_amount REAL NOT NULL DEFAULT 0,
  pin_hash TEXT,
  created_at TEXT NOT NULL DEFAULT (datetime('now', 'localtime')),
  updated_at TEXT NOT NULL DEFAULT (datetime('now', 'localtime')),
  is_active INTEGER NOT NULL DEFAULT 1
);

CREATE INDEX IF NOT EXISTS idx_employees_name ON employees(name);
CREATE INDEX IF NOT EXISTS idx_employees_active ON employees(is_active);

CREATE TABLE IF NOT EXISTS expenses (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  category TEXT NOT NULL DEFAULT 'other' CHECK (category IN ('rent', 'utilities', 'supplies', 'labor', 'other')),
  amount REAL NOT NULL DEFAULT 0,
  is_recurring INTEGER NOT NULL DEFAULT 0,
  recurrence_type TEXT CHECK (recurrence_type IN ('daily', 'monthly') OR recurrence_type IS NULL),
  expense_date TEXT NOT NULL DEFAULT (date('now', 'localtime')),
  notes TEXT,
  created_at TEXT NOT NULL DEFAULT (datetime('now', 'localtime')),
  updated_at TEXT NOT NULL DEFAULT (datetime('now', 'localtime')),
  is_active INTEGER NOT NULL DEFAULT 1
);

CREATE INDEX IF NOT EXISTS idx_expenses_date ON expenses(expense_date);
CREATE INDEX IF NOT EXISTS idx_expenses_category ON expenses(category);
CREATE INDEX IF NOT EXISTS idx_expenses_active ON expenses(is_active);
"""


downgrade = """
DROP INDEX IF EXISTS idx_expenses_active;
DROP INDEX IF EXISTS idx_expenses_category;
DROP INDEX IF EXISTS idx_expenses_date;
DROP TABLE IF EXISTS expenses;
DROP INDEX IF EXISTS idx_employees_active;
DROP INDEX IF EXISTS idx_employees_name;
DROP TABLE IF EXISTS employees;
"""


migration = Migration(
    version=2,
    description="Add employees and expenses tables",
    up=upgrade,
    down=downgrade,
)
