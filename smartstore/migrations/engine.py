# =========================================================
# MIGRATION ENGINE
#
# - Baseline schema (version 1) on a fresh database
# - Pending migrations applied in ascending order
# - One transaction per migration (script + schema_version row)
# - On failure: rollback, run the migration's down script, abort startup
# =========================================================

import logging
from typing import Iterable, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from smartstore.core.exceptions import MigrationFailure
from smartstore.migrations.base import Migration
from smartstore.migrations.schema import BASELINE_VERSION, SCHEMA_SQL
from smartstore.migrations.versions.registry import MIGRATIONS

logger = logging.getLogger("smartstore")


def split_statements(script: str) -> list[str]:
    """
    Split a SQL script into single statements. Comment lines are dropped;
    the schema never puts ';' inside literals.
    """
    lines = [
        line for line in script.splitlines()
        if not line.strip().startswith("--")
    ]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]


def validate_migrations(
    migrations: Iterable[Migration],
    baseline: int = BASELINE_VERSION,
) -> list[Migration]:
    ordered = sorted(migrations, key=lambda m: m.version)

    expected = baseline + 1
    previous = None
    for migration in ordered:
        if migration.version == previous:
            raise MigrationFailure(
                f"Duplicate migration version {migration.version}",
                version=migration.version,
            )
        if migration.version != expected:
            raise MigrationFailure(
                f"Migration chain has a gap: expected version {expected}, "
                f"got {migration.version}",
                version=migration.version,
            )
        previous = migration.version
        expected += 1

    return ordered


class MigrationEngine:
    def __init__(self, database, migrations: Optional[Iterable[Migration]] = None):
        if migrations is None:
            migrations = MIGRATIONS

        self.database = database
        self.migrations = list(migrations)

    @property
    def latest_version(self) -> int:
        if not self.migrations:
            return BASELINE_VERSION
        return max(BASELINE_VERSION, max(m.version for m in self.migrations))

    def current_version(self) -> int:
        with self.database.engine.connect() as conn:
            exists = conn.execute(
                text(
                    "SELECT name FROM sqlite_master "
                    "WHERE type='table' AND name='schema_version'"
                )
            ).first()
            if exists is None:
                return 0
            version = conn.execute(
                text("SELECT MAX(version) FROM schema_version")
            ).scalar()
            return int(version or 0)

    def applied_versions(self) -> list[int]:
        with self.database.engine.connect() as conn:
            rows = conn.execute(
                text("SELECT version FROM schema_version ORDER BY version")
            ).all()
        return [int(r[0]) for r in rows]

    def run(self) -> int:
        """Bring the schema up to date. Returns the resulting version."""
        ordered = validate_migrations(self.migrations)

        current = self.current_version()

        if current == 0:
            logger.info("[Database] Initializing fresh database...")
            self._apply_baseline()
            current = BASELINE_VERSION
            logger.info(f"[Database] Schema version {BASELINE_VERSION} initialized")

        if current > self.latest_version:
            raise MigrationFailure(
                f"Database schema version {current} is newer than the latest "
                f"known version {self.latest_version}",
                version=current,
            )

        pending = [m for m in ordered if m.version > current]
        if not pending:
            logger.info(f"[Database] Schema is up to date (version {current})")
            return current

        logger.info(
            f"[Database] Migrating from version {current} to {pending[-1].version}..."
        )
        for migration in pending:
            self._apply(migration)
            current = migration.version

        logger.info("[Database] Migrations completed successfully")
        return current

    def _record_version(self, conn: Connection, version: int) -> None:
        conn.execute(
            text("INSERT INTO schema_version (version, applied_at) VALUES (:v, :at)"),
            {"v": version, "at": self.database.now()},
        )

    def _execute_script(self, conn: Connection, script: str) -> None:
        for statement in split_statements(script):
            conn.exec_driver_sql(statement)

    def _apply_baseline(self) -> None:
        try:
            with self.database.engine.begin() as conn:
                self._execute_script(conn, SCHEMA_SQL)
                self._record_version(conn, BASELINE_VERSION)
        except SQLAlchemyError as exc:
            logger.error(f"[Database] Baseline schema failed: {exc}")
            raise MigrationFailure(
                f"Unable to create the baseline schema: {exc}",
                version=BASELINE_VERSION,
            ) from exc

    def _apply(self, migration: Migration) -> None:
        logger.info(
            f"[Database] Running migration {migration.version}: {migration.description}"
        )
        try:
            with self.database.engine.begin() as conn:
                self._execute_script(conn, migration.up)
                self._record_version(conn, migration.version)
        except SQLAlchemyError as exc:
            logger.error(f"[Database] Migration {migration.version} failed: {exc}")
            self._revert(migration, exc)
            raise MigrationFailure(
                f"Migration {migration.version} ({migration.description}) failed "
                f"and was rolled back: {exc}",
                version=migration.version,
            ) from exc

    def _revert(self, migration: Migration, cause: Exception) -> None:
        try:
            with self.database.engine.begin() as conn:
                self._execute_script(conn, migration.down)
        except SQLAlchemyError as exc:
            logger.error(
                f"[Database] Down script of migration {migration.version} failed: {exc}"
            )
            raise MigrationFailure(
                f"Migration {migration.version} failed ({cause}) and its down "
                f"script also failed: {exc}",
                version=migration.version,
            ) from exc
