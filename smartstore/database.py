# smartstore/database.py
#
# Storage backends and the database handle.
#
# The handle is built once at startup (see smartstore/store.py), passed to
# every repository, and closed explicitly on shutdown. There is no module
# level engine or session.

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from smartstore.core.config import Settings
from smartstore.core.exceptions import (
    ConstraintViolation,
    SmartStoreError,
    TransactionFailure,
)
from smartstore.core.utils import to_sqlite_datetime

logger = logging.getLogger("smartstore")

Base = declarative_base()


def _configure_sqlite(engine: Engine) -> None:
    # pysqlite opens transactions lazily and never for DDL; take over BEGIN so
    # schema changes and multi-row writes are atomic.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON;")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


class StorageBackend(ABC):
    name = "abstract"
    single_connection = False

    @abstractmethod
    def create_engine(self, echo: bool = False) -> Engine:
        ...


class SQLiteFileBackend(StorageBackend):
    name = "sqlite"

    def __init__(self, path: str):
        self.path = Path(path).expanduser()

    def create_engine(self, echo: bool = False) -> Engine:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            f"sqlite:///{self.path}",
            echo=echo,
            connect_args={"check_same_thread": False},
        )
        _configure_sqlite(engine)
        return engine


class InMemoryBackend(StorageBackend):
    """
    Non-persistent backend for environments without a writable disk and for
    tests. Every session shares one connection, so data lives as long as the
    handle.
    """

    name = "memory"
    single_connection = True

    def create_engine(self, echo: bool = False) -> Engine:
        engine = create_engine(
            "sqlite://",
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        _configure_sqlite(engine)
        return engine


def create_backend(settings: Settings) -> StorageBackend:
    if settings.DATABASE_BACKEND == "memory":
        return InMemoryBackend()
    return SQLiteFileBackend(settings.DATABASE_PATH)


class Database:
    def __init__(
        self,
        backend: StorageBackend,
        *,
        echo: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.backend = backend
        self.clock = clock
        self.engine = backend.create_engine(echo=echo)
        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )
        self._lock = threading.RLock()

    def now(self) -> str:
        return to_sqlite_datetime(self.clock())

    def today(self) -> str:
        return self.clock().date().isoformat()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        One atomic unit of work: commits when the block completes, rolls back
        everything on any error. Writes are serialized.
        """
        with self._lock:
            session = self.SessionLocal()
            try:
                yield session
                session.commit()
            except SmartStoreError:
                session.rollback()
                raise
            except IntegrityError as exc:
                session.rollback()
                raise ConstraintViolation(
                    f"Constraint violated: {exc.orig}"
                ) from exc
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error(f"Storage error, transaction rolled back: {exc}")
                raise TransactionFailure(
                    "Unable to complete the operation; no changes were saved"
                ) from exc
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Read-only session."""
        if self.backend.single_connection:
            self._lock.acquire()
        session = self.SessionLocal()
        try:
            yield session
        except SQLAlchemyError as exc:
            raise TransactionFailure(f"Unable to read data: {exc}") from exc
        finally:
            session.close()
            if self.backend.single_connection:
                self._lock.release()

    def run(self, sql: str, params: Mapping[str, Any] | None = None) -> int:
        with self.transaction() as session:
            result = session.execute(text(sql), dict(params or {}))
            return result.rowcount

    def query(self, sql: str, params: Mapping[str, Any] | None = None) -> list[dict]:
        with self.session() as session:
            result = session.execute(text(sql), dict(params or {}))
            return [dict(row) for row in result.mappings()]

    def close(self) -> None:
        self.engine.dispose()
        logger.info(f"Database connection closed ({self.backend.name})")


def open_database(
    settings: Settings,
    clock: Callable[[], datetime] = datetime.now,
) -> Database:
    backend = create_backend(settings)
    logger.info(f"Opening {backend.name} database")
    return Database(backend, echo=settings.DEBUG, clock=clock)
