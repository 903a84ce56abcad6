# smartstore/repositories/base.py
#
# Shared read/soft-delete behaviour for every entity repository.
# Writes always go through Database.transaction(); reads through
# Database.session().

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from smartstore.core.config import Settings, settings as default_settings
from smartstore.core.exceptions import ConstraintViolation, NotFoundError, ValidationError
from smartstore.core.utils import escape_like
from smartstore.database import Database

logger = logging.getLogger("smartstore")

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _describe(exc: PydanticValidationError) -> str:
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "input"
        problems.append(f"{field}: {error['msg']}")
    return "; ".join(problems)


def parse(schema: Type[SchemaT], data: Any) -> SchemaT:
    """Accept a schema instance, any pydantic model, or a plain dict."""
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    if not isinstance(data, Mapping):
        raise ValidationError(f"Expected {schema.__name__} data, got {type(data).__name__}")
    try:
        return schema.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid {schema.__name__}: {_describe(exc)}") from exc


def column_value(value):
    # sqlite3 binds neither Decimal nor date
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


class BaseRepository:
    model = None
    entity = "Record"

    # Columns an update may never set to NULL
    required_fields: tuple = ("name",)

    def __init__(self, db: Database, settings: Settings | None = None):
        self.db = db
        self.settings = settings or default_settings

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _query(self, session: Session, include_inactive: bool = False):
        query = session.query(self.model)
        if not include_inactive:
            query = query.filter(self.model.is_active.is_(True))
        return query

    def get_by_id(self, id: int, include_inactive: bool = False):
        with self.db.session() as session:
            return (
                self._query(session, include_inactive)
                .filter(self.model.id == id)
                .first()
            )

    def list(self, include_inactive: bool = False, **filters):
        with self.db.session() as session:
            query = self._query(session, include_inactive)
            for field, value in filters.items():
                if value is None:
                    continue
                if not hasattr(self.model, field):
                    raise ValidationError(f"Unknown filter '{field}' for {self.entity}")
                query = query.filter(getattr(self.model, field) == value)
            return (
                query.order_by(self.model.created_at.desc(), self.model.id.desc())
                .all()
            )

    def search(self, text: str):
        term = (text or "").strip()
        with self.db.session() as session:
            query = self._query(session)
            if term:
                query = query.filter(
                    self.model.name.ilike(f"%{escape_like(term)}%", escape="\\")
                )
            return query.order_by(self.model.name, self.model.id).all()

    def count(self, include_inactive: bool = False) -> int:
        with self.db.session() as session:
            return self._query(session, include_inactive).count()

    def exists(self, id: int) -> bool:
        with self.db.session() as session:
            return (
                self._query(session)
                .filter(self.model.id == id)
                .first()
                is not None
            )

    # ------------------------------------------------------------------
    # Soft delete
    # ------------------------------------------------------------------

    def soft_delete(self, id: int) -> bool:
        with self.db.transaction() as session:
            obj = self._query(session).filter(self.model.id == id).first()
            if not obj:
                return False
            now = self.db.now()
            obj.is_active = False
            obj.updated_at = now
            self._on_soft_delete(session, obj, now)

        logger.info(f"{self.entity} {id} deactivated")
        return True

    def restore(self, id: int) -> bool:
        with self.db.transaction() as session:
            obj = (
                session.query(self.model)
                .filter(self.model.id == id, self.model.is_active.is_(False))
                .first()
            )
            if not obj:
                return False
            deleted_at = obj.updated_at
            now = self.db.now()
            obj.is_active = True
            obj.updated_at = now
            self._on_restore(session, obj, now, deleted_at)

        logger.info(f"{self.entity} {id} restored")
        return True

    def _on_soft_delete(self, session: Session, obj, now: str) -> None:
        pass

    def _on_restore(self, session: Session, obj, now: str, deleted_at: str) -> None:
        pass

    # ------------------------------------------------------------------
    # Helpers for writes (called inside a transaction)
    # ------------------------------------------------------------------

    def _get_active_or_raise(self, session: Session, id: int):
        obj = self._query(session).filter(self.model.id == id).first()
        if not obj:
            raise NotFoundError(f"{self.entity} {id} not found")
        return obj

    @staticmethod
    def _require_active(session: Session, model, id: int, label: str):
        obj = session.query(model).filter(model.id == id).first()
        if not obj:
            raise ConstraintViolation(f"{label} {id} does not exist")
        if not obj.is_active:
            raise ConstraintViolation(f"{label} {id} is inactive")
        return obj

    def _apply_changes(self, obj, changes: dict, now: str) -> None:
        for field, value in changes.items():
            if value is None and field in self.required_fields:
                raise ValidationError(f"{field} cannot be empty")
            setattr(obj, field, column_value(value))
        obj.updated_at = now
