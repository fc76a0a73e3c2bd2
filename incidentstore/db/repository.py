"""
Generic data-access layer over one ORM model.

Every operation returns a ``Result`` / ``Query``. ORM exceptions are caught
here and re-classified: ``NoResultFound`` becomes a missing-resource error,
any other ORM or driver failure an unknown error wrapping the cause.
"""
from __future__ import annotations

import logging
from typing import Any, ClassVar, Optional

from sqlalchemy import select
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..utils.result import Query, Result, fail, ok, res
from ..utils.telemetry import telemetry
from .errors import DbError, missing_resource_error, unknown_db_error
from .schema import Base

logger = logging.getLogger("incidentstore.db")

Record = dict[str, Any]

# sqlite3 raises OverflowError for integers outside 64 bits; SQLAlchemy does not wrap it.
STORE_ERRORS = (SQLAlchemyError, OverflowError)


class Repository:
    model: ClassVar[type[Base]]
    resource: ClassVar[str]             # singular, used in error messages

    def __init__(self, session_factory: sessionmaker):
        self._sessions = session_factory

    # ── Reads ────────────────────────────────────────────────────────────────

    def get_all(self) -> Result[list[Record], DbError]:
        try:
            with self._sessions() as db:
                rows = db.scalars(select(self.model).order_by(self.model.id)).all()
                return res([self._to_record(r) for r in rows])
        except STORE_ERRORS as e:
            return fail(self._unknown(f"failed to list {self.resource}s", e))

    def get(self, id: int) -> Result[Optional[Record], DbError]:
        try:
            with self._sessions() as db:
                row = db.get(self.model, id)
                return res(self._to_record(row) if row is not None else None)
        except STORE_ERRORS as e:
            return fail(self._unknown(f"failed to get {self.resource} {id}", e))

    # ── Writes ───────────────────────────────────────────────────────────────

    def create(self, values: Record) -> Result[Record, DbError]:
        try:
            with self._sessions() as db:
                row = self.model(**values)
                db.add(row)
                db.commit()
                db.refresh(row)
                return res(self._to_record(row))
        except STORE_ERRORS as e:
            return fail(self._unknown(f"failed to create {self.resource}", e))

    def update(self, id: int, values: Record) -> Result[Record, DbError]:
        try:
            with self._sessions() as db:
                row = self._find_one(db, id)
                for key, value in values.items():
                    setattr(row, key, value)
                db.commit()
                db.refresh(row)
                return res(self._to_record(row))
        except NoResultFound as e:
            return fail(missing_resource_error(f"{self.resource} {id} not found", e))
        except STORE_ERRORS as e:
            return fail(self._unknown(f"failed to update {self.resource} {id}", e))

    def delete(self, id: int) -> Query[DbError]:
        try:
            with self._sessions() as db:
                row = self._find_one(db, id)
                db.delete(row)
                db.commit()
        except NoResultFound as e:
            return missing_resource_error(f"{self.resource} {id} not found", e)
        except STORE_ERRORS as e:
            return self._unknown(f"failed to delete {self.resource} {id}", e)
        return ok()

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _find_one(self, db: Session, id: int) -> Base:
        return db.execute(select(self.model).where(self.model.id == id)).scalar_one()

    def _to_record(self, row: Base) -> Record:
        return {attr.key: getattr(row, attr.key) for attr in self.model.__mapper__.column_attrs}

    def _unknown(self, message: str, cause: Exception) -> DbError:
        # Sessions roll back on close; only classification happens here.
        logger.debug("%s: %r", message, cause)
        telemetry.incr("db_errors_total")
        return unknown_db_error(message, cause)
