"""
Domain layer shared by every resource.

Untrusted payloads are validated before storage is touched; everything read
back from storage is validated again before it reaches a caller. A missing
record on patch/delete is a normal outcome (``None`` data / ``ok()``), never
an error.
"""
from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, Optional, TypeVar, Union

from pydantic import ValidationError

from ..db.errors import DbError, unknown_db_error
from ..db.repository import Record, Repository
from ..schemas import PayloadSchema, RecordSchema
from ..utils.result import Query, Result, fail, ok, res

R = TypeVar("R", bound=RecordSchema)

ServiceError = Union[ValidationError, DbError]


class ResourceService(Generic[R]):
    resource: ClassVar[str]
    record_schema: ClassVar[type[RecordSchema]]
    create_schema: ClassVar[type[PayloadSchema]]
    patch_schema: ClassVar[type[PayloadSchema]]

    def __init__(self, db: Repository, logger: Optional[logging.Logger] = None):
        self.db = db
        self.logger = logger or logging.getLogger(f"incidentstore.services.{self.resource}s")

    # ── Reads ────────────────────────────────────────────────────────────────

    def get_all(self) -> Result[list[R], ServiceError]:
        query = self.db.get_all()
        if query.err is not None:
            self.logger.error("Error getting %ss from database: %r", self.resource, query.err)
            return fail(query.err)

        records: list[R] = []
        for row in query.data:
            parsed = self._parse_record(row)
            if parsed.err is not None:
                return fail(parsed.err)
            records.append(parsed.data)
        return res(records)

    def get(self, id: int) -> Result[Optional[R], ServiceError]:
        query = self.db.get(id)
        if query.err is not None:
            self.logger.error("Error getting %s %s: %r", self.resource, id, query.err)
            return fail(query.err)
        if query.data is None:
            return res(None)
        return self._parse_record(query.data)

    # ── Writes ───────────────────────────────────────────────────────────────

    def create(self, payload: Any) -> Result[R, ServiceError]:
        parsed = self._parse_payload(self.create_schema, payload)
        if parsed.err is not None:
            return fail(parsed.err)

        query = self.db.create(parsed.data.values())
        if query.err is not None:
            self.logger.error("Error creating %s in database: %r", self.resource, query.err)
            return fail(query.err)
        return self._parse_written(query.data)

    def patch(self, id: int, payload: Any) -> Result[Optional[R], ServiceError]:
        parsed = self._parse_payload(self.patch_schema, payload)
        if parsed.err is not None:
            return fail(parsed.err)

        query = self.db.update(id, parsed.data.values())
        if query.err is not None:
            if query.err.missing:
                return res(None)
            self.logger.error("Error updating %s %s in database: %r", self.resource, id, query.err)
            return fail(query.err)
        return self._parse_written(query.data)

    def delete(self, id: int) -> Query[DbError]:
        err = self.db.delete(id)
        if err is not None:
            # Idempotent: deleting what is already gone succeeds.
            if err.missing:
                return ok()
            self.logger.error("Error deleting %s %s from database: %r", self.resource, id, err)
            return err
        return ok()

    # ── Validation ───────────────────────────────────────────────────────────

    def _parse_payload(self, schema: type[PayloadSchema], payload: Any) -> Result[PayloadSchema, ValidationError]:
        try:
            return res(schema.model_validate(payload))
        except ValidationError as e:
            self.logger.debug("Invalid %s payload: %s", self.resource, e)
            return fail(e)

    def _parse_record(self, row: Record) -> Result[R, ValidationError]:
        try:
            return res(self.record_schema.model_validate(row))
        except ValidationError as e:
            self.logger.error("Corrupted %s data in database: %s", self.resource, e)
            return fail(e)

    def _parse_written(self, row: Record) -> Result[R, DbError]:
        # A record that fails its schema right after a write is a server fault.
        parsed = self._parse_record(row)
        if parsed.err is not None:
            return fail(unknown_db_error(f"stored {self.resource} failed validation", parsed.err))
        return res(parsed.data)
