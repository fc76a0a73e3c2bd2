"""
Store error taxonomy.

One error class tagged with a kind instead of a subclass hierarchy: callers
switch on ``err.kind`` (or ``err.missing``). Schema validation failures are
``pydantic.ValidationError`` and never appear here.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class DbErrorKind(str, Enum):
    UNKNOWN = "unknown"
    MISSING_RESOURCE = "missing_resource"


class DbError(Exception):
    def __init__(self, kind: DbErrorKind, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def missing(self) -> bool:
        return self.kind is DbErrorKind.MISSING_RESOURCE

    def __repr__(self) -> str:
        return f"DbError(kind={self.kind.value!r}, message={self.message!r}, cause={self.cause!r})"


def unknown_db_error(message: str, cause: Optional[BaseException] = None) -> DbError:
    return DbError(DbErrorKind.UNKNOWN, message, cause)


def missing_resource_error(message: str, cause: Optional[BaseException] = None) -> DbError:
    return DbError(DbErrorKind.MISSING_RESOURCE, message, cause)
