"""
Two-variant outcome wrapper used instead of exceptions for expected failures.

A ``Result`` is either ``(value, None)`` or ``(None, error)``. The value of a
success may itself be ``None`` ("nothing there"), so success is decided by
``err`` alone. A ``Query`` is the payload-free variant: ``None`` on success,
the error otherwise.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)

Query = Optional[E]


@dataclass(frozen=True)
class Result(Generic[T, E]):
    data: Optional[T] = None
    err: Optional[E] = None

    def __post_init__(self) -> None:
        if self.data is not None and self.err is not None:
            raise ValueError("result cannot carry both data and an error")

    @property
    def is_ok(self) -> bool:
        return self.err is None


def res(data: T) -> Result[T, E]:
    return Result(data=data, err=None)


def fail(err: E) -> Result[T, E]:
    if err is None:
        raise ValueError("failed result requires an error")
    return Result(data=None, err=err)


def ok() -> None:
    return None
