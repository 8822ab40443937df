"""
Result type for parse and load pipelines.

Every parser returns either a Success carrying its value or a Failure
carrying a message and an ErrorKind. Failures pass through map_value and
and_then untouched, so a pipeline stops at the first problem without
raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


class ErrorKind(Enum):
    """Category of a failure."""

    IO = "io"
    SYNTAX = "syntax"
    VALIDATION = "validation"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    message: str
    kind: ErrorKind = ErrorKind.SYNTAX

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


Result = Union[Success[T], Failure]


def success(value: T) -> Success[T]:
    return Success(value)


def failure(message: str, kind: ErrorKind = ErrorKind.SYNTAX) -> Failure:
    return Failure(message, kind)


def map_value(f: Callable[[T], U], result: Result[T]) -> Result[U]:
    """Apply f to a successful value; failures are returned unchanged."""
    if isinstance(result, Failure):
        return result
    return Success(f(result.value))


def and_then(f: Callable[[T], Result[U]], result: Result[T]) -> Result[U]:
    """Chain a step that itself returns a Result."""
    if isinstance(result, Failure):
        return result
    return f(result.value)
