"""Result type shared by every checked operation.

A checked operation never raises on an arithmetic fault.  It returns
either ``Success(value)`` or ``Failure(kind)``; callers chain dependent
steps with ``and_then`` so the first failure short-circuits the rest.

``unwrap()`` bridges back to exceptions for callers that prefer them.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


class ErrorKind(str, Enum):
    """Fixed taxonomy of arithmetic failures."""

    OVERFLOW = "arithmetic_overflow"
    UNDERFLOW = "arithmetic_underflow"
    DIVISION_BY_ZERO = "division_by_zero"
    # Reserved: no integer operation produces these today.
    NEGATIVE_SQUARE_ROOT = "negative_square_root"
    DOMAIN_VIOLATION = "domain_violation"
    INVALID_CONVERSION = "invalid_conversion"


class CheckedArithmeticError(ArithmeticError):
    """Raised when a failed result is unwrapped."""

    def __init__(self, kind: ErrorKind, detail: str = ""):
        self.kind = kind
        message = kind.value if not detail else f"{kind.value}: {detail}"
        super().__init__(message)


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Success[U]:
        return Success(fn(self.value))

    def and_then(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        return fn(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def map(self, fn: Callable) -> Failure:
        return self

    def and_then(self, fn: Callable) -> Failure:
        return self

    def unwrap(self):
        raise CheckedArithmeticError(self.kind)

    def unwrap_or(self, default):
        return default


Result = Union[Success[T], Failure]
