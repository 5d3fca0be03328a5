"""Checked arithmetic primitives.

Every primitive validates its inputs against the configured bounds,
computes the exact result in Python's unbounded ``int`` (which plays the
role of a double-width accumulator), and reports a ``Failure`` instead of
returning anything that does not fit.

The module-level ``checked_*`` functions are bound to the 128-bit signed
kernel; build a ``CheckedArithmetic`` directly for any other width.
"""
from __future__ import annotations

from dataclasses import dataclass

from bounds import INT128, UINT128, Bounds
from result import ErrorKind, Failure, Result, Success


def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity.  Fixed-width
    integer hardware truncates toward zero instead.
    """
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def truncmod(a: int, b: int) -> int:
    """Remainder of ``truncdiv``; takes the sign of the dividend."""
    return a - b * truncdiv(a, b)


@dataclass(frozen=True)
class CheckedArithmetic:
    bounds: Bounds = INT128

    # -- internal helpers ---------------------------------------------------

    def require(self, *values: int) -> None:
        """Reject inputs that are not integers of this width.

        An out-of-range operand is a caller bug, not an arithmetic fault,
        so it raises instead of producing a Failure.
        """
        for v in values:
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"expected int, got {type(v).__name__}")
            if not self.bounds.contains(v):
                raise ValueError(
                    f"{v} is outside bounds [{self.bounds.lo}, {self.bounds.hi}]"
                )

    def fit(self, raw: int) -> Result[int]:
        """Map an exact result onto Success, or the boundary it crossed."""
        if raw > self.bounds.hi:
            return Failure(ErrorKind.OVERFLOW)
        if raw < self.bounds.lo:
            return Failure(ErrorKind.UNDERFLOW)
        return Success(raw)

    # -- public operations --------------------------------------------------

    def add(self, a: int, b: int) -> Result[int]:
        self.require(a, b)
        return self.fit(a + b)

    def subtract(self, a: int, b: int) -> Result[int]:
        self.require(a, b)
        return self.fit(a - b)

    def multiply(self, a: int, b: int) -> Result[int]:
        """Multiplication; any product out of range is an overflow.

        Zero short-circuits before the range check.
        """
        self.require(a, b)
        if a == 0 or b == 0:
            return Success(0)
        product = a * b
        if not self.bounds.contains(product):
            return Failure(ErrorKind.OVERFLOW)
        return Success(product)

    def divide(self, dividend: int, divisor: int) -> Result[int]:
        """Division truncating toward zero.

        ``MIN / -1`` is the one quotient that cannot be represented.
        """
        self.require(dividend, divisor)
        if divisor == 0:
            return Failure(ErrorKind.DIVISION_BY_ZERO)
        quotient = truncdiv(dividend, divisor)
        if not self.bounds.contains(quotient):
            return Failure(ErrorKind.OVERFLOW)
        return Success(quotient)

    def divide_with_fallback(self, dividend: int, divisor: int, fallback: int) -> int:
        """Like ``divide`` but returns ``fallback`` where it would fail."""
        self.require(fallback)
        return self.divide(dividend, divisor).unwrap_or(fallback)

    def modulo(self, dividend: int, divisor: int) -> Result[int]:
        self.require(dividend, divisor)
        if divisor == 0:
            return Failure(ErrorKind.DIVISION_BY_ZERO)
        # |remainder| < |divisor|, so it always fits.
        return Success(truncmod(dividend, divisor))

    def negate(self, value: int) -> Result[int]:
        self.require(value)
        return self.fit(-value)

    def absolute(self, value: int) -> Result[int]:
        """Absolute value; the minimum of a signed width has no counterpart."""
        self.require(value)
        if value >= 0:
            return Success(value)
        if not self.bounds.contains(-value):
            return Failure(ErrorKind.OVERFLOW)
        return Success(-value)


SIGNED = CheckedArithmetic(INT128)
UNSIGNED = CheckedArithmetic(UINT128)

checked_add = SIGNED.add
checked_subtract = SIGNED.subtract
checked_multiply = SIGNED.multiply
checked_divide = SIGNED.divide
divide_with_fallback = SIGNED.divide_with_fallback
checked_modulo = SIGNED.modulo
checked_negate = SIGNED.negate
checked_absolute = SIGNED.absolute
