"""Conversion and predicate helpers.

Thin, stateless functions around the kernel's value types.  Only the
conversions, the divisibility check and the shifts can fail; the rest
are plain comparisons.
"""
from __future__ import annotations

from bounds import INT128, UINT128, Bounds
from checked import CheckedArithmetic, truncmod
from result import ErrorKind, Failure, Result, Success


# ---------------------------------------------------------------------------
# Signed / unsigned conversion
# ---------------------------------------------------------------------------

def signed_to_unsigned(
    value: int, signed: Bounds = INT128, unsigned: Bounds = UINT128
) -> Result[int]:
    CheckedArithmetic(signed).require(value)
    if value < 0:
        return Failure(ErrorKind.INVALID_CONVERSION)
    if value > unsigned.hi:
        return Failure(ErrorKind.OVERFLOW)
    return Success(value)


def unsigned_to_signed(
    value: int, unsigned: Bounds = UINT128, signed: Bounds = INT128
) -> Result[int]:
    CheckedArithmetic(unsigned).require(value)
    if value > signed.hi:
        return Failure(ErrorKind.OVERFLOW)
    return Success(value)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def minimum(a: int, b: int) -> int:
    return a if a <= b else b


def maximum(a: int, b: int) -> int:
    return a if a >= b else b


def clamp(value: int, low: int, high: int) -> int:
    if low > high:
        raise ValueError(f"low ({low}) must be <= high ({high})")
    return maximum(low, minimum(value, high))


def sign(value: int) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def is_even(value: int) -> bool:
    return value % 2 == 0


def is_odd(value: int) -> bool:
    return value % 2 != 0


def is_positive(value: int) -> bool:
    return value > 0


def is_negative(value: int) -> bool:
    return value < 0


def is_zero(value: int) -> bool:
    return value == 0


def is_divisible(value: int, divisor: int, bounds: Bounds = INT128) -> Result[bool]:
    CheckedArithmetic(bounds).require(value, divisor)
    if divisor == 0:
        return Failure(ErrorKind.DIVISION_BY_ZERO)
    return Success(truncmod(value, divisor) == 0)


# ---------------------------------------------------------------------------
# Bitwise (unsigned only)
# ---------------------------------------------------------------------------

def bit_and(a: int, b: int, bounds: Bounds = UINT128) -> int:
    CheckedArithmetic(bounds).require(a, b)
    return a & b


def bit_or(a: int, b: int, bounds: Bounds = UINT128) -> int:
    CheckedArithmetic(bounds).require(a, b)
    return a | b


def bit_xor(a: int, b: int, bounds: Bounds = UINT128) -> int:
    CheckedArithmetic(bounds).require(a, b)
    return a ^ b


def bit_not(value: int, bounds: Bounds = UINT128) -> int:
    CheckedArithmetic(bounds).require(value)
    return bounds.hi ^ value


def shift_left(value: int, amount: int, bounds: Bounds = UINT128) -> Result[int]:
    """Shift left; losing a set bit is an overflow."""
    CheckedArithmetic(bounds).require(value, amount)
    if amount >= bounds.bits:
        return Failure(ErrorKind.OVERFLOW)
    shifted = value << amount
    if shifted > bounds.hi:
        return Failure(ErrorKind.OVERFLOW)
    return Success(shifted)


def shift_right(value: int, amount: int, bounds: Bounds = UINT128) -> Result[int]:
    CheckedArithmetic(bounds).require(value, amount)
    if amount >= bounds.bits:
        return Failure(ErrorKind.OVERFLOW)
    return Success(value >> amount)
