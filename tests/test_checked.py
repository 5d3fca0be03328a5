"""White-box tests for the checked primitives.

Each class targets one primitive and walks its boundaries: the last
value that fits, the first that does not, and the direction of the
failure.  The 128-bit module-level functions are tested alongside a
4-bit kernel whose whole domain is easy to reason about.
"""
from __future__ import annotations

import pytest

from bounds import INT128, UINT8
from checked import (
    CheckedArithmetic,
    checked_absolute,
    checked_add,
    checked_divide,
    checked_modulo,
    checked_multiply,
    checked_negate,
    checked_subtract,
    divide_with_fallback,
    truncdiv,
    truncmod,
)
from result import ErrorKind, Failure, Success

MAX = INT128.hi
MIN = INT128.lo

OVERFLOW = Failure(ErrorKind.OVERFLOW)
UNDERFLOW = Failure(ErrorKind.UNDERFLOW)
DIV_ZERO = Failure(ErrorKind.DIVISION_BY_ZERO)


# ===================================================================
# INPUT VALIDATION
# ===================================================================

class TestInputValidation:

    def test_operand_above_range(self):
        with pytest.raises(ValueError):
            checked_add(MAX + 1, 0)

    def test_operand_below_range(self):
        with pytest.raises(ValueError):
            checked_add(0, MIN - 1)

    def test_boolean_rejected(self):
        with pytest.raises(TypeError):
            checked_add(True, 1)

    def test_float_rejected(self):
        with pytest.raises(TypeError):
            checked_multiply(1.5, 2)

    @pytest.mark.parametrize("op", ["add", "subtract", "multiply", "divide", "modulo"])
    def test_validation_on_all_ops(self, tiny, op):
        with pytest.raises(ValueError):
            getattr(tiny, op)(100, 1)

    def test_fallback_validated(self, tiny):
        with pytest.raises(ValueError):
            tiny.divide_with_fallback(1, 0, 100)


# ===================================================================
# ADDITION
# ===================================================================

class TestAdd:

    def test_in_range(self):
        assert checked_add(2, 3) == Success(5)

    def test_max_plus_one_overflows(self):
        assert checked_add(MAX, 1) == OVERFLOW

    def test_min_minus_one_underflows(self):
        assert checked_add(MIN, -1) == UNDERFLOW

    def test_just_below_boundary_succeeds(self):
        assert checked_add(MAX - 1, 1) == Success(MAX)
        assert checked_add(MIN + 1, -1) == Success(MIN)

    def test_mixed_signs_never_fail(self):
        assert checked_add(MAX, MIN) == Success(-1)
        assert checked_add(MIN, MAX) == Success(-1)

    def test_max_plus_max(self):
        assert checked_add(MAX, MAX) == OVERFLOW

    def test_tiny_boundaries(self, tiny):
        assert tiny.add(4, 3) == Success(7)
        assert tiny.add(4, 4) == OVERFLOW
        assert tiny.add(-4, -4) == Success(-8)
        assert tiny.add(-5, -4) == UNDERFLOW


# ===================================================================
# SUBTRACTION
# ===================================================================

class TestSubtract:

    def test_in_range(self):
        assert checked_subtract(10, 3) == Success(7)

    def test_negative_minus_positive_underflows(self):
        assert checked_subtract(MIN, 1) == UNDERFLOW

    def test_positive_minus_negative_overflows(self):
        assert checked_subtract(MAX, -1) == OVERFLOW

    def test_zero_minus_min_overflows(self):
        assert checked_subtract(0, MIN) == OVERFLOW

    def test_at_boundary(self):
        assert checked_subtract(MIN + 1, 1) == Success(MIN)
        assert checked_subtract(-1, MIN) == Success(MAX)


# ===================================================================
# MULTIPLICATION
# ===================================================================

class TestMultiply:

    def test_in_range(self):
        assert checked_multiply(6, 7) == Success(42)

    def test_zero_short_circuits(self):
        assert checked_multiply(0, MAX) == Success(0)
        assert checked_multiply(MIN, 0) == Success(0)

    def test_positive_overflow(self):
        assert checked_multiply(MAX, 2) == OVERFLOW

    def test_negative_overflow_is_still_overflow(self):
        assert checked_multiply(MIN, 2) == OVERFLOW
        assert checked_multiply(MAX, -2) == OVERFLOW

    def test_min_times_minus_one(self):
        assert checked_multiply(MIN, -1) == OVERFLOW

    def test_min_times_one(self):
        assert checked_multiply(MIN, 1) == Success(MIN)

    def test_exact_power_of_two_boundary(self):
        assert checked_multiply(2**63, -(2**64)) == Success(MIN)
        assert checked_multiply(2**63, 2**64) == OVERFLOW

    def test_tiny(self, tiny):
        assert tiny.multiply(-2, 4) == Success(-8)
        assert tiny.multiply(2, 4) == OVERFLOW
        assert tiny.multiply(-8, -1) == OVERFLOW


# ===================================================================
# DIVISION AND MODULO
# ===================================================================

class TestDivide:

    def test_exact(self):
        assert checked_divide(42, 6) == Success(7)

    def test_truncates_toward_zero(self):
        assert checked_divide(7, 2) == Success(3)
        assert checked_divide(-7, 2) == Success(-3)
        assert checked_divide(7, -2) == Success(-3)
        assert checked_divide(-7, -2) == Success(3)

    @pytest.mark.parametrize("x", [MIN, -1, 0, 1, MAX])
    def test_division_by_zero(self, x):
        assert checked_divide(x, 0) == DIV_ZERO

    def test_min_over_minus_one_overflows(self):
        assert checked_divide(MIN, -1) == OVERFLOW

    def test_min_over_one(self):
        assert checked_divide(MIN, 1) == Success(MIN)


class TestDivideWithFallback:

    @pytest.mark.parametrize("x", [MIN, -5, 0, 5, MAX])
    def test_zero_divisor_returns_fallback(self, x):
        assert divide_with_fallback(x, 0, -99) == -99

    def test_returns_plain_int(self):
        assert divide_with_fallback(9, 3, 0) == 3

    def test_overflow_returns_fallback(self):
        assert divide_with_fallback(MIN, -1, 0) == 0


class TestModulo:

    def test_sign_of_dividend(self):
        assert checked_modulo(7, 3) == Success(1)
        assert checked_modulo(-7, 3) == Success(-1)
        assert checked_modulo(7, -3) == Success(1)
        assert checked_modulo(-7, -3) == Success(-1)

    @pytest.mark.parametrize("x", [MIN, -1, 0, 1, MAX])
    def test_division_by_zero(self, x):
        assert checked_modulo(x, 0) == DIV_ZERO

    def test_min_mod_minus_one(self):
        assert checked_modulo(MIN, -1) == Success(0)


class TestTruncationHelpers:

    @pytest.mark.parametrize("a,b,q,r", [
        (7, 2, 3, 1),
        (-7, 2, -3, -1),
        (7, -2, -3, 1),
        (-7, -2, 3, -1),
        (6, 3, 2, 0),
        (-6, 3, -2, 0),
    ])
    def test_quotient_and_remainder(self, a, b, q, r):
        assert truncdiv(a, b) == q
        assert truncmod(a, b) == r


# ===================================================================
# ABSOLUTE AND NEGATE
# ===================================================================

class TestAbsolute:

    def test_positive_unchanged(self):
        assert checked_absolute(5) == Success(5)

    def test_negative_flipped(self):
        assert checked_absolute(-5) == Success(5)

    def test_min_overflows(self):
        assert checked_absolute(MIN) == OVERFLOW

    def test_min_plus_one(self):
        assert checked_absolute(MIN + 1) == Success(MAX)


class TestNegate:

    def test_negate(self):
        assert checked_negate(5) == Success(-5)
        assert checked_negate(MAX) == Success(MIN + 1)

    def test_negate_min_overflows(self):
        assert checked_negate(MIN) == OVERFLOW

    def test_unsigned_negate_underflows(self):
        u = CheckedArithmetic(UINT8)
        assert u.negate(0) == Success(0)
        assert u.negate(1) == UNDERFLOW
