"""Bounded numeric algorithms built on the checked primitives.

Each algorithm enforces its own domain or ceiling first, then routes
every step that could leave the representable range through a checked
primitive.  The first failure is returned as-is; there are no partial
results.

All loops are explicit: power iterates over the exponent's bits,
square root over a strictly decreasing guess, factorial and Fibonacci
over a ceiling-capped range.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from checked import SIGNED, UNSIGNED, CheckedArithmetic
from result import ErrorKind, Failure, Result, Success

# 20! is the largest factorial that fits 64 unsigned bits.
FACTORIAL_CEILING = 20
FIBONACCI_CEILING = 100


@dataclass(frozen=True)
class BoundedAlgorithms:
    signed: CheckedArithmetic = SIGNED
    unsigned: CheckedArithmetic = UNSIGNED
    factorial_ceiling: int = FACTORIAL_CEILING
    fibonacci_ceiling: int = FIBONACCI_CEILING

    def __post_init__(self):
        s, u = self.signed.bounds, self.unsigned.bounds
        if not (s.lo < 0 < s.hi):
            raise ValueError(f"signed bounds must straddle zero, got [{s.lo}, {s.hi}]")
        if u.lo != 0 or u.hi < 1:
            raise ValueError(f"unsigned bounds must be [0, n>=1], got [{u.lo}, {u.hi}]")

    # -- power and root -----------------------------------------------------

    def integer_power(self, base: int, exponent: int) -> Result[int]:
        """``base ** exponent`` by binary exponentiation.

        Walks the exponent's bits from the most significant one: square,
        then multiply by ``base`` when the bit is set.  That is the same
        multiplication sequence as halving the exponent recursively, with
        O(log exponent) checked multiplications and constant stack.
        """
        self.signed.require(base)
        self.unsigned.require(exponent)
        if exponent == 0:
            return Success(1)

        result = base
        for bit in bin(exponent)[3:]:
            step = self.signed.multiply(result, result)
            if bit == "1":
                step = step.and_then(lambda squared: self.signed.multiply(squared, base))
            if step.is_failure:
                return step
            result = step.value
        return Success(result)

    def square_root_guesses(self, n: int) -> Iterator[int]:
        """Successive Newton guesses for the floor square root of ``n``.

        Starts at ``n // 2 + 1`` (above the root for n >= 2) and yields
        each strictly smaller guess; the last one is the floor root.
        The midpoint is taken as ``guess + (n // guess - guess) // 2``,
        which lies between ``n // guess`` and ``guess`` and so never
        leaves the unsigned range.
        """
        self.unsigned.require(n)
        if n < 2:
            yield n
            return

        guess = n // 2 + 1
        while True:
            yield guess
            candidate = guess + (n // guess - guess) // 2
            if candidate >= guess:
                return
            guess = candidate

    def integer_square_root(self, n: int) -> Result[int]:
        """Floor of the square root of ``n`` by Newton's method.

        Every guess is a positive integer strictly below the previous
        one, so the loop terminates; it never fails for an in-range ``n``.
        """
        *_, root = self.square_root_guesses(n)
        assert root * root <= n < (root + 1) * (root + 1)
        return Success(root)

    # -- ceiling-capped sequences -------------------------------------------

    def factorial(self, n: int) -> Result[int]:
        self.unsigned.require(n)
        if n > self.factorial_ceiling:
            return Failure(ErrorKind.OVERFLOW)

        acc = 1
        for factor in range(2, n + 1):
            step = self.unsigned.multiply(acc, factor)
            if step.is_failure:
                return step
            acc = step.value
        return Success(acc)

    def fibonacci(self, position: int) -> Result[int]:
        """Value at ``position`` with fibonacci(0) == 0, fibonacci(1) == 1."""
        self.unsigned.require(position)
        if position > self.fibonacci_ceiling:
            return Failure(ErrorKind.OVERFLOW)
        if position == 0:
            return Success(0)

        previous, current = 0, 1
        for _ in range(position - 1):
            step = self.unsigned.add(previous, current)
            if step.is_failure:
                return step
            previous, current = current, step.value
        return Success(current)

    # -- divisibility -------------------------------------------------------

    def gcd(self, a: int, b: int) -> int:
        """Euclid's algorithm; intermediates never exceed max(a, b)."""
        self.unsigned.require(a, b)
        while b:
            a, b = b, a % b
        return a

    def lcm(self, a: int, b: int) -> Result[int]:
        """Least common multiple, 0 when either input is 0.

        Divides by the GCD before multiplying, and checks the
        multiplication, so this fails only when the LCM itself does not
        fit the unsigned width.
        """
        self.unsigned.require(a, b)
        if a == 0 or b == 0:
            return Success(0)
        return self.unsigned.multiply(a // self.gcd(a, b), b)

    # -- chained ------------------------------------------------------------

    def weighted_average(
        self, value_a: int, weight_a: int, value_b: int, weight_b: int
    ) -> Result[int]:
        """``(value_a*weight_a + value_b*weight_b) / (weight_a + weight_b)``.

        Steps run in that order and stop at the first failure, which
        decides the reported kind when several steps would overflow.
        """
        s = self.signed
        return s.multiply(value_a, weight_a).and_then(
            lambda part_a: s.multiply(value_b, weight_b).and_then(
                lambda part_b: s.add(part_a, part_b).and_then(
                    lambda total: s.add(weight_a, weight_b).and_then(
                        lambda weights: s.divide(total, weights)
                    )
                )
            )
        )


ALGORITHMS = BoundedAlgorithms()

integer_power = ALGORITHMS.integer_power
integer_square_root = ALGORITHMS.integer_square_root
factorial = ALGORITHMS.factorial
fibonacci = ALGORITHMS.fibonacci
gcd = ALGORITHMS.gcd
lcm = ALGORITHMS.lcm
weighted_average = ALGORITHMS.weighted_average
