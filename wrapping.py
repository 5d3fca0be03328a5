"""
Unchecked arithmetic variant.

Same operations as the checked kernel, but results that escape the
bounds are silently brought back in: wrapped like two's-complement
hardware, or saturated at lo/hi.  This is the behaviour the checked
kernel exists to rule out, kept so the two can be compared side by side.

The ERROR strategy raises instead of returning, which makes this class
usable as an exception-style front end to the same bounds.
"""

from __future__ import annotations

from dataclasses import dataclass

from bounds import INT128, Bounds, OverflowStrategy
from checked import truncdiv


@dataclass(frozen=True)
class WrappingArithmetic:
    """
    Arithmetic whose every result is forced into the configured bounds.
    """

    bounds: Bounds = INT128
    overflow: OverflowStrategy = OverflowStrategy.WRAP

    # -- core operations --------------------------------------------------

    def add(self, a: int, b: int) -> int:
        return self.bounds.apply(a + b, self.overflow)

    def sub(self, a: int, b: int) -> int:
        return self.bounds.apply(a - b, self.overflow)

    def mul(self, a: int, b: int) -> int:
        return self.bounds.apply(a * b, self.overflow)

    def div(self, a: int, b: int) -> int:
        if b == 0:
            raise ZeroDivisionError("division by zero")
        return self.bounds.apply(truncdiv(a, b), self.overflow)

    # -- convenience ------------------------------------------------------

    def neg(self, a: int) -> int:
        return self.sub(0, a)

    def abs(self, a: int) -> int:
        return a if a >= 0 else self.neg(a)

    def pow(self, base: int, exp: int) -> int:
        """Repeated multiplication (exp >= 0 only)."""
        if exp < 0:
            raise ValueError("negative exponents not supported")
        result = self.bounds.apply(1, self.overflow)
        for _ in range(exp):
            result = self.mul(result, base)
        return result

    # -- overflow detection -------------------------------------------------

    def add_overflowed(self, a: int, b: int) -> bool:
        """Sign test on a wrapped sum: what hardware flags as overflow.

        Only meaningful for signed bounds under WRAP.
        """
        wrapped = self.add(a, b)
        return (a > 0 and b > 0 and wrapped < 0) or (a < 0 and b < 0 and wrapped >= 0)
