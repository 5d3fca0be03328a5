"""
Bounds layer for the checked arithmetic kernel.

A Bounds value is the fixed-width integer domain an operation works in.
Every result handed back by the checked kernel is guaranteed to live
inside its bounds; anything that would escape is reported as a failure.

This module also provides the clamping and wrapping strategies used by
the unchecked variant in ``wrapping.py``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from result import CheckedArithmeticError, ErrorKind


class OverflowStrategy(Enum):
    """What the unchecked variant does when a result would exceed the bounds."""

    CLAMP = auto()       # Saturate at lo/hi
    WRAP = auto()        # Two's-complement wrap-around
    ERROR = auto()       # Raise CheckedArithmeticError


@dataclass(frozen=True)
class Bounds:
    """
    An inclusive integer domain [lo, hi].

    Signed bounds straddle zero, unsigned bounds start at zero.
    """

    lo: int
    hi: int

    def __post_init__(self):
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return self.hi - self.lo + 1

    @property
    def bits(self) -> int:
        """Bit width needed to encode every value in the domain."""
        return (self.width - 1).bit_length()

    @property
    def signed(self) -> bool:
        return self.lo < 0

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def all_values(self) -> range:
        return range(self.lo, self.hi + 1)

    def clamp(self, value: int) -> int:
        return max(self.lo, min(self.hi, value))

    def wrap(self, value: int) -> int:
        return self.lo + (value - self.lo) % self.width

    def apply(self, raw: int, strategy: OverflowStrategy) -> int:
        """Apply an overflow strategy to bring a raw result into bounds."""
        if self.lo <= raw <= self.hi:
            return raw

        if strategy == OverflowStrategy.CLAMP:
            return self.clamp(raw)

        if strategy == OverflowStrategy.WRAP:
            return self.wrap(raw)

        # ERROR
        kind = ErrorKind.OVERFLOW if raw > self.hi else ErrorKind.UNDERFLOW
        raise CheckedArithmeticError(
            kind, f"{raw} is outside bounds [{self.lo}, {self.hi}]"
        )


def signed_bounds(bits: int) -> Bounds:
    """Two's-complement range for a signed integer of ``bits`` bits."""
    if bits < 2:
        raise ValueError(f"signed width needs at least 2 bits, got {bits}")
    return Bounds(lo=-(2 ** (bits - 1)), hi=2 ** (bits - 1) - 1)


def unsigned_bounds(bits: int) -> Bounds:
    """Range for an unsigned integer of ``bits`` bits."""
    if bits < 1:
        raise ValueError(f"unsigned width needs at least 1 bit, got {bits}")
    return Bounds(lo=0, hi=2 ** bits - 1)


# ---------------------------------------------------------------------------
# Common bounds presets
# ---------------------------------------------------------------------------

INT8 = signed_bounds(8)
INT16 = signed_bounds(16)
INT32 = signed_bounds(32)
INT64 = signed_bounds(64)
INT128 = signed_bounds(128)
UINT8 = unsigned_bounds(8)
UINT16 = unsigned_bounds(16)
UINT32 = unsigned_bounds(32)
UINT64 = unsigned_bounds(64)
UINT128 = unsigned_bounds(128)

# Small bounds useful for exhaustive verification
TINY = signed_bounds(4)
UTINY = unsigned_bounds(4)
