"""
Contracts for the checked arithmetic kernel.

A Contract is the machine-readable statement of what one operation must
do.  It is purely declarative: each Property names a predicate over the
operation and a tuple of inputs, and says which Bounds every input is
drawn from.  The factory (see factory.py) evaluates the predicates
exhaustively or by sampling before it hands a kernel out.

Exactness properties compare against Python's unbounded ``int``: the
checked result must be ``Success`` of the true value when it fits, and
the right ``Failure`` when it does not.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable

from algorithms import BoundedAlgorithms
from bounds import Bounds
from checked import truncdiv, truncmod
from result import ErrorKind, Failure, Result, Success
from wrapping import WrappingArithmetic


# ---------------------------------------------------------------------------
# Core contract primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Property:
    """A single verifiable property of an operation."""

    name: str
    description: str
    domains: tuple[Bounds, ...]
    predicate: Callable[..., bool]

    @property
    def arity(self) -> int:
        return len(self.domains)

    @property
    def combinations(self) -> int:
        return math.prod(d.width for d in self.domains)

    def check(self, *args: Any) -> bool:
        """Evaluate the property predicate with the given arguments."""
        return self.predicate(*args)


@dataclass
class Contract:
    """An ordered collection of properties for one operation."""

    name: str
    operation: Callable[..., Any]
    properties: list[Property] = field(default_factory=list)

    def add(self, prop: Property) -> None:
        self.properties.append(prop)

    def __iter__(self):
        return iter(self.properties)

    def __len__(self):
        return len(self.properties)


# ---------------------------------------------------------------------------
# Reference results computed without bounds
# ---------------------------------------------------------------------------

def exact(bounds: Bounds, raw: int) -> Result[int]:
    """What a checked add/subtract must return for the true value ``raw``."""
    if raw > bounds.hi:
        return Failure(ErrorKind.OVERFLOW)
    if raw < bounds.lo:
        return Failure(ErrorKind.UNDERFLOW)
    return Success(raw)


def exact_or_overflow(bounds: Bounds, raw: int) -> Result[int]:
    """Reference for operations that report every escape as an overflow."""
    if bounds.contains(raw):
        return Success(raw)
    return Failure(ErrorKind.OVERFLOW)


def exact_power(bounds: Bounds, base: int, exponent: int) -> Result[int]:
    if exponent == 0:
        return Success(1)
    if base in (0, 1):
        return Success(base)
    if base == -1:
        return Success(-1 if exponent % 2 else 1)
    # |base| >= 2, so base**exponent has at least exponent + 1 bits.
    if exponent > bounds.bits:
        return Failure(ErrorKind.OVERFLOW)
    return exact_or_overflow(bounds, base ** exponent)


def exact_fibonacci(position: int) -> int:
    previous, current = 0, 1
    for _ in range(position):
        previous, current = current, previous + current
    return previous


# ---------------------------------------------------------------------------
# Contract builders for the checked primitives
# ---------------------------------------------------------------------------

def addition_contract(algorithms: BoundedAlgorithms) -> Contract:
    s = algorithms.signed
    b = s.bounds
    wrapping = WrappingArithmetic(b)

    contract = Contract(name="checked_add", operation=s.add)

    contract.add(Property(
        name="exact",
        description="Success(a + b) when it fits, else the boundary crossed",
        domains=(b, b),
        predicate=lambda add, x, y: add(x, y) == exact(b, x + y),
    ))

    contract.add(Property(
        name="sign_rule",
        description="Fails exactly when the wrapped sum flips sign",
        domains=(b, b),
        predicate=lambda add, x, y: (
            add(x, y).is_failure == wrapping.add_overflowed(x, y)
        ),
    ))

    contract.add(Property(
        name="commutativity",
        description="a + b == b + a",
        domains=(b, b),
        predicate=lambda add, x, y: add(x, y) == add(y, x),
    ))

    contract.add(Property(
        name="identity",
        description="a + 0 == a",
        domains=(b,),
        predicate=lambda add, x: add(x, 0) == Success(x),
    ))

    return contract


def subtraction_contract(algorithms: BoundedAlgorithms) -> Contract:
    s = algorithms.signed
    b = s.bounds

    contract = Contract(name="checked_subtract", operation=s.subtract)

    contract.add(Property(
        name="exact",
        description="Success(a - b) when it fits, else the boundary crossed",
        domains=(b, b),
        predicate=lambda sub, x, y: sub(x, y) == exact(b, x - y),
    ))

    contract.add(Property(
        name="self_inverse",
        description="a - a == 0",
        domains=(b,),
        predicate=lambda sub, x: sub(x, x) == Success(0),
    ))

    return contract


def multiplication_contract(algorithms: BoundedAlgorithms) -> Contract:
    s = algorithms.signed
    b = s.bounds

    contract = Contract(name="checked_multiply", operation=s.multiply)

    contract.add(Property(
        name="exact",
        description="Success(a * b) when it fits, else overflow",
        domains=(b, b),
        predicate=lambda mul, x, y: mul(x, y) == exact_or_overflow(b, x * y),
    ))

    contract.add(Property(
        name="inverse_division",
        description="product / a reconstructs b for every success",
        domains=(b, b),
        predicate=lambda mul, x, y: (
            x == 0 or mul(x, y).is_failure or truncdiv(mul(x, y).value, x) == y
        ),
    ))

    contract.add(Property(
        name="commutativity",
        description="a * b == b * a",
        domains=(b, b),
        predicate=lambda mul, x, y: mul(x, y) == mul(y, x),
    ))

    contract.add(Property(
        name="zero",
        description="a * 0 == 0",
        domains=(b,),
        predicate=lambda mul, x: mul(x, 0) == Success(0),
    ))

    return contract


def division_contract(algorithms: BoundedAlgorithms) -> Contract:
    s = algorithms.signed
    b = s.bounds

    def _expected(x: int, y: int) -> Result[int]:
        if y == 0:
            return Failure(ErrorKind.DIVISION_BY_ZERO)
        return exact_or_overflow(b, truncdiv(x, y))

    contract = Contract(name="checked_divide", operation=s.divide)

    contract.add(Property(
        name="exact",
        description="Truncated quotient, division-by-zero or overflow",
        domains=(b, b),
        predicate=lambda div, x, y: div(x, y) == _expected(x, y),
    ))

    contract.add(Property(
        name="reconstruction",
        description="quotient * b + remainder == a",
        domains=(b, b),
        predicate=lambda div, x, y: (
            div(x, y).is_failure
            or div(x, y).value * y + s.modulo(x, y).value == x
        ),
    ))

    contract.add(Property(
        name="fallback",
        description="divide_with_fallback returns the fallback exactly where divide fails",
        domains=(b, b, b),
        predicate=lambda div, x, y, f: (
            s.divide_with_fallback(x, y, f) == div(x, y).unwrap_or(f)
        ),
    ))

    return contract


def modulo_contract(algorithms: BoundedAlgorithms) -> Contract:
    s = algorithms.signed
    b = s.bounds

    contract = Contract(name="checked_modulo", operation=s.modulo)

    contract.add(Property(
        name="exact",
        description="Remainder of truncating division, or division-by-zero",
        domains=(b, b),
        predicate=lambda mod, x, y: mod(x, y) == (
            Failure(ErrorKind.DIVISION_BY_ZERO) if y == 0 else Success(truncmod(x, y))
        ),
    ))

    contract.add(Property(
        name="sign_of_dividend",
        description="A nonzero remainder has the sign of the dividend",
        domains=(b, b),
        predicate=lambda mod, x, y: (
            y == 0 or mod(x, y).value == 0 or (mod(x, y).value < 0) == (x < 0)
        ),
    ))

    return contract


def absolute_contract(algorithms: BoundedAlgorithms) -> Contract:
    s = algorithms.signed
    b = s.bounds

    contract = Contract(name="checked_absolute", operation=s.absolute)

    contract.add(Property(
        name="exact",
        description="|a| when it fits, overflow for the minimum",
        domains=(b,),
        predicate=lambda absolute, x: absolute(x) == exact_or_overflow(b, abs(x)),
    ))

    return contract


# ---------------------------------------------------------------------------
# Contract builders for the bounded algorithms
# ---------------------------------------------------------------------------

def power_contract(algorithms: BoundedAlgorithms) -> Contract:
    sb = algorithms.signed.bounds
    ub = algorithms.unsigned.bounds

    contract = Contract(name="integer_power", operation=algorithms.integer_power)

    contract.add(Property(
        name="exact",
        description="base ** exponent when it fits, else overflow",
        domains=(sb, ub),
        predicate=lambda power, x, e: power(x, e) == exact_power(sb, x, e),
    ))

    contract.add(Property(
        name="zero_exponent",
        description="x ** 0 == 1 for every x, including 0",
        domains=(sb,),
        predicate=lambda power, x: power(x, 0) == Success(1),
    ))

    contract.add(Property(
        name="zero_base",
        description="0 ** e == 0 for every e > 0",
        domains=(ub,),
        predicate=lambda power, e: e == 0 or power(0, e) == Success(0),
    ))

    return contract


def square_root_contract(algorithms: BoundedAlgorithms) -> Contract:
    ub = algorithms.unsigned.bounds

    def _floor_root(root: Result[int], n: int) -> bool:
        if root.is_failure:
            return False
        r = root.value
        return r * r <= n < (r + 1) * (r + 1)

    contract = Contract(
        name="integer_square_root", operation=algorithms.integer_square_root
    )

    contract.add(Property(
        name="floor",
        description="r*r <= n < (r+1)*(r+1)",
        domains=(ub,),
        predicate=lambda sqrt, n: _floor_root(sqrt(n), n),
    ))

    return contract


def factorial_contract(algorithms: BoundedAlgorithms) -> Contract:
    ub = algorithms.unsigned.bounds
    ceiling = algorithms.factorial_ceiling

    contract = Contract(name="factorial", operation=algorithms.factorial)

    contract.add(Property(
        name="exact",
        description="n! when n is under the ceiling and n! fits, else overflow",
        domains=(ub,),
        predicate=lambda fact, n: fact(n) == (
            Failure(ErrorKind.OVERFLOW) if n > ceiling
            else exact_or_overflow(ub, math.factorial(n))
        ),
    ))

    return contract


def fibonacci_contract(algorithms: BoundedAlgorithms) -> Contract:
    ub = algorithms.unsigned.bounds
    ceiling = algorithms.fibonacci_ceiling

    contract = Contract(name="fibonacci", operation=algorithms.fibonacci)

    contract.add(Property(
        name="exact",
        description="F(n) when n is under the ceiling and F(n) fits, else overflow",
        domains=(ub,),
        predicate=lambda fib, n: fib(n) == (
            Failure(ErrorKind.OVERFLOW) if n > ceiling
            else exact_or_overflow(ub, exact_fibonacci(n))
        ),
    ))

    return contract


def gcd_contract(algorithms: BoundedAlgorithms) -> Contract:
    ub = algorithms.unsigned.bounds

    contract = Contract(name="gcd", operation=algorithms.gcd)

    contract.add(Property(
        name="exact",
        description="Agrees with Euclid over unbounded ints",
        domains=(ub, ub),
        predicate=lambda gcd, a, b: gcd(a, b) == math.gcd(a, b),
    ))

    contract.add(Property(
        name="identity",
        description="gcd(a, 0) == a",
        domains=(ub,),
        predicate=lambda gcd, a: gcd(a, 0) == a,
    ))

    return contract


def lcm_contract(algorithms: BoundedAlgorithms) -> Contract:
    ub = algorithms.unsigned.bounds

    def _expected(a: int, b: int) -> Result[int]:
        if a == 0 or b == 0:
            return Success(0)
        return exact_or_overflow(ub, a * b // math.gcd(a, b))

    contract = Contract(name="lcm", operation=algorithms.lcm)

    contract.add(Property(
        name="exact",
        description="lcm fails only when the true LCM does not fit",
        domains=(ub, ub),
        predicate=lambda lcm, a, b: lcm(a, b) == _expected(a, b),
    ))

    contract.add(Property(
        name="gcd_times_lcm",
        description="gcd(a, b) * lcm(a, b) == a * b",
        domains=(ub, ub),
        predicate=lambda lcm, a, b: (
            lcm(a, b).is_failure
            or algorithms.gcd(a, b) * lcm(a, b).value == a * b
        ),
    ))

    return contract


def kernel_contracts(algorithms: BoundedAlgorithms) -> list[Contract]:
    """Every contract a kernel must satisfy, primitives first."""
    builders = [
        addition_contract,
        subtraction_contract,
        multiplication_contract,
        division_contract,
        modulo_contract,
        absolute_contract,
        power_contract,
        square_root_contract,
        factorial_contract,
        fibonacci_contract,
        gcd_contract,
        lcm_contract,
    ]
    return [build(algorithms) for build in builders]
