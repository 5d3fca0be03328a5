"""
The kernel factory.

The factory does not just construct a kernel for a bit width - it
*verifies* it against every contract in contracts.py before releasing
it.

Flow:
  1. Caller requests a kernel for a given width.
  2. Factory builds the signed/unsigned primitives and the algorithms.
  3. Factory runs the full contract suite against them.
  4. If verification passes  -> return the kernel.
     If verification fails   -> raise, never hand out a broken instance.

For small widths every input combination is checked.  For large ones
(the 128-bit default) the factory checks every combination of edge
values plus a seeded random sample, so the outcome is reproducible.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field

from algorithms import FACTORIAL_CEILING, FIBONACCI_CEILING, BoundedAlgorithms
from bounds import Bounds, signed_bounds, unsigned_bounds
from checked import CheckedArithmetic
from contracts import Contract, Property, kernel_contracts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Kernel:
    """Checked primitives and algorithms for one bit width."""

    bits: int
    algorithms: BoundedAlgorithms

    @property
    def signed(self) -> CheckedArithmetic:
        return self.algorithms.signed

    @property
    def unsigned(self) -> CheckedArithmetic:
        return self.algorithms.unsigned


@dataclass
class VerificationResult:
    """Outcome of verifying one property."""

    property_name: str
    passed: bool
    counterexample: tuple | None = None
    error: str | None = None
    tests_run: int = 0

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = f"  counterexample={self.counterexample}" if self.counterexample else ""
        err = f"  error={self.error}" if self.error else ""
        return f"[{status}] {self.property_name} ({self.tests_run} tests){ce}{err}"


@dataclass
class VerificationReport:
    """Aggregate result of verifying one contract."""

    contract_name: str
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def tests_run(self) -> int:
        return sum(r.tests_run for r in self.results)

    def summary(self) -> str:
        lines = [f"--- {self.contract_name} ---"]
        for r in self.results:
            lines.append(f"  {r}")
        status = "ALL PASSED" if self.passed else "FAILED"
        lines.append(f"  => {status}")
        return "\n".join(lines)


class VerificationError(Exception):
    """Raised when a kernel fails one of its contracts."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(f"Verification failed:\n{report.summary()}")


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class KernelFactory:
    """Produces Kernel instances that are proven against their contracts."""

    EXHAUSTIVE_LIMIT = 4096   # max input combinations for brute-force check
    SAMPLE_COUNT = 1000
    SEED = 0

    @classmethod
    def create(
        cls,
        bits: int,
        factorial_ceiling: int = FACTORIAL_CEILING,
        fibonacci_ceiling: int = FIBONACCI_CEILING,
    ) -> Kernel:
        """Build, verify, and return a Kernel for ``bits``-wide integers."""
        algorithms = BoundedAlgorithms(
            signed=CheckedArithmetic(signed_bounds(bits)),
            unsigned=CheckedArithmetic(unsigned_bounds(bits)),
            factorial_ceiling=factorial_ceiling,
            fibonacci_ceiling=fibonacci_ceiling,
        )
        cls.verify(algorithms)
        return Kernel(bits=bits, algorithms=algorithms)

    @classmethod
    def verify(cls, algorithms: BoundedAlgorithms) -> list[VerificationReport]:
        """Check every contract; raise VerificationError on the first failure."""
        reports = []
        for contract in kernel_contracts(algorithms):
            report = cls._verify_contract(contract)
            if not report.passed:
                logger.error("kernel rejected\n%s", report.summary())
                raise VerificationError(report)
            reports.append(report)
        logger.info(
            "kernel verified: signed [%d, %d], %d contracts, %d checks",
            algorithms.signed.bounds.lo,
            algorithms.signed.bounds.hi,
            len(reports),
            sum(r.tests_run for r in reports),
        )
        return reports

    # -- internal ---------------------------------------------------------

    @classmethod
    def _verify_contract(cls, contract: Contract) -> VerificationReport:
        report = VerificationReport(contract_name=contract.name)
        for prop in contract:
            result = cls._verify_property(prop, contract.operation)
            report.results.append(result)
        return report

    @classmethod
    def _verify_property(cls, prop: Property, op) -> VerificationResult:
        if prop.combinations <= cls.EXHAUSTIVE_LIMIT:
            inputs = itertools.product(*(d.all_values() for d in prop.domains))
        else:
            inputs = _generate_samples(prop.domains, cls.SAMPLE_COUNT, cls.SEED)

        tests_run = 0
        for combo in inputs:
            tests_run += 1
            try:
                held = prop.check(op, *combo)
            except (ArithmeticError, ValueError, TypeError, AssertionError) as e:
                return VerificationResult(
                    property_name=prop.name,
                    passed=False,
                    counterexample=combo,
                    error=repr(e),
                    tests_run=tests_run,
                )
            if not held:
                return VerificationResult(
                    property_name=prop.name,
                    passed=False,
                    counterexample=combo,
                    tests_run=tests_run,
                )

        return VerificationResult(
            property_name=prop.name,
            passed=True,
            tests_run=tests_run,
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def edge_values(bounds: Bounds) -> list[int]:
    """Boundary values of a domain, plus the small integers around zero."""
    candidates = [bounds.lo, bounds.lo + 1, -2, -1, 0, 1, 2, bounds.hi - 1, bounds.hi]
    return sorted({v for v in candidates if bounds.contains(v)})


def _generate_samples(
    domains: tuple[Bounds, ...], count: int, seed: int
) -> list[tuple[int, ...]]:
    """All edge-value combinations, then a seeded random fill."""
    rng = random.Random(seed)
    samples = list(itertools.product(*(edge_values(d) for d in domains)))

    while len(samples) < count:
        samples.append(tuple(rng.randint(d.lo, d.hi) for d in domains))

    return samples
