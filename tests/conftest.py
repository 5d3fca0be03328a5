"""Shared fixtures for kernel tests."""

from __future__ import annotations

import pytest

from algorithms import BoundedAlgorithms
from bounds import INT128, TINY, UINT128, UTINY
from checked import CheckedArithmetic
from factory import Kernel, KernelFactory

MAX = INT128.hi
MIN = INT128.lo
UMAX = UINT128.hi


@pytest.fixture
def tiny() -> CheckedArithmetic:
    """Signed 4-bit primitives, [-8, 7]."""
    return CheckedArithmetic(TINY)


@pytest.fixture
def tiny_algorithms() -> BoundedAlgorithms:
    return BoundedAlgorithms(
        signed=CheckedArithmetic(TINY),
        unsigned=CheckedArithmetic(UTINY),
    )


@pytest.fixture(scope="session")
def tiny_kernel() -> Kernel:
    return KernelFactory.create(4)


@pytest.fixture(scope="session")
def kernel_128() -> Kernel:
    return KernelFactory.create(128)
