"""FastAPI endpoints exposing the checked kernel.

Routes
------
GET    /kernel          Width, ranges and ceilings of the served kernel
GET    /ops             List operations and their arity
POST   /ops/{name}      Evaluate one operation

An arithmetic failure is a normal 200 response with ``ok: false``.
HTTP errors are reserved for requests that are themselves wrong: an
unknown operation (404) or arguments outside the operation's domain
or of the wrong count (422).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from fastapi import APIRouter, HTTPException

from conversions import signed_to_unsigned, unsigned_to_signed
from factory import Kernel
from models import (
    KernelInfo,
    OperationInfo,
    OperationListResponse,
    OperationRequest,
    OperationResponse,
)
from result import Failure, Success

logger = logging.getLogger(__name__)

kernel_router = APIRouter(prefix="/kernel", tags=["kernel"])
ops_router = APIRouter(prefix="/ops", tags=["operations"])

# The kernel instance is injected by the app factory (see app.py).
_kernel: Kernel | None = None


def set_kernel(kernel: Kernel) -> None:
    """Inject the kernel instance. Called once at app startup."""
    global _kernel
    _kernel = kernel


def get_kernel() -> Kernel:
    assert _kernel is not None, "Kernel not initialized"
    return _kernel


# ---------------------------------------------------------------------------
# Operation registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Operation:
    name: str
    arity: int
    fn: Callable[..., Any]
    description: str = ""


def operations(kernel: Kernel) -> dict[str, Operation]:
    """Every operation the host serves, bound to ``kernel``."""
    s, u, alg = kernel.signed, kernel.unsigned, kernel.algorithms
    sb, ub = s.bounds, u.bounds
    table = [
        Operation("add", 2, s.add, "checked a + b"),
        Operation("subtract", 2, s.subtract, "checked a - b"),
        Operation("multiply", 2, s.multiply, "checked a * b"),
        Operation("divide", 2, s.divide, "checked a / b, truncating"),
        Operation("divide_with_fallback", 3, s.divide_with_fallback,
                  "a / b, or the fallback where divide would fail"),
        Operation("modulo", 2, s.modulo, "remainder of truncating division"),
        Operation("absolute", 1, s.absolute, "checked |a|"),
        Operation("power", 2, alg.integer_power, "checked base ** exponent"),
        Operation("square_root", 1, alg.integer_square_root, "floor square root"),
        Operation("factorial", 1, alg.factorial, "checked n!"),
        Operation("fibonacci", 1, alg.fibonacci, "checked F(n)"),
        Operation("gcd", 2, alg.gcd, "greatest common divisor"),
        Operation("lcm", 2, alg.lcm, "checked least common multiple"),
        Operation("signed_to_unsigned", 1,
                  lambda v: signed_to_unsigned(v, sb, ub), "signed -> unsigned"),
        Operation("unsigned_to_signed", 1,
                  lambda v: unsigned_to_signed(v, ub, sb), "unsigned -> signed"),
    ]
    return {op.name: op for op in table}


def _respond(name: str, outcome: Any) -> OperationResponse:
    if isinstance(outcome, Failure):
        return OperationResponse(operation=name, ok=False, error=outcome.kind)
    if isinstance(outcome, Success):
        outcome = outcome.value
    return OperationResponse(operation=name, ok=True, value=outcome)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@kernel_router.get("", response_model=KernelInfo)
def kernel_info() -> KernelInfo:
    """Describe the kernel being served."""
    kernel = get_kernel()
    return KernelInfo(
        bits=kernel.bits,
        signed_min=kernel.signed.bounds.lo,
        signed_max=kernel.signed.bounds.hi,
        unsigned_max=kernel.unsigned.bounds.hi,
        factorial_ceiling=kernel.algorithms.factorial_ceiling,
        fibonacci_ceiling=kernel.algorithms.fibonacci_ceiling,
    )


@ops_router.get("", response_model=OperationListResponse)
def list_operations() -> OperationListResponse:
    items = [
        OperationInfo(name=op.name, arity=op.arity, description=op.description)
        for op in operations(get_kernel()).values()
    ]
    return OperationListResponse(items=items, total=len(items))


@ops_router.post("/{name}", response_model=OperationResponse)
def evaluate(name: str, payload: OperationRequest) -> OperationResponse:
    """Evaluate one operation on the given arguments."""
    op = operations(get_kernel()).get(name)
    if op is None:
        raise HTTPException(status_code=404, detail=f"Operation not found: {name}")

    if len(payload.args) != op.arity:
        logger.debug("rejected %s: %d args, expected %d", name, len(payload.args), op.arity)
        raise HTTPException(
            status_code=422,
            detail=f"{name} takes {op.arity} argument(s), got {len(payload.args)}",
        )

    try:
        outcome = op.fn(*payload.args)
    except ValueError as e:
        logger.debug("rejected %s%s: %s", name, tuple(payload.args), e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    return _respond(name, outcome)
