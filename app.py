"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import kernel_router, ops_router, set_kernel
from factory import Kernel, KernelFactory

DEFAULT_BITS = 128


def create_app(kernel: Kernel | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional kernel for testing; builds and verifies a
    128-bit one if omitted.
    """
    if kernel is None:
        kernel = KernelFactory.create(DEFAULT_BITS)

    set_kernel(kernel)

    app = FastAPI(
        title="Checked Arithmetic API",
        description=(
            "Overflow-checked integer arithmetic and bounded algorithms "
            "(power, square root, factorial, Fibonacci, GCD/LCM). Every "
            "arithmetic fault is returned as an explicit error kind."
        ),
        version="0.1.0",
    )
    app.include_router(kernel_router)
    app.include_router(ops_router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
