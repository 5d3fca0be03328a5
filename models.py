"""Request and response models for the HTTP host.

The kernel itself knows nothing about pydantic; these models only shape
what crosses the wire.  Integers are arbitrary-precision JSON numbers,
so 128-bit values round-trip unchanged.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from result import ErrorKind


class OperationRequest(BaseModel):
    """Positional integer arguments for one operation."""

    args: list[int] = Field(..., max_length=3)

    @field_validator("args", mode="before")
    @classmethod
    def no_booleans(cls, v):
        if isinstance(v, list) and any(isinstance(x, bool) for x in v):
            raise ValueError("arguments must be integers, not booleans")
        return v


class OperationResponse(BaseModel):
    """Outcome of one operation: a value, or the kind of failure."""

    operation: str
    ok: bool
    value: int | None = None
    error: ErrorKind | None = None


class OperationInfo(BaseModel):
    name: str
    arity: int
    description: str = ""


class OperationListResponse(BaseModel):
    items: list[OperationInfo]
    total: int


class KernelInfo(BaseModel):
    bits: int
    signed_min: int
    signed_max: int
    unsigned_max: int
    factorial_ceiling: int
    fibonacci_ceiling: int
