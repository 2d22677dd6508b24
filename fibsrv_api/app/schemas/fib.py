"""
Pydantic schemas for the Fibonacci endpoints.

Results are plain integers.  Fibonacci values are unsigned 64-bit and
may exceed the range of a signed 64-bit integer; JSON numbers carry
them unchanged.
"""

from pydantic import BaseModel, Field


class ResultResponse(BaseModel):
    """Single numeric result of a computation or count."""

    result: int = Field(..., ge=0, description="Fib(n) or the requested count")


class StatusResponse(BaseModel):
    """Outcome of an administrative action."""

    status: str


class StatsResponse(BaseModel):
    """Memo lookup counters since process start."""

    hits: int = Field(0, ge=0)
    misses: int = Field(0, ge=0)


class InfoResponse(BaseModel):
    """Service identification."""

    project: str
    version: str
    store: str = Field(..., description="Memo store backend in use")
