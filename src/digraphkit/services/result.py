"""ServiceResult and ServiceError — the result-typed graph contract.

INVARIANT: Every DigraphService method returns ServiceResult. Failed
preconditions surface as ``ok=False`` with a ServiceError whose ``code``
matches the raising ``DigraphError.code``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from digraphkit.domain.errors import DigraphError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: DigraphError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=dict(exc.detail))


class ServiceResult(BaseModel):
    """Return type for all DigraphService operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"add_edge"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal observations (e.g. unreachable vertices).
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: DigraphError) -> ServiceResult:
        """Build an ``ok=False`` result from a graph error."""
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
