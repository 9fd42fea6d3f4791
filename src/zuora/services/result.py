"""OperationResult: the uniform outcome of one remote operation.

INVARIANT: business-rule rejections are returned as ``ok=False`` results,
never raised. Batch calls carry one ItemResult per submitted record.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class OperationError(BaseModel):
    """One coded error, optionally tied to a field."""

    model_config = {"frozen": True}

    code: str
    message: str
    field: str | None = None


class ItemResult(BaseModel):
    """Outcome of one record within a (possibly batched) call."""

    model_config = {"frozen": True}

    ok: bool
    id: str | None = None
    errors: list[OperationError] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)


class OperationResult(BaseModel):
    """Universal return type for remote operations.

    Attributes:
        ok: True only if every item succeeded.
        op: Remote operation name (e.g. ``"create"``).
        id: Identifier returned for single-record calls.
        items: Per-record outcomes.
        errors: Errors for the call as a whole plus every item error.
        data: Operation-specific payload.
        warnings: Non-fatal issues.
        meta: Optional metadata (timing).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    id: str | None = None
    items: list[ItemResult] = Field(default_factory=list)
    errors: list[OperationError] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    meta: dict[str, Any] | None = None

    @property
    def error(self) -> OperationError | None:
        return self.errors[0] if self.errors else None

    @property
    def message(self) -> str:
        """All error messages joined with ``"; "``."""
        return "; ".join(err.message for err in self.errors)

    @property
    def success(self) -> bool:
        return self.ok
