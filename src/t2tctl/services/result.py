"""Result envelope shared by every service operation.

INVARIANT: service methods return a ServiceResult and never raise for
user input or task-source trouble.  Failures carry an :class:`ErrorCode`.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Machine-readable failure codes, stable across releases."""

    INVALID_DATE = "INVALID_DATE"
    UNKNOWN_STATUS = "UNKNOWN_STATUS"
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"
    SOURCE_ERROR = "SOURCE_ERROR"


class ServiceError(BaseModel):
    """Why an operation failed.  ``detail`` echoes the offending input."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``tokenize``, ``normalize``, ``sync`` ...);
            renderers dispatch on it.
        data: Validated payload, empty on failure.
        warnings: Non-fatal issues, e.g. a partial push.
        error: Set exactly when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any], *, warnings: Iterable[str] = ()
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=list(warnings))

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode | str,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        """Build an ``ok=False`` result carrying a :class:`ServiceError`."""
        error = ServiceError(code=str(code), message=message, detail=detail)
        return cls(ok=False, op=op, error=error)
