"""ServiceResult and ServiceError — the contract every operation returns.

Business-rule rejections (bad quantity, unknown id, book already loaned)
come back as ``ok=False`` results, never as exceptions.  The CLI and any
other adapter only ever consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from localstore.domain.errors import ErrorCode, ErrorKind, kind_of


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    kind: str = ErrorKind.VALIDATION
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"add_item"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues encountered during the operation.
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


def fail(
    op: str,
    code: ErrorCode,
    message: str,
    *,
    data: dict[str, Any] | None = None,
    **detail: Any,
) -> ServiceResult:
    """Build a failed result whose error kind is derived from *code*."""
    return ServiceResult(
        ok=False,
        op=op,
        data=data or {},
        error=ServiceError(code=code, kind=kind_of(code), message=message, detail=detail),
    )
