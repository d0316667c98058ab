from __future__ import annotations

from typing import Any, Dict, Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from crud.errors import (
    ConnectionFailure,
    CrudError,
    DeadlineExceeded,
    NotFound,
    PermissionDenied,
    QueryFailure,
)

T = TypeVar("T")


class ApiError(BaseModel):
    """Standard error payload for API responses."""

    code: str = Field(default="error")
    message: str
    details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="ignore")


class ApiMeta(BaseModel):
    """Optional metadata attached to responses."""

    request_id: Optional[str] = None
    base_url: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class ApiResponse(BaseModel, Generic[T]):
    """Standard envelope for JSON responses of the admin pages."""

    ok: bool
    data: Optional[T] = None
    error: Optional[ApiError] = None
    meta: ApiMeta = Field(default_factory=ApiMeta)

    model_config = ConfigDict(extra="ignore")


def ok(data: T = None, *, meta: Optional[ApiMeta] = None) -> Dict[str, Any]:
    """Create a success envelope as a JSON-serializable dict.

    Row values (datetimes, decimals) are serialized by pydantic.
    """

    payload = ApiResponse[Any](ok=True, data=data, error=None, meta=meta or ApiMeta())
    return payload.model_dump(mode="json")


def fail(
    message: str,
    *,
    code: str = "error",
    details: Optional[Dict[str, Any]] = None,
    meta: Optional[ApiMeta] = None,
) -> Dict[str, Any]:
    """Create an error envelope as a JSON-serializable dict."""

    payload = ApiResponse[None](
        ok=False,
        data=None,
        error=ApiError(code=code, message=message, details=details),
        meta=meta or ApiMeta(),
    )
    return payload.model_dump(mode="json")


# Most specific first.
_ERROR_KINDS: Tuple[Tuple[type, str, int], ...] = (
    (NotFound, "not_found", 404),
    (PermissionDenied, "forbidden", 403),
    (DeadlineExceeded, "deadline_exceeded", 500),
    (QueryFailure, "query_failure", 500),
    (ConnectionFailure, "connection_failure", 500),
)


def error_kind(exc: CrudError) -> Tuple[str, int]:
    """Map an engine error to (error code, HTTP status)."""

    for cls, code, status in _ERROR_KINDS:
        if isinstance(exc, cls):
            return code, status
    return "error", 500


def fail_from(exc: CrudError, *, meta: Optional[ApiMeta] = None) -> Tuple[Dict[str, Any], int]:
    code, status = error_kind(exc)
    return fail(str(exc), code=code, meta=meta), status
