"""Standardized error responses and domain exceptions."""
from typing import Any

import sentry_sdk
import structlog
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error envelope returned by all API error handlers."""
    error: str
    message: str
    detail: Any = None
    request_id: str = "unknown"

logger = structlog.get_logger()


# ── Domain exceptions ────────────────────────────────────────────────────────


class MapperError(Exception):
    """Base class for user-facing, non-fatal errors.

    ``message`` is shown to the user verbatim; ``error`` is a stable code.
    """

    status_code: int = 400
    error: str = "mapper_error"

    def __init__(self, message: str, detail: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidFieldError(MapperError):
    status_code = 422
    error = "invalid_field"


class HierarchyCycleError(MapperError):
    status_code = 409
    error = "hierarchy_cycle"


class UnknownParentError(MapperError):
    status_code = 422
    error = "unknown_parent"


class ExportBlockedError(MapperError):
    error = "export_blocked"


class ContactIncompleteError(MapperError):
    error = "contact_incomplete"


class CaptureNotOpenError(MapperError):
    status_code = 409
    error = "capture_not_open"


# ── Handlers ─────────────────────────────────────────────────────────────────


async def mapper_exception_handler(request: Request, exc: MapperError) -> JSONResponse:
    """Render domain errors in the standard envelope."""
    request_id = request.headers.get("x-request-id", "unknown")

    logger.info(
        "request_rejected",
        error=exc.error,
        path=request.url.path,
        method=request.method,
        request_id=request_id,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.error,
            message=exc.message,
            detail=exc.detail,
            request_id=request_id,
        ).model_dump(),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch unhandled exceptions and return a consistent JSON envelope."""
    request_id = request.headers.get("x-request-id", "unknown")

    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
        request_id=request_id,
    )

    sentry_sdk.capture_exception(exc)

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred.",
            "request_id": request_id,
        },
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Standardize HTTPException responses into the same JSON envelope."""
    request_id = request.headers.get("x-request-id", "unknown")

    if isinstance(exc.detail, dict):
        error = exc.detail.get("error", f"http_{exc.status_code}")
        message = exc.detail.get("message", str(exc.detail))
        detail: Any = exc.detail.get("detail")
    else:
        error = f"http_{exc.status_code}"
        message = str(exc.detail)
        detail = exc.detail

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": error,
            "message": message,
            "detail": detail,
            "request_id": request_id,
        },
        headers=dict(exc.headers or {}),
    )
