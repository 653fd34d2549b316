"""Global exception handlers for consistent error responses.

This module provides FastAPI exception handlers that intercept all errors
(domain, routing and unexpected) and render them as the response envelope
with the proper HTTP status code.

Design:
- AppError subclasses → status by type (400, 404, 413, 429, 500, 502, 503)
- Starlette HTTPException (unknown route/method) → 404 "Not Found"
- Unexpected Exception → generic 500 (safety net)
- The machine-readable error code travels in the X-Error-Code header
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bfhl_api.core.errors import (
    AppError,
    ConfigurationAppError,
    LLMAppError,
    NotFoundAppError,
    PayloadTooLargeAppError,
    RateLimitedAppError,
    ServiceUnavailableAppError,
    ValidationAppError,
)
from bfhl_api.schemas.envelope import error_response

logger = logging.getLogger(__name__)

ERROR_CODE_HEADER = "X-Error-Code"

# Checked in order; the first matching type wins.
_STATUS_BY_ERROR: tuple[tuple[type[AppError], int], ...] = (
    (ValidationAppError, 400),
    (NotFoundAppError, 404),
    (PayloadTooLargeAppError, 413),
    (RateLimitedAppError, 429),
    (ConfigurationAppError, 500),
    (LLMAppError, 502),
    (ServiceUnavailableAppError, 503),
)


def status_for_error(exc: AppError) -> int:
    """Map a domain error to its HTTP status code (400 when unknown)."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with the uniform envelope.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with the mapped status code and the error message.
    """
    status_code = status_for_error(exc)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "details": exc.details,
            "request_path": request.url.path,
        },
    )

    return error_response(
        status_code,
        exc.message,
        headers={ERROR_CODE_HEADER: exc.code},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors raised by Starlette.

    Unknown paths and unsupported methods on known paths both answer 404 so
    the API exposes a single "no such route" outcome.
    """
    if exc.status_code in (404, 405):
        status_code, message, code = 404, "Not Found", "not_found"
    else:
        status_code, message, code = exc.status_code, str(exc.detail), "http_error"

    logger.info(
        "http_error_handled",
        extra={
            "status_code": status_code,
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )
    return error_response(status_code, message, headers={ERROR_CODE_HEADER: code})


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Logs detailed information for debugging while returning a generic message,
    so no implementation details reach the client.

    Args:
        request: FastAPI request object.
        exc: Exception instance (unexpected).

    Returns:
        JSONResponse with a generic 500 envelope.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return error_response(
        500,
        "Server error",
        headers={ERROR_CODE_HEADER: "internal_server_error"},
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.

    Example:
        >>> from fastapi import FastAPI
        >>> from bfhl_api.core.exception_handlers import setup_exception_handlers
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(Exception)(general_exception_handler)
