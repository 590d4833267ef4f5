"""Error Handlers — the single translator from exceptions to error envelopes.

Invariants:
    - Priority: TaskManagerError → ConstraintViolation → RecordNotFoundError →
      DatabaseError → anything else
    - Every branch logs before responding
    - Storage detail is logged, never returned; unclassified errors expose their
      text only outside production
    - Routing 404/405 from Starlette → 404 "Route not found"

Design Decisions:
    - One translate_exception function registered for every family, so the
      priority order lives in one place instead of being spread over handlers
    - Settings passed in at registration: tests build apps with production and
      development settings side by side
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_manager.api.responses import send_error
from task_manager.config import Settings
from task_manager.core.errors import (
    ConstraintViolation, DatabaseError, RecordNotFoundError, TaskManagerError,
)

logger = logging.getLogger(__name__)

PRODUCTION_FALLBACK_MESSAGE = "Something went wrong. Please try again later."
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
ROUTE_NOT_FOUND_MESSAGE = "Route not found"


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Register the translator for every error family on the FastAPI app."""

    async def handler(request: Request, exc: Exception) -> JSONResponse:
        return translate_exception(request, exc, settings)

    for exc_class in (
        TaskManagerError,
        DatabaseError,
        RequestValidationError,
        StarletteHTTPException,
        Exception,
    ):
        app.add_exception_handler(exc_class, handler)


def translate_exception(
    request: Request, exc: Exception, settings: Settings,
) -> JSONResponse:
    """Map any exception to the error envelope."""
    where = f"[{request.method}] {request.url.path}"
    extra = {"method": request.method, "path": request.url.path}

    if isinstance(exc, TaskManagerError):
        logger.warning(
            f"{type(exc).__name__}: {where} - {exc.message}",
            extra={**extra, "error_code": exc.code},
        )
        return send_error(exc.message, exc.http_status)

    if isinstance(exc, ConstraintViolation):
        logger.error(
            f"Constraint violation: {where} - Duplicate {exc.field}",
            extra={**extra, "error_code": exc.code},
        )
        return send_error(
            f"A task with this {exc.field} already exists. "
            "Please use a unique value.",
            status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, RecordNotFoundError):
        logger.error(
            f"Record not found: {where} - {exc}",
            extra={**extra, "error_code": exc.code},
        )
        return send_error("Resource not found", status.HTTP_404_NOT_FOUND)

    if isinstance(exc, DatabaseError):
        logger.error(
            f"Database error: {where} - {exc.operation} - {exc}",
            extra={**extra, "error_code": exc.code},
        )
        return send_error(
            "Database operation failed",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, RequestValidationError):
        return _translate_request_validation(exc, where, extra)

    if isinstance(exc, StarletteHTTPException):
        return _translate_http_exception(exc, where, extra)

    logger.error(
        f"Unhandled error: {where} - {exc}",
        exc_info=exc,
        extra={**extra, "error_code": "UNKNOWN_ERROR"},
    )
    if settings.is_production:
        message = PRODUCTION_FALLBACK_MESSAGE
    else:
        message = str(exc) or UNKNOWN_ERROR_MESSAGE
    return send_error(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def _translate_request_validation(
    exc: RequestValidationError, where: str, extra: dict,
) -> JSONResponse:
    errors = exc.errors()
    logger.warning(
        f"Validation error: {where} - {errors}",
        extra={**extra, "error_code": "VALIDATION_ERROR"},
    )
    first = errors[0] if errors else {"loc": (), "msg": "Invalid request"}
    # loc starts with the source ("path", "body"); the client only cares about the
    # field. Malformed JSON reports a character offset instead of a field name.
    field = ".".join(loc for loc in first["loc"][1:] if isinstance(loc, str))
    message = f"{field}: {first['msg']}" if field else first["msg"]
    return send_error(message, status.HTTP_400_BAD_REQUEST)


def _translate_http_exception(
    exc: StarletteHTTPException, where: str, extra: dict,
) -> JSONResponse:
    if exc.status_code in (
        status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
    ):
        logger.warning(f"404 - Route not found: {where}", extra=extra)
        return send_error(ROUTE_NOT_FOUND_MESSAGE, status.HTTP_404_NOT_FOUND)
    logger.warning(
        f"HTTP {exc.status_code}: {where} - {exc.detail}", extra=extra,
    )
    return send_error(str(exc.detail), exc.status_code)
