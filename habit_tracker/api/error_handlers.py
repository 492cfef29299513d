"""Error Handlers — map habit tracker failures onto HTTP responses.

Invariants:
    - HabitTrackerError → its own envelope and http_status (validation 400, not found 404)
    - RequestValidationError → the SAME envelope as a core HabitValidationError
      (code, timestamp, context.field) plus per-field details
    - Not-found and validation are logged separately; only unexpected errors log at ERROR
    - Exception (catch-all) → INTERNAL envelope, never leaks internal details

Design Decisions:
    - Schema rejections are converted into HabitValidationError so clients parse one
      error shape whether the schema or core validation caught the problem
    - Extracted from main.py to keep the app factory small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from habit_tracker.core.errors import (
    ErrorCategory, ErrorSeverity, HabitTrackerError, HabitValidationError,
)

logger = logging.getLogger(__name__)

# Request locations that prefix a field path but are not part of the field name
_LOCATION_PREFIXES = frozenset({"body", "path", "query"})


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(HabitTrackerError)
    async def habit_tracker_error_handler(request: Request, exc: HabitTrackerError):
        """Validation and not-found errors raised by the service."""
        _log_domain_error(exc, request.url.path)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Schema rejections, reported in the core validation envelope."""
        details = _field_details(exc)
        error = HabitValidationError(
            details[0]["message"] if details else "Invalid request data",
            field=details[0]["field"] if details else "request",
        )
        _log_domain_error(error, request.url.path)
        content = error.to_response()
        content["error"]["details"] = details
        return JSONResponse(status_code=error.http_status, content=content)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _log_domain_error(exc: HabitTrackerError, path: str) -> None:
    extra = {
        "error_code": exc.code,
        "path": path,
        "habit_id": exc.context.habit_id,
        "field": exc.context.field,
    }
    if exc.category == ErrorCategory.RESOURCE_NOT_FOUND:
        logger.info(f"Not found: {exc.message}", extra=extra)
    elif exc.category == ErrorCategory.VALIDATION:
        logger.warning(f"Rejected: {exc.message}", extra=extra)
    else:
        logger.error(f"{exc.category.value}: {exc.message}", extra=extra)


def _field_details(exc: RequestValidationError) -> list[dict]:
    """Flatten pydantic errors into field/message/type entries."""
    return [
        {
            "field": ".".join(
                str(loc) for loc in e["loc"] if loc not in _LOCATION_PREFIXES
            ) or "request",
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
