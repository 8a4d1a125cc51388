"""Error Handlers — every failure leaves the API in the {"error": {...}} envelope.

Invariants:
    - MiniNotesError -> its own http_status and to_response() body
    - RequestValidationError -> 400 VALIDATION_ERROR, one details entry per bad field,
      named as the client sent it (tosAccepted, sortBy, note_id)
    - RateLimitExceeded (slowapi) -> 429 RATE_LIMITED; message names the window and
      retry_after_seconds carries its length
    - Anything else -> 500 INTERNAL_ERROR; the traceback stays in the server log

Design Decisions:
    - 4xx logged at WARNING, 5xx at ERROR: a wrong password is not an incident
    - Kept out of main.py so the app module only wires things together
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from mini_notes.core.errors import (
    ErrorCategory, ErrorSeverity, MiniNotesError, RateLimitedError,
)

logger = logging.getLogger(__name__)

_REQUEST_PARTS = {"body", "query", "path", "header"}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MiniNotesError, _domain_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(RateLimitExceeded, _rate_limited)
    app.add_exception_handler(Exception, _unexpected_error)


async def _domain_error(request: Request, exc: MiniNotesError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "user_id": exc.context.user_id,
            "note_id": exc.context.note_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def field_name(loc: tuple) -> str:
    """('body', 'tosAccepted') -> 'tosAccepted'; a bare ('body',) stays 'body'."""
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _REQUEST_PARTS:
        parts = parts[1:]
    return ".".join(parts)


async def _validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {"field": field_name(e["loc"]), "message": e["msg"], "type": e["type"]}
        for e in exc.errors()
    ]
    logger.warning(
        f"Validation failed on {request.method} {request.url.path}: "
        f"{[d['field'] for d in details]}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


def _describe_window(seconds: int) -> str:
    """900 -> '15 minutes', 3600 -> '1 hour'."""
    for unit_seconds, unit in ((86400, "day"), (3600, "hour"), (60, "minute")):
        if seconds >= unit_seconds and seconds % unit_seconds == 0:
            count = seconds // unit_seconds
            return f"{count} {unit}{'s' if count != 1 else ''}"
    return f"{seconds} seconds"


async def _rate_limited(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    window_seconds = exc.limit.limit.get_expiry()
    error = RateLimitedError(
        f"Too many requests (limit: {exc.detail}). "
        f"Please try again in {_describe_window(window_seconds)}.",
        retry_after_seconds=window_seconds,
    )
    return await _domain_error(request, error)


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
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
