"""Error Handlers — every failure leaves the API in the same JSON envelope.

Invariants:
    - JackutError → its own to_response() envelope and http_status
    - RequestValidationError → 400 VALIDATION_ERROR with field-level details
    - Starlette HTTPException (unknown route, wrong method) → same envelope shape
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details
    - Authentication failures carry a WWW-Authenticate hint naming the token header

Design Decisions:
    - Log level follows ErrorSeverity: INFO errors (empty inbox, unset attribute)
      are routine reads and must not flood WARNING
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jackut.core.errors import ErrorCategory, ErrorSeverity, JackutError

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Session-Token"

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain, validation, HTTP and catch-all handlers."""
    app.add_exception_handler(JackutError, _handle_jackut_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(Exception, _handle_unexpected_error)


def _envelope(
    code: str, message: str, category: str, severity: ErrorSeverity, **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category,
            "severity": severity.value,
            **extra,
        },
    }


# ─── Handlers ────────────────────────────────────────────────────

async def _handle_jackut_error(request: Request, exc: JackutError) -> JSONResponse:
    logger.log(
        _LOG_LEVELS[exc.severity], exc.message,
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "user_id": exc.context.user_id,
            "target_id": exc.context.target_id,
        },
    )
    headers = None
    if exc.category == ErrorCategory.AUTHENTICATION:
        headers = {"WWW-Authenticate": SESSION_HEADER}
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )


async def _handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request body ({len(details)} field errors)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION.value, ErrorSeverity.WARNING,
            details=details,
        ),
    )


async def _handle_http_exception(
    request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            f"HTTP_{exc.status_code}", str(exc.detail),
            ErrorCategory.RESOURCE_NOT_FOUND.value
            if exc.status_code == status.HTTP_404_NOT_FOUND
            else ErrorCategory.VALIDATION.value,
            ErrorSeverity.INFO,
        ),
        headers=getattr(exc, "headers", None),
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {exc!r}",
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL.value, ErrorSeverity.CRITICAL,
        ),
    )
