"""Error Handlers — every failure leaves the API in the TeamboardError envelope.

Invariants:
    - Body is always {"error": {code, message, category, severity, ...}}
    - TeamboardError keeps its own http_status; 5xx logged as errors, 4xx as warnings
    - Request validation answers 400 VALIDATION_ERROR with one detail per bad field
    - InvalidInputError also reports its field, like pydantic validation does
    - Unhandled exceptions answer 500 with a fixed message, never str(exc)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import ErrorCategory, ErrorSeverity, InvalidInputError, TeamboardError

logger = logging.getLogger(__name__)

# Request locations stripped from reported field paths ("body.startDate" -> "startDate")
_LOCATIONS = frozenset({"body", "query", "path", "header"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TeamboardError, handle_teamboard_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_teamboard_error(request: Request, exc: TeamboardError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    content = exc.to_response()
    if isinstance(exc, InvalidInputError):
        content["error"]["details"] = [
            {"field": exc.field, "message": exc.message, "type": "value_error"},
        ]
    return JSONResponse(status_code=exc.http_status, content=content)


async def handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [_field_detail(e) for e in exc.errors()]
    logger.warning(
        f"Rejected {request.method} {request.url.path}: "
        f"{', '.join(d['field'] or '<request>' for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def _field_detail(error: dict) -> dict:
    loc = [str(part) for part in error.get("loc", ())]
    if loc and loc[0] in _LOCATIONS:
        loc = loc[1:]
    return {
        "field": ".".join(loc),
        "message": error.get("msg", ""),
        "type": error.get("type", ""),
    }


def _envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    details: list[dict] | None = None,
) -> dict:
    error = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
    }
    if details is not None:
        error["details"] = details
    return {"error": error}
