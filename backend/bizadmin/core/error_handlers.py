"""Global exception handlers for FastAPI.

Catches all unhandled exceptions and returns structured error responses.
Internal details (stack traces, DB errors) are suppressed in production.
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bizadmin.config import settings
from bizadmin.core.errors import ApiError

logger = logging.getLogger(__name__)

_HTTP_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict | list | None = None,
) -> JSONResponse:
    body: dict = {
        "success": False,
        "error": {
            "code": code,
            "message": message,
        },
    }
    if details:
        body["error"]["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _pydantic_details(errors: list[dict]) -> list[dict]:
    details = []
    for err in errors:
        loc = " -> ".join(str(l) for l in err.get("loc", []))
        details.append({
            "field": loc,
            "message": err.get("msg", "Invalid value"),
            "type": err.get("type", "value_error"),
        })
    return details


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Handle errors raised deliberately by the service and resource layers."""
    if exc.status_code >= 500:
        message = exc.message
        if settings.DEBUG and exc.__cause__ is not None:
            message = f"{exc.message} ({exc.__cause__})"
        return _error_response(exc.status_code, exc.code, message)
    return _error_response(exc.status_code, exc.code, exc.message, exc.details)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle FastAPI/Starlette HTTPException."""
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    response = _error_response(
        status_code=exc.status_code,
        code=_HTTP_CODES.get(exc.status_code, f"HTTP_{exc.status_code}"),
        message=detail,
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors raised by FastAPI itself."""
    return _error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        code="VALIDATION_FAILED",
        message="Request validation failed. Check the details for specific field errors.",
        details=_pydantic_details(exc.errors()),
    )


async def payload_validation_exception_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Handle pydantic errors from write payloads validated inside services."""
    return _error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        code="VALIDATION_FAILED",
        message="The given data was invalid.",
        details=_pydantic_details(exc.errors()),
    )


async def sqlalchemy_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle SQLAlchemy errors without leaking internal details."""
    logger.error(
        "Database error on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    message = "A database error occurred. Please try again later."
    if settings.DEBUG:
        message = f"Database error: {exc}"
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="INTERNAL_SERVER_ERROR",
        message=message,
    )


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Catch-all for unhandled exceptions. Logs full traceback."""
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        "".join(traceback.format_exception(exc)),
    )
    message = "An unexpected error occurred. Please try again later."
    if settings.DEBUG:
        message = f"Internal error: {exc}"
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="INTERNAL_SERVER_ERROR",
        message=message,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global exception handlers on the FastAPI app."""
    from sqlalchemy.exc import SQLAlchemyError

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ValidationError, payload_validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
