"""Application error types rendered into the standard error envelope.

Each error carries a machine ``code``, an HTTP status and optional
``details``. The global handlers in :mod:`bizadmin.core.error_handlers`
turn them into ``{"success": false, "error": {...}}`` responses.
"""

from typing import Any

from fastapi import status


class ApiError(Exception):
    code = "INTERNAL_SERVER_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ResourceNotFoundError(ApiError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidParametersError(ApiError):
    code = "INVALID_PARAMETERS"
    status_code = status.HTTP_400_BAD_REQUEST


class ValidationFailedError(ApiError):
    code = "VALIDATION_FAILED"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class PipelineError(ApiError):
    """Unexpected failure inside the list pipeline. Never exposes internals."""
