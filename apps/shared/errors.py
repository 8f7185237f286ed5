"""
Error types and secure error handling

Domain errors carry their own HTTP status and category so handlers can
turn them into the consistent ``{"error", "category"}`` payload. Store
and unexpected failures are logged server-side with a correlation id and
never leak internal detail to the client.
"""

import logging
import uuid
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    category = "server_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(ServiceError):
    """Bearer token missing, malformed, expired or not tied to a user."""

    status_code = status.HTTP_401_UNAUTHORIZED
    category = "security"


class PermissionDeniedError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    category = "security"


class ValidationError(ServiceError):
    """Request data rejected by a business rule (e.g. username taken)."""

    status_code = status.HTTP_400_BAD_REQUEST
    category = "validation"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    category = "client_error"


def log_and_sanitize_error(
    error: Exception,
    context: str,
    user_message: Optional[str] = None
) -> tuple[str, str]:
    """
    Log full error details server-side and return sanitized message for client.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "Blog creation")
        user_message: Optional custom message to show user. If None, uses generic message.

    Returns:
        Tuple of (sanitized_message, error_id) for client response
    """
    error_id = str(uuid.uuid4())[:8]

    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=error
    )

    if user_message:
        sanitized = f"{user_message} (Error ID: {error_id})"
    else:
        sanitized = f"{context} failed. Please try again later. (Error ID: {error_id})"

    return sanitized, error_id


def error_response(message: str, category: str, status_code: int) -> JSONResponse:
    """Consistent error payloads across the API."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "category": category,
        },
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # First loc element is the source ("body", "path", ...)
        field = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request."


def setup_error_handlers(app: FastAPI) -> None:
    """Register exception handlers producing ``{"error", "category"}`` bodies."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if exc.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
            logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        return error_response(
            message=exc.message,
            category=exc.category,
            status_code=exc.status_code,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(
            message=_format_validation_errors(exc),
            category="validation",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        message, _ = log_and_sanitize_error(
            exc,
            f"Database operation on {request.url.path}",
            user_message="A database error occurred while processing the request.",
        )
        return error_response(
            message=message,
            category="database",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        detail = exc.detail
        message = (
            detail.get("message") if isinstance(detail, dict) else str(detail)
        ) or "Request failed."
        category = (
            detail.get("category") if isinstance(detail, dict) else None
        )

        if not category:
            if exc.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
                category = "security"
            elif exc.status_code >= 500:
                category = "server_error"
            else:
                category = "client_error"

        return error_response(
            message=message,
            category=category,
            status_code=exc.status_code,
        )

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception):
        message, _ = log_and_sanitize_error(
            exc,
            f"Request to {request.url.path}",
            user_message="An unexpected server error occurred. Please try again later.",
        )
        return error_response(
            message=message,
            category="server_error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
