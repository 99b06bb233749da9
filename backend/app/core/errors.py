"""
Error taxonomy for the accounts API and its HTTP translation.

Every failure a handler can report is an ``AccountError`` subclass tagged with
an ``ErrorKind``. Services raise them, routers let them propagate, and the
handlers registered by ``register_exception_handlers`` turn them into the
standard response envelope.
"""
import logging
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Tag carried by every error response."""
    VALIDATION_ERROR = "ValidationError"
    CONFLICT = "Conflict"
    INVALID_CREDENTIALS = "InvalidCredentials"
    UNAUTHENTICATED = "Unauthenticated"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    INTERNAL = "Internal"


class AccountError(Exception):
    """Base class for errors surfaced to API callers."""

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[list] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class ValidationError(AccountError):
    kind = ErrorKind.VALIDATION_ERROR
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(AccountError):
    kind = ErrorKind.CONFLICT
    status_code = status.HTTP_409_CONFLICT
    default_message = "User with email or username already exists"


class InvalidCredentialsError(AccountError):
    kind = ErrorKind.INVALID_CREDENTIALS
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username/email or password"


class UnauthenticatedError(AccountError):
    kind = ErrorKind.UNAUTHENTICATED
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Login first"


class ForbiddenError(AccountError):
    kind = ErrorKind.FORBIDDEN
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied. Admins only"


class NotFoundError(AccountError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class InternalError(AccountError):
    pass


_LOCATION_SEGMENTS = ("body", "query", "path")

_STATUS_KINDS = {
    status.HTTP_400_BAD_REQUEST: ErrorKind.VALIDATION_ERROR,
    status.HTTP_401_UNAUTHORIZED: ErrorKind.UNAUTHENTICATED,
    status.HTTP_403_FORBIDDEN: ErrorKind.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorKind.CONFLICT,
}


def error_body(
    status_code: int,
    kind: ErrorKind,
    message: str,
    errors: Optional[list[Any]] = None,
) -> dict:
    """Build the error variant of the response envelope."""
    body = {
        "status_code": status_code,
        "data": None,
        "message": message,
        "success": False,
        "error": kind.value,
    }
    if errors:
        body["errors"] = errors
    return body


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    """Render a typed AccountError."""
    if exc.status_code >= 500:
        logger.error(f"{exc.kind.value} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(
            error_body(exc.status_code, exc.kind, exc.message, exc.errors)
        ),
    )


def _field_path(loc) -> str:
    parts = list(loc)
    if parts and parts[0] in _LOCATION_SEGMENTS:
        parts = parts[1:]
    return ".".join(str(part) for part in parts)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report body/query validation failures as 400 ValidationError."""
    errors = [
        {
            "field": _field_path(err.get("loc", ())),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    message = errors[0]["message"].removeprefix("Value error, ") if errors else None
    return await account_error_handler(request, ValidationError(message, errors))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, wrong method) in the envelope."""
    kind = _STATUS_KINDS.get(exc.status_code)
    if kind is None:
        # Internal is reserved for 5xx
        kind = ErrorKind.INTERNAL if exc.status_code >= 500 else ErrorKind.VALIDATION_ERROR
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, kind, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide their details from the caller."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorKind.INTERNAL,
            InternalError.default_message,
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(AccountError, account_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
