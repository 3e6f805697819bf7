"""Interface layer errors and exception handlers.

Domain errors carry their user-facing message; this module only decides the
HTTP status. Anything from the store is logged with detail and answered
with a generic message.
"""

import logging

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from topten.adapter.error import ProviderError
from topten.domain.error import (
    AlreadyVotedError,
    DomainError,
    DuplicateEmailError,
    DuplicateUsernameError,
    FederatedLoginError,
    FederatedOnlyAccountError,
    ForbiddenError,
    InvalidCredentialsError,
    ListNotPublicError,
    NotFoundError,
    StorageFailureError,
    UnauthenticatedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred"

# First match wins
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (DuplicateEmailError, status.HTTP_400_BAD_REQUEST),
    (DuplicateUsernameError, status.HTTP_400_BAD_REQUEST),
    (AlreadyVotedError, status.HTTP_400_BAD_REQUEST),
    (ListNotPublicError, status.HTTP_400_BAD_REQUEST),
    (FederatedLoginError, status.HTTP_400_BAD_REQUEST),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (FederatedOnlyAccountError, status.HTTP_401_UNAUTHORIZED),
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
]


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error; unknown ones are server errors."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate a DomainError into its status and message."""
    status_code = status_for(exc)
    if status_code >= 500:
        detail = exc.detail if isinstance(exc, StorageFailureError) else str(exc)
        logger.error(
            f"Unhandled domain error on {request.method} {request.url.path}: "
            f"{type(exc).__name__}: {detail}"
        )
        logfire.error(
            "Storage failure",
            path=request.url.path,
            error_type=type(exc).__name__,
            detail=detail,
        )
        return error_response(status_code, GENERIC_ERROR_MESSAGE)

    logfire.info(
        "Request rejected",
        path=request.url.path,
        error_type=type(exc).__name__,
        status_code=status_code,
    )
    return error_response(status_code, exc.message)


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Store errors never reach the client in detail."""
    logger.exception(f"Database error on {request.method} {request.url.path}")
    logfire.error(
        "Database error",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


async def provider_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Identity provider failures outside the redirect flow."""
    logger.error(f"Identity provider error on {request.url.path}: {exc}")
    return error_response(status.HTTP_502_BAD_GATEWAY, "Sign-in provider unavailable")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on an app."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(ProviderError, provider_error_handler)
