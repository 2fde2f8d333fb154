"""Global exception handlers that map domain exceptions to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from rental.core import messages
from rental.errors import (
    CONFIGURATION_ERROR,
    DATABASE_ERROR,
    FORBIDDEN,
    INTERNAL_ERROR,
    NOT_CONFIGURED,
    NOT_FOUND,
    NOTIFICATION_FAILED,
    UNAUTHORIZED,
    VALIDATION_ERROR,
    ConfigurationError,
    DomainValidationError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    NotificationDeliveryError,
    NotificationInvalidRecipientError,
    NotificationNotConfiguredError,
    UnauthorizedError,
)
from rental.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, code: str) -> JSONResponse:
    """Return a standardized error response with a localized message and machine-readable code."""
    body = ErrorResponse(message=message, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def domain_validation_error_handler(
    _request: Request, exc: DomainValidationError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        str(exc),
        VALIDATION_ERROR,
    )


def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        str(exc),
        NOT_FOUND,
    )


def forbidden_error_handler(_request: Request, exc: ForbiddenError) -> JSONResponse:
    return _error_response(
        status.HTTP_403_FORBIDDEN,
        str(exc),
        FORBIDDEN,
    )


def unauthorized_error_handler(_request: Request, exc: UnauthorizedError) -> JSONResponse:
    # Token errors carry English details for logs; clients get the fixed message
    logger.info("Rejected request: %s", exc)
    return _error_response(
        status.HTTP_401_UNAUTHORIZED,
        messages.UNAUTHORIZED,
        UNAUTHORIZED,
    )


def invalid_credentials_error_handler(
    _request: Request, _exc: InvalidCredentialsError
) -> JSONResponse:
    return _error_response(
        status.HTTP_401_UNAUTHORIZED,
        messages.INVALID_CREDENTIALS,
        UNAUTHORIZED,
    )


def notification_not_configured_handler(
    _request: Request, exc: NotificationNotConfiguredError
) -> JSONResponse:
    logger.warning("Notification channel not configured: %s", exc)
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        messages.CHANNEL_NOT_CONFIGURED,
        NOT_CONFIGURED,
    )


def notification_invalid_recipient_handler(
    _request: Request, exc: NotificationInvalidRecipientError
) -> JSONResponse:
    logger.warning("Invalid notification recipient: %s", exc)
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        messages.INVALID_RECIPIENT,
        VALIDATION_ERROR,
    )


def notification_delivery_error_handler(
    _request: Request, exc: NotificationDeliveryError
) -> JSONResponse:
    logger.error("Notification delivery failed: %s", exc)
    return _error_response(
        status.HTTP_502_BAD_GATEWAY,
        messages.NOTIFICATION_FAILED,
        NOTIFICATION_FAILED,
    )


def configuration_error_handler(_request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("Server misconfiguration: %s", exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        messages.CONFIGURATION_ERROR,
        CONFIGURATION_ERROR,
    )


def database_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error", exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        messages.DATABASE_ERROR,
        DATABASE_ERROR,
    )


def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        messages.INTERNAL_ERROR,
        INTERNAL_ERROR,
    )


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    app.add_exception_handler(DomainValidationError, domain_validation_error_handler)
    app.add_exception_handler(ForbiddenError, forbidden_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(UnauthorizedError, unauthorized_error_handler)
    app.add_exception_handler(InvalidCredentialsError, invalid_credentials_error_handler)
    app.add_exception_handler(NotificationNotConfiguredError, notification_not_configured_handler)
    app.add_exception_handler(
        NotificationInvalidRecipientError, notification_invalid_recipient_handler
    )
    app.add_exception_handler(NotificationDeliveryError, notification_delivery_error_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
