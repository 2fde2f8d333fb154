"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
VALIDATION_ERROR = "VALIDATION_ERROR"
UNAUTHORIZED = "UNAUTHORIZED"
FORBIDDEN = "FORBIDDEN"
NOT_CONFIGURED = "NOT_CONFIGURED"
NOTIFICATION_FAILED = "NOTIFICATION_FAILED"
CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
DATABASE_ERROR = "DATABASE_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class DomainValidationError(DomainError):
    """Raised when business rules or domain validation fail (e.g. signing a terminated contract)."""

    pass


class UnauthorizedError(DomainError):
    """Raised when a request carries no usable credentials."""

    pass


class InvalidTokenError(UnauthorizedError):
    """Raised when a token has a bad signature, is malformed or has expired."""

    pass


class InvalidCredentialsError(UnauthorizedError):
    """Raised by login for every kind of credential mismatch."""

    pass


class ForbiddenError(DomainError):
    """Raised when the authenticated role may not perform the operation."""

    pass


class ConfigurationError(DomainError):
    """Raised when a required setting (e.g. the token signing secret) is missing."""

    pass


class NotificationError(DomainError):
    """Base class for outbound notification failures."""

    pass


class NotificationNotConfiguredError(NotificationError):
    """Raised when a channel is used without its credentials or destination."""

    pass


class NotificationDeliveryError(NotificationError):
    """Raised when the provider rejects a message or cannot be reached."""

    pass


class NotificationInvalidRecipientError(NotificationError):
    """Raised when a destination address or number cannot be used."""

    pass
