from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    Carries the machine-readable ``code`` and HTTP ``status`` rendered into the
    ``{"error": {...}}`` envelope.
    """

    status = 400
    default_code = "BAD_REQUEST"

    def __init__(self, message: str, code: Optional[str] = None, *, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status = 400
    default_code = "VALIDATION_ERROR"


class AuthenticationError(DomainError):
    """Raised when credentials or tokens are missing or invalid."""

    status = 401
    default_code = "INVALID_CREDENTIALS"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status = 403
    default_code = "ACCESS_DENIED"


class NotFoundError(DomainError):
    status = 404
    default_code = "NOT_FOUND"


class ConflictError(DomainError):
    """Raised for expected, user-actionable uniqueness conflicts."""

    status = 409
    default_code = "CONFLICT"


class InternalError(DomainError):
    """Unclassified fault. The message is always generic."""

    status = 500
    default_code = "INTERNAL_ERROR"


class ServiceUnavailableError(DomainError):
    """A shared resource (e.g. the connection pool) stayed busy too long."""

    status = 503
    default_code = "SERVICE_UNAVAILABLE"
