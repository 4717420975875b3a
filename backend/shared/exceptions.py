"""
Base exception classes for the FundsEdge backend.

Each module should define its own exceptions that inherit from these bases.
The API layer renders every FundsEdgeError as a JSON body with a stable
``error`` field and the HTTP status carried by the class.
"""

from typing import Optional, Any


class FundsEdgeError(Exception):
    """
    Base exception for all FundsEdge errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(FundsEdgeError):
    """Input validation failed."""

    status_code = 400


class AuthenticationError(FundsEdgeError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(FundsEdgeError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class NotFoundError(FundsEdgeError):
    """Resource not found."""

    status_code = 404


class ConflictError(FundsEdgeError):
    """Resource already exists."""

    status_code = 409


class ServiceUnavailableError(FundsEdgeError):
    """A dependency is misconfigured or unreachable."""

    status_code = 500


class DatabaseUnavailableError(ServiceUnavailableError):
    """The database is not configured or cannot be reached."""

    def __init__(self, message: str = "Database unavailable"):
        super().__init__(message, code="DATABASE_UNAVAILABLE")


class ExternalServiceError(ServiceUnavailableError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
