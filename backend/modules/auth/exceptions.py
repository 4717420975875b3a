"""
Authentication module exceptions.

These exceptions are raised by the auth module and rendered by the
API error handler with the status code of their base class.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid or malformed."""

    def __init__(self, message: str = "Invalid or expired session"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Session has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no session token is provided."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialError(AuthenticationError):
    """
    Raised when a sign-in attempt fails.

    The message never says which factor was wrong.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIAL")


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when signing up with an email that already has an account."""

    def __init__(self):
        super().__init__(
            "An account with that email already exists",
            code="EMAIL_EXISTS",
        )


class WeakPasswordError(ValidationError):
    """Raised when a password is shorter than the minimum length."""

    def __init__(self, min_length: int):
        super().__init__(
            f"Password must be at least {min_length} characters",
            code="WEAK_PASSWORD",
            details={"min_length": min_length},
        )


class UserNotFoundError(NotFoundError):
    """Raised when a user doesn't exist in the database."""

    def __init__(self, user_id: int):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class InsufficientPermissionsError(AuthorizationError):
    """Raised when a user lacks admin rights."""

    def __init__(self):
        super().__init__("Admin access required", code="ADMIN_REQUIRED")


class AuthConfigurationError(ServiceUnavailableError):
    """Raised when a required auth secret or client id is not configured."""

    def __init__(self, setting: str):
        super().__init__(
            f"Authentication not configured ({setting} missing)",
            code="AUTH_NOT_CONFIGURED",
            details={"setting": setting},
        )
