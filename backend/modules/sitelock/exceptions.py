"""
Site lock exceptions.
"""

from shared.exceptions import AuthenticationError


class InvalidUnlockPasswordError(AuthenticationError):
    """Raised when the unlock password is missing or wrong."""

    def __init__(self, message: str = "Incorrect password"):
        super().__init__(message, code="INVALID_PASSWORD")
