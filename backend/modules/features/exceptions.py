"""
Feature module exceptions.
"""

from shared.exceptions import NotFoundError


class FeatureNotFoundError(NotFoundError):
    """Raised when a feature key does not exist."""

    def __init__(self, key: str):
        super().__init__(
            f"Feature not found: {key}",
            code="FEATURE_NOT_FOUND",
            details={"key": key},
        )
        self.key = key
