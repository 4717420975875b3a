"""
Feature module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import Feature


@runtime_checkable
class IFeatureRepository(Protocol):
    """Persistence contract for feature flags."""

    async def list_features(self) -> list[Feature]:
        """List every feature, ordered by key."""
        ...

    async def set_enabled(self, key: str, enabled: bool) -> Optional[Feature]:
        """
        Toggle one feature.

        Returns:
            The updated feature, or None if the key is unknown
        """
        ...
