"""
Admin module interface.
"""

from typing import Protocol, runtime_checkable

from modules.auth.models import User
from modules.features.models import Feature
from modules.sitelock.models import SiteLockSettings, SiteLockSettingsUpdate

from .models import AdminUserPatch


@runtime_checkable
class IAdminService(Protocol):
    """
    Interface for admin operations.

    Callers are expected to have passed the admin gate already.
    """

    async def list_users(self) -> list[User]:
        """All users, newest first."""
        ...

    async def update_user(self, user_id: int, patch: AdminUserPatch) -> User:
        """
        Change a user's tier, admin flag or book entitlement.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        ...

    async def list_features(self) -> list[Feature]:
        ...

    async def set_feature_enabled(self, key: str, enabled: bool) -> Feature:
        """
        Toggle a feature flag.

        Raises:
            FeatureNotFoundError: If the key is unknown
        """
        ...

    async def get_settings(self) -> SiteLockSettings:
        ...

    async def save_settings(self, update: SiteLockSettingsUpdate) -> SiteLockSettings:
        ...
