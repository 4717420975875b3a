"""
Admin service implementation.
"""

import logging

from modules.auth.exceptions import UserNotFoundError
from modules.auth.interfaces import IUserRepository
from modules.auth.models import User
from modules.features.exceptions import FeatureNotFoundError
from modules.features.interfaces import IFeatureRepository
from modules.features.models import Feature
from modules.sitelock.interfaces import ISiteLockService
from modules.sitelock.models import SiteLockSettings, SiteLockSettingsUpdate

from .interfaces import IAdminService
from .models import AdminUserPatch

logger = logging.getLogger(__name__)


class AdminService(IAdminService):
    """Implementation of the admin operations over the shared stores."""

    def __init__(
        self,
        users: IUserRepository,
        features: IFeatureRepository,
        sitelock: ISiteLockService,
    ):
        self._users = users
        self._features = features
        self._sitelock = sitelock

    async def list_users(self) -> list[User]:
        return await self._users.list_all()

    async def update_user(self, user_id: int, patch: AdminUserPatch) -> User:
        changes = patch.to_update().changes()
        user = await self._users.update_fields(user_id, changes)
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info(f"Admin updated user {user_id}: {changes}")
        return user

    async def list_features(self) -> list[Feature]:
        return await self._features.list_features()

    async def set_feature_enabled(self, key: str, enabled: bool) -> Feature:
        feature = await self._features.set_enabled(key, enabled)
        if feature is None:
            raise FeatureNotFoundError(key)
        logger.info(f"Feature {key} {'enabled' if enabled else 'disabled'}")
        return feature

    async def get_settings(self) -> SiteLockSettings:
        return await self._sitelock.get_settings()

    async def save_settings(self, update: SiteLockSettingsUpdate) -> SiteLockSettings:
        return await self._sitelock.update_settings(update)
