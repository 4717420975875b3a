"""
Site lock service implementation.

Visitors see a lock screen while ``sitelock_enabled`` is true unless they
hold the bypass cookie handed out by a successful unlock. The bypass value
is derived from the session secret, so it is the same for every visitor
and rotates only when the secret does.
"""

import hashlib
import hmac
import logging
from typing import Optional

from modules.auth.exceptions import AuthConfigurationError
from modules.auth.passwords import hash_password, verify_password
from shared.config import Settings, get_settings

from .exceptions import InvalidUnlockPasswordError
from .interfaces import ISettingsRepository, ISiteLockService
from .models import (
    BYPASS_MARKER,
    SITELOCK_ENABLED,
    SITELOCK_MESSAGE,
    SITELOCK_PASSWORD_HASH,
    SiteLockSettings,
    SiteLockSettingsUpdate,
    SiteLockStatus,
    format_flag,
    parse_flag,
)

logger = logging.getLogger(__name__)


class SiteLockService(ISiteLockService):
    """Settings-backed implementation of the access-lock gate."""

    def __init__(self, store: ISettingsRepository, settings: Optional[Settings] = None):
        self._store = store
        self._settings = settings or get_settings()

    def bypass_cookie_value(self) -> str:
        if not self._settings.jwt_secret:
            raise AuthConfigurationError("JWT_SECRET")
        return hmac.new(
            self._settings.jwt_secret.encode("utf-8"),
            BYPASS_MARKER.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def is_bypassed(self, cookie: Optional[str]) -> bool:
        if not cookie or not self._settings.jwt_secret:
            return False
        return hmac.compare_digest(cookie, self.bypass_cookie_value())

    async def get_status(self, bypass_cookie: Optional[str] = None) -> SiteLockStatus:
        try:
            values = await self._store.get_all()
        except Exception as e:
            logger.warning(f"Site lock status unavailable, reporting unlocked: {e}")
            return SiteLockStatus()

        enabled = parse_flag(values.get(SITELOCK_ENABLED))
        if enabled and self.is_bypassed(bypass_cookie):
            enabled = False
        return SiteLockStatus(
            sitelock_enabled=enabled,
            sitelock_message=values.get(SITELOCK_MESSAGE, ""),
        )

    async def unlock(self, password: str) -> str:
        cookie = self.bypass_cookie_value()
        stored = await self._store.get(SITELOCK_PASSWORD_HASH)
        if not stored or not password:
            raise InvalidUnlockPasswordError()
        if not await verify_password(password, stored):
            logger.info("Site unlock attempt rejected")
            raise InvalidUnlockPasswordError()
        return cookie

    async def get_settings(self) -> SiteLockSettings:
        values = await self._store.get_all()
        return SiteLockSettings(
            sitelock_enabled=parse_flag(values.get(SITELOCK_ENABLED)),
            sitelock_message=values.get(SITELOCK_MESSAGE, ""),
            sitelock_password_set=bool(values.get(SITELOCK_PASSWORD_HASH)),
        )

    async def update_settings(self, update: SiteLockSettingsUpdate) -> SiteLockSettings:
        if update.sitelock_enabled is not None:
            await self._store.set(SITELOCK_ENABLED, format_flag(update.sitelock_enabled))
            logger.info(f"Site lock {'enabled' if update.sitelock_enabled else 'disabled'}")
        if update.sitelock_message is not None:
            await self._store.set(SITELOCK_MESSAGE, update.sitelock_message)
        if update.sitelock_password is not None:
            hashed = await hash_password(update.sitelock_password, self._settings.bcrypt_rounds)
            await self._store.set(SITELOCK_PASSWORD_HASH, hashed)
            logger.info("Site lock password changed")
        return await self.get_settings()
