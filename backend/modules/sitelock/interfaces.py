"""
Site lock module interfaces.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import SiteLockSettings, SiteLockSettingsUpdate, SiteLockStatus


@runtime_checkable
class ISettingsRepository(Protocol):
    """Key/value store for site-wide settings."""

    async def get_all(self) -> dict[str, str]:
        """Return every setting as a key → value map."""
        ...

    async def get(self, key: str) -> Optional[str]:
        """Return one setting, or None if unset."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Insert or overwrite one setting."""
        ...


@runtime_checkable
class ISiteLockService(Protocol):
    """
    Interface for the access-lock gate.

    The public status check fails open: if settings cannot be read, the
    site is reported as unlocked.
    """

    async def get_status(self, bypass_cookie: Optional[str] = None) -> SiteLockStatus:
        """Lock status for a visitor, honoring a bypass cookie."""
        ...

    async def unlock(self, password: str) -> str:
        """
        Check the unlock password.

        Returns:
            The bypass cookie value to hand to the visitor

        Raises:
            InvalidUnlockPasswordError: If no password is set or it doesn't match
        """
        ...

    def bypass_cookie_value(self) -> str:
        """The value a valid bypass cookie carries."""
        ...

    def is_bypassed(self, cookie: Optional[str]) -> bool:
        """Whether a cookie value grants bypass."""
        ...

    async def get_settings(self) -> SiteLockSettings:
        """Lock settings for the admin panel."""
        ...

    async def update_settings(self, update: SiteLockSettingsUpdate) -> SiteLockSettings:
        """Apply admin changes; a new password is stored hashed."""
        ...
