"""
Site lock module.

Lets an admin put the whole site behind a lock screen with an optional
unlock password.

Public API:
- ISiteLockService: Interface for the access-lock gate
- ISettingsRepository: Interface for the settings key/value store
- SiteLockStatus, SiteLockSettings, SiteLockSettingsUpdate: Data models
- InvalidUnlockPasswordError: Wrong or missing unlock password
"""

from .interfaces import ISiteLockService, ISettingsRepository
from .models import SiteLockStatus, SiteLockSettings, SiteLockSettingsUpdate
from .exceptions import InvalidUnlockPasswordError

__all__ = [
    "ISiteLockService",
    "ISettingsRepository",
    "SiteLockStatus",
    "SiteLockSettings",
    "SiteLockSettingsUpdate",
    "InvalidUnlockPasswordError",
]
