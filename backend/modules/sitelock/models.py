"""
Site lock data models.

The lock is stored as plain key/value rows in the settings table.
"""

from typing import Optional

from pydantic import BaseModel, Field, StrictBool

SITELOCK_ENABLED = "sitelock_enabled"
SITELOCK_MESSAGE = "sitelock_message"
SITELOCK_PASSWORD_HASH = "sitelock_password_hash"

DEFAULT_LOCK_MESSAGE = "This site is temporarily unavailable. Please check back soon."

# Seeded without overwriting existing values
DEFAULT_SETTINGS = {
    SITELOCK_ENABLED: "false",
    SITELOCK_MESSAGE: DEFAULT_LOCK_MESSAGE,
}

BYPASS_MARKER = "sitelock-bypass"


def parse_flag(value: Optional[str]) -> bool:
    return value == "true"


def format_flag(value: bool) -> str:
    return "true" if value else "false"


class SiteLockStatus(BaseModel):
    """Public lock status shown to every visitor."""

    sitelock_enabled: bool = False
    sitelock_message: str = ""


class UnlockRequest(BaseModel):
    """Visitor's attempt to pass the lock."""

    password: str = ""


class UnlockResponse(BaseModel):
    ok: bool = True


class SiteLockSettings(BaseModel):
    """Lock settings as seen by an admin."""

    sitelock_enabled: bool = False
    sitelock_message: str = ""
    sitelock_password_set: bool = Field(False, description="Whether an unlock password exists")


class SiteLockSettingsUpdate(BaseModel):
    """Admin changes to the lock. Omitted fields are left as they are."""

    sitelock_enabled: Optional[StrictBool] = None
    sitelock_message: Optional[str] = None
    sitelock_password: Optional[str] = Field(None, min_length=1)
