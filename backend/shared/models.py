"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class SessionClaims(BaseModel):
    """
    The verified payload of a session credential.

    Populated from the session JWT and made available to route handlers
    via dependency injection. ``is_admin`` is a snapshot taken when the
    token was minted and may be stale; privileged routes re-check the store.
    """

    user_id: int = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    is_admin: bool = Field(default=False, description="Admin flag at issue time")
    issued_at: Optional[datetime] = Field(None, description="Token issue time")
    expires_at: Optional[datetime] = Field(None, description="Token expiry time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
