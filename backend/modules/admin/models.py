"""
Admin API request and response models.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictBool

from modules.auth.models import SubscriptionTier, User, UserUpdate
from modules.features.models import Feature


class AdminUserPatch(BaseModel):
    """Fields an admin may change on a user. Omitted fields are untouched."""

    model_config = ConfigDict(extra="ignore")

    subscription_status: Optional[SubscriptionTier] = None
    is_admin: Optional[StrictBool] = None
    has_book: Optional[StrictBool] = None

    def to_update(self) -> UserUpdate:
        return UserUpdate(**self.model_dump(exclude_unset=True, exclude_none=True))


class UserListResponse(BaseModel):
    users: list[User]


class UserUpdatedResponse(BaseModel):
    ok: bool = True
    user: User


class FeatureListResponse(BaseModel):
    features: list[Feature]


class FeatureUpdatedResponse(BaseModel):
    ok: bool = True
    feature: Feature
