"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class AuthProvider(str, Enum):
    """How a user signs in."""

    GOOGLE = "google"
    APPLE = "apple"
    EMAIL = "email"


class SubscriptionTier(str, Enum):
    """User subscription tiers."""

    FREE = "free"
    PREMIUM = "premium"


class User(BaseModel):
    """
    A user record.

    ``password_hash`` is loaded for credential checks but never serialized.
    """

    id: int = Field(..., description="User ID")
    email: str = Field(..., description="Email address (unique across providers)")
    name: Optional[str] = Field(None, description="Display name")
    picture: Optional[str] = Field(None, description="Avatar URL")
    provider: AuthProvider = Field(..., description="Sign-in method used to create the user")
    subscription_status: SubscriptionTier = Field(
        default=SubscriptionTier.FREE,
        description="Subscription tier",
    )
    is_admin: bool = Field(default=False, description="Admin flag")
    has_book: bool = Field(default=False, description="One-time book purchase flag")
    stripe_customer_id: Optional[str] = Field(None, description="Stripe customer reference")
    created_at: Optional[datetime] = Field(None, description="Account creation time")
    last_login: Optional[datetime] = Field(None, description="Last sign-in time")

    password_hash: Optional[str] = Field(None, exclude=True, repr=False)


class ExternalIdentity(BaseModel):
    """An identity asserted by Google or Apple after verification."""

    provider: AuthProvider
    subject: str = Field(..., description="Provider's stable user identifier")
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None


class AppleUserName(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")


class AppleUserInfo(BaseModel):
    """The user object Apple posts alongside the identity token on first sign-in."""

    email: Optional[str] = None
    name: Optional[AppleUserName] = None


class ExternalAssertion(BaseModel):
    """A token issued by an external identity provider."""

    token: str
    user: Optional[AppleUserInfo] = None


class Credential(BaseModel):
    """A signed session token and its expiry."""

    token: str
    expires_at: datetime
    max_age: int = Field(..., description="Lifetime in seconds")


class SessionTokenPayload(BaseModel):
    """Claims encoded in a session JWT."""

    sub: str = Field(..., description="Subject (user ID)")
    email: str
    is_admin: bool = False
    iat: int
    exp: int


class UserUpdate(BaseModel):
    """
    Partial update of a user's entitlement and role fields.

    Only fields that were explicitly set are written.
    """

    model_config = ConfigDict(extra="ignore")

    subscription_status: Optional[SubscriptionTier] = None
    is_admin: Optional[bool] = None
    has_book: Optional[bool] = None
    stripe_customer_id: Optional[str] = None

    def changes(self) -> dict:
        """Fields explicitly set by the caller, as column → value."""
        data = self.model_dump(exclude_unset=True, exclude_none=True)
        if "subscription_status" in data:
            data["subscription_status"] = SubscriptionTier(data["subscription_status"]).value
        return data


# -------------------------------------------------------------------------
# Request / response models
# -------------------------------------------------------------------------

# Local part, one @, domain. Any domain is accepted, including .test and localhost
EMAIL_PATTERN = r"^\s*[^@\s]+@[^@\s]+\s*$"


class GoogleAuthRequest(BaseModel):
    credential: str = Field(..., min_length=1, description="Google ID token")


class AppleAuthRequest(BaseModel):
    id_token: str = Field(..., min_length=1, description="Apple identity token")
    user: Optional[AppleUserInfo] = None


class EmailSignupRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str
    name: Optional[str] = None


class EmailSigninRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    ok: bool = True
    user: User
    token: str


class CurrentUserResponse(BaseModel):
    user: User
