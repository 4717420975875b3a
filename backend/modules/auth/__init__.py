"""
Authentication module.

Handles Google/Apple/email sign-in, session tokens and user records.

Public API:
- IAuthService: Interface for auth operations
- IUserRepository: Interface for user persistence
- User: Full user record
- Credential: Issued session token
- Auth exceptions: InvalidTokenError, InvalidCredentialError, etc.
"""

from .interfaces import IAuthService, IUserRepository, IIdentityVerifier
from .models import (
    AuthProvider,
    SubscriptionTier,
    User,
    UserUpdate,
    Credential,
    ExternalAssertion,
    ExternalIdentity,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialError,
    EmailAlreadyRegisteredError,
    WeakPasswordError,
    UserNotFoundError,
    InsufficientPermissionsError,
    AuthConfigurationError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    "IIdentityVerifier",
    # Models
    "AuthProvider",
    "SubscriptionTier",
    "User",
    "UserUpdate",
    "Credential",
    "ExternalAssertion",
    "ExternalIdentity",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialError",
    "EmailAlreadyRegisteredError",
    "WeakPasswordError",
    "UserNotFoundError",
    "InsufficientPermissionsError",
    "AuthConfigurationError",
]
