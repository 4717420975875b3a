"""
Authentication module interfaces.

Other modules should depend on IAuthService and IUserRepository, not the
concrete implementations. This enables testing with in-memory fakes.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import SessionClaims

from .models import (
    AuthProvider,
    Credential,
    ExternalAssertion,
    ExternalIdentity,
    SubscriptionTier,
    User,
)


@runtime_checkable
class IUserRepository(Protocol):
    """Persistence contract for user records."""

    async def upsert_external(self, identity: ExternalIdentity) -> User:
        """
        Insert a user for an external identity, or refresh the existing one.

        On email conflict only name, picture and last_login change;
        entitlement fields are left untouched.
        """
        ...

    async def create_email_user(self, email: str, name: str, password_hash: str) -> User:
        """
        Insert a new email/password user.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
        """
        ...

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user, including the password hash, by email."""
        ...

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        ...

    async def list_all(self) -> list[User]:
        """List every user, newest first."""
        ...

    async def update_fields(self, user_id: int, changes: dict) -> Optional[User]:
        """
        Set the given columns on one user.

        Returns:
            The updated user, or None if no user has that ID
        """
        ...

    async def set_admin_by_email(self, email: str) -> None:
        """Flag the user with this email as admin."""
        ...

    async def set_tier_by_customer(self, customer_id: str, tier: SubscriptionTier) -> int:
        """
        Set the subscription tier of every user with this Stripe customer.

        Returns:
            Number of users updated
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def authenticate_external(
        self,
        provider: AuthProvider,
        assertion: ExternalAssertion,
    ) -> User:
        """
        Verify a Google or Apple token and upsert the matching user.

        Raises:
            InvalidCredentialError: If verification fails or no email is available
        """
        ...

    async def authenticate_local(self, email: str, password: str) -> User:
        """
        Check an email/password pair.

        Raises:
            InvalidCredentialError: If either half is wrong
        """
        ...

    async def register_local(self, email: str, password: str, name: Optional[str] = None) -> User:
        """
        Create an email/password user.

        Raises:
            WeakPasswordError: If the password is too short
            EmailAlreadyRegisteredError: If the email is taken
        """
        ...

    def issue_session(self, user: User) -> Credential:
        """Mint a signed session credential for a user."""
        ...

    def verify_session(self, token: Optional[str]) -> SessionClaims:
        """
        Verify a session token and return its claims.

        Raises:
            AuthenticationError: If the token is missing, invalid or expired
        """
        ...

    async def get_user(self, user_id: int) -> Optional[User]:
        """Get the live user record."""
        ...

    async def is_admin(self, user_id: int) -> bool:
        """Check the live admin flag in the store."""
        ...


@runtime_checkable
class IIdentityVerifier(Protocol):
    """Turns a provider token into a verified identity."""

    async def verify(self, assertion: ExternalAssertion) -> ExternalIdentity:
        """
        Raises:
            InvalidCredentialError: If the token cannot be trusted
        """
        ...
