"""
Authentication service implementation.

Verifies Google/Apple identities and email/password credentials, keeps
the users table in sync and issues signed session tokens.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from shared.config import Settings, get_settings
from shared.models import SessionClaims

from .exceptions import (
    AuthConfigurationError,
    EmailAlreadyRegisteredError,
    ExpiredTokenError,
    InvalidCredentialError,
    InvalidTokenError,
    MissingTokenError,
    WeakPasswordError,
)
from .interfaces import IAuthService, IIdentityVerifier, IUserRepository
from .models import (
    AuthProvider,
    Credential,
    ExternalAssertion,
    SessionTokenPayload,
    User,
)
from .passwords import MIN_PASSWORD_LENGTH, hash_password, verify_password
from .providers import AppleIdentityVerifier, GoogleIdentityVerifier

logger = logging.getLogger(__name__)

SESSION_ALGORITHM = "HS256"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Sessions are HS256 JWTs signed with JWT_SECRET and carry the user ID,
    email and an admin-flag snapshot.
    """

    def __init__(
        self,
        users: IUserRepository,
        settings: Optional[Settings] = None,
        verifiers: Optional[dict[AuthProvider, IIdentityVerifier]] = None,
    ):
        self._users = users
        self._settings = settings or get_settings()
        self._verifiers = verifiers or {
            AuthProvider.GOOGLE: GoogleIdentityVerifier(self._settings.google_client_id),
            AuthProvider.APPLE: AppleIdentityVerifier(),
        }

    # -------------------------------------------------------------------------
    # Sign-in
    # -------------------------------------------------------------------------

    async def authenticate_external(
        self,
        provider: AuthProvider,
        assertion: ExternalAssertion,
    ) -> User:
        verifier = self._verifiers.get(provider)
        if verifier is None:
            raise InvalidCredentialError(f"Unsupported provider: {provider.value}")

        identity = await verifier.verify(assertion)
        identity = identity.model_copy(update={"email": normalize_email(identity.email)})

        user = await self._users.upsert_external(identity)
        logger.info(f"{provider.value} sign-in for user {user.id}")
        return await self._maybe_grant_admin(user)

    async def authenticate_local(self, email: str, password: str) -> User:
        user = await self._users.get_by_email(normalize_email(email))
        if user is None or not user.password_hash:
            raise InvalidCredentialError()

        if not await verify_password(password, user.password_hash):
            raise InvalidCredentialError()

        return await self._maybe_grant_admin(user)

    async def register_local(self, email: str, password: str, name: Optional[str] = None) -> User:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(MIN_PASSWORD_LENGTH)

        email = normalize_email(email)
        if await self._users.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError()

        password_hash = await hash_password(password, self._settings.bcrypt_rounds)
        user = await self._users.create_email_user(
            email=email,
            name=(name or "").strip() or email.split("@")[0],
            password_hash=password_hash,
        )
        logger.info(f"Registered email user {user.id}")
        return await self._maybe_grant_admin(user)

    async def _maybe_grant_admin(self, user: User) -> User:
        """Promote the configured bootstrap admin before a token is minted."""
        admin_email = self._settings.admin_email
        if admin_email and normalize_email(admin_email) == normalize_email(user.email) and not user.is_admin:
            await self._users.set_admin_by_email(user.email)
            logger.info(f"Granted admin to bootstrap user {user.id}")
            user = user.model_copy(update={"is_admin": True})
        return user

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def _secret(self) -> str:
        if not self._settings.jwt_secret:
            raise AuthConfigurationError("JWT_SECRET")
        return self._settings.jwt_secret

    def issue_session(self, user: User) -> Credential:
        now = datetime.now(timezone.utc)
        ttl = timedelta(days=self._settings.session_ttl_days)
        expires_at = now + ttl

        payload = SessionTokenPayload(
            sub=str(user.id),
            email=user.email,
            is_admin=user.is_admin,
            iat=int(now.timestamp()),
            exp=int(expires_at.timestamp()),
        )
        token = jwt.encode(payload.model_dump(), self._secret(), algorithm=SESSION_ALGORITHM)
        return Credential(token=token, expires_at=expires_at, max_age=int(ttl.total_seconds()))

    def verify_session(self, token: Optional[str]) -> SessionClaims:
        if not token:
            raise MissingTokenError()

        try:
            payload = SessionTokenPayload(
                **jwt.decode(token, self._secret(), algorithms=[SESSION_ALGORITHM])
            )
            user_id = int(payload.sub)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except (jwt.InvalidTokenError, ValueError, TypeError):
            # pydantic's ValidationError is a ValueError
            raise InvalidTokenError()

        return SessionClaims(
            user_id=user_id,
            email=payload.email,
            is_admin=payload.is_admin,
            issued_at=datetime.fromtimestamp(payload.iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload.exp, tz=timezone.utc),
        )

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._users.get_by_id(user_id)

    async def is_admin(self, user_id: int) -> bool:
        user = await self._users.get_by_id(user_id)
        return bool(user and user.is_admin)
