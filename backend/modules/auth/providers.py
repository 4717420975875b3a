"""
External identity verification for Google and Apple sign-in.

Google ID tokens are verified against Google's published signing keys.
Apple identity tokens are decoded and trusted on their subject/email claims.
"""

import asyncio
import logging
from typing import Optional

import jwt
from jwt import PyJWKClient
from jwt.exceptions import InvalidTokenError as JWTInvalidTokenError, PyJWKClientError

from .exceptions import AuthConfigurationError, InvalidCredentialError
from .interfaces import IIdentityVerifier
from .models import AuthProvider, ExternalAssertion, ExternalIdentity

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ["accounts.google.com", "https://accounts.google.com"]


class GoogleIdentityVerifier(IIdentityVerifier):
    """Verifies Google Sign-In ID tokens (RS256, audience-checked)."""

    def __init__(self, client_id: str, jwk_client: Optional[PyJWKClient] = None):
        self._client_id = client_id
        self._jwk_client = jwk_client

    def _decode(self, token: str) -> dict:
        if self._jwk_client is None:
            self._jwk_client = PyJWKClient(GOOGLE_CERTS_URL)
        signing_key = self._jwk_client.get_signing_key_from_jwt(token).key
        return jwt.decode(
            token,
            signing_key,
            algorithms=["RS256"],
            audience=self._client_id,
            issuer=GOOGLE_ISSUERS,
            leeway=60,
        )

    async def verify(self, assertion: ExternalAssertion) -> ExternalIdentity:
        if not self._client_id:
            raise AuthConfigurationError("GOOGLE_CLIENT_ID")

        try:
            payload = await asyncio.to_thread(self._decode, assertion.token)
        except (JWTInvalidTokenError, PyJWKClientError) as e:
            logger.warning(f"Google token rejected: {e}")
            raise InvalidCredentialError("Google authentication failed")

        email = payload.get("email")
        if not isinstance(email, str) or not email.strip():
            raise InvalidCredentialError("Google account has no email")
        if payload.get("email_verified") is not True:
            raise InvalidCredentialError("Google email is not verified")

        return ExternalIdentity(
            provider=AuthProvider.GOOGLE,
            subject=str(payload["sub"]),
            email=email,
            name=payload.get("name"),
            picture=payload.get("picture"),
        )


class AppleIdentityVerifier(IIdentityVerifier):
    """
    Reads Apple identity tokens.

    The token is decoded without checking its signature against Apple's
    key set; the subject and email claims are accepted as-is.
    """

    async def verify(self, assertion: ExternalAssertion) -> ExternalIdentity:
        try:
            claims = jwt.decode(assertion.token, options={"verify_signature": False})
        except JWTInvalidTokenError:
            raise InvalidCredentialError("Invalid Apple token")

        subject = claims.get("sub")
        if not subject:
            raise InvalidCredentialError("Invalid Apple token")

        apple_user = assertion.user
        email = claims.get("email") or (apple_user.email if apple_user else None)
        if not email:
            raise InvalidCredentialError("Email not provided by Apple")

        name = None
        if apple_user and apple_user.name:
            parts = [apple_user.name.first_name or "", apple_user.name.last_name or ""]
            name = " ".join(parts).strip() or None
        if not name:
            name = email.split("@")[0]

        return ExternalIdentity(
            provider=AuthProvider.APPLE,
            subject=str(subject),
            email=email,
            name=name,
            picture=None,
        )
