"""Tests for the authentication service."""

from datetime import datetime, timezone, timedelta

import jwt
import pytest

from modules.auth.exceptions import (
    AuthConfigurationError,
    EmailAlreadyRegisteredError,
    ExpiredTokenError,
    InvalidCredentialError,
    InvalidTokenError,
    MissingTokenError,
    WeakPasswordError,
)
from modules.auth.models import AuthProvider, ExternalAssertion
from modules.auth.service import AuthService, normalize_email
from tests.conftest import TEST_ADMIN_EMAIL, TEST_JWT_SECRET, create_test_token


class TestSessions:

    def test_issue_then_verify(self, auth_service, users):
        user = users.add("a@x.com", is_admin=True)

        credential = auth_service.issue_session(user)
        claims = auth_service.verify_session(credential.token)

        assert claims.user_id == user.id
        assert claims.email == "a@x.com"
        assert claims.is_admin is True
        assert credential.max_age == 30 * 24 * 60 * 60

    def test_token_lifetime_is_thirty_days(self, auth_service, users):
        credential = auth_service.issue_session(users.add("a@x.com"))
        payload = jwt.decode(credential.token, TEST_JWT_SECRET, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 30 * 24 * 60 * 60
        assert payload["sub"] == "1"

    def test_missing_token(self, auth_service):
        with pytest.raises(MissingTokenError):
            auth_service.verify_session(None)
        with pytest.raises(MissingTokenError):
            auth_service.verify_session("")

    def test_expired_token(self, auth_service):
        with pytest.raises(ExpiredTokenError):
            auth_service.verify_session(create_test_token(expired=True))

    def test_garbage_token(self, auth_service):
        with pytest.raises(InvalidTokenError):
            auth_service.verify_session("not.a.jwt")

    def test_non_numeric_subject(self, auth_service):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "abc", "email": "a@x.com", "iat": int(now.timestamp()),
             "exp": int((now + timedelta(hours=1)).timestamp())},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            auth_service.verify_session(token)

    def test_missing_secret(self, users, settings):
        service = AuthService(users, settings=settings.model_copy(update={"jwt_secret": ""}), verifiers={})
        with pytest.raises(AuthConfigurationError):
            service.issue_session(users.add("a@x.com"))


class TestRegistration:

    def test_normalize_email(self):
        assert normalize_email("  Alice@Example.COM ") == "alice@example.com"

    @pytest.mark.asyncio
    async def test_register_and_authenticate(self, auth_service):
        user = await auth_service.register_local("New@X.com", "password123")

        assert user.email == "new@x.com"
        assert user.provider == AuthProvider.EMAIL
        assert user.name == "new"
        assert user.password_hash.startswith("$2")

        signed_in = await auth_service.authenticate_local("new@x.com", "password123")
        assert signed_in.id == user.id

    @pytest.mark.asyncio
    async def test_register_keeps_given_name(self, auth_service):
        user = await auth_service.register_local("n@x.com", "password123", name="  Nora  ")
        assert user.name == "Nora"

    @pytest.mark.asyncio
    async def test_short_password(self, auth_service):
        with pytest.raises(WeakPasswordError):
            await auth_service.register_local("a@x.com", "1234567")

    @pytest.mark.asyncio
    async def test_duplicate_email(self, auth_service, users):
        users.add("a@x.com", provider=AuthProvider.APPLE)
        with pytest.raises(EmailAlreadyRegisteredError):
            await auth_service.register_local("a@x.com", "password123")

    @pytest.mark.asyncio
    async def test_wrong_password(self, auth_service):
        await auth_service.register_local("a@x.com", "password123")
        with pytest.raises(InvalidCredentialError):
            await auth_service.authenticate_local("a@x.com", "password124")

    @pytest.mark.asyncio
    async def test_bootstrap_admin_on_register(self, auth_service, users):
        user = await auth_service.register_local(TEST_ADMIN_EMAIL.upper(), "password123")
        assert user.is_admin is True
        assert (await users.get_by_id(user.id)).is_admin is True


class TestExternalAuth:

    @pytest.mark.asyncio
    async def test_unsupported_provider(self, users, settings):
        service = AuthService(users, settings=settings, verifiers={AuthProvider.APPLE: object()})
        with pytest.raises(InvalidCredentialError):
            await service.authenticate_external(AuthProvider.GOOGLE, ExternalAssertion(token="t"))

    @pytest.mark.asyncio
    async def test_upsert_keeps_entitlements(self, auth_service, users, google_verifier):
        existing = users.add("a@x.com", provider=AuthProvider.GOOGLE, has_book=True, subscription_status="premium")
        google_verifier.register("t", "a@x.com", name="Renamed")

        user = await auth_service.authenticate_external(AuthProvider.GOOGLE, ExternalAssertion(token="t"))

        assert user.id == existing.id
        assert user.has_book is True
        assert user.subscription_status == "premium"
        assert user.name == "Renamed"

    @pytest.mark.asyncio
    async def test_is_admin_reads_store(self, auth_service, users):
        user = users.add("a@x.com")
        assert await auth_service.is_admin(user.id) is False
        await users.set_admin_by_email("a@x.com")
        assert await auth_service.is_admin(user.id) is True
        assert await auth_service.is_admin(999) is False
