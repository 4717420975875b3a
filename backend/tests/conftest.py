"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
Settings come from the environment, so the test values are exported before
any application module is imported.
"""

import os

# Test configuration (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_ADMIN_EMAIL = "owner@fundsedge.test"

os.environ.update({
    "JWT_SECRET": TEST_JWT_SECRET,
    "DATABASE_URL": "",
    "ENVIRONMENT": "test",
    "BCRYPT_ROUNDS": "4",
    "ADMIN_EMAIL": TEST_ADMIN_EMAIL,
    "GOOGLE_CLIENT_ID": "test-google-client-id",
    "STRIPE_SECRET_KEY": "sk_test_123",
    "STRIPE_PUBLISHABLE_KEY": "pk_test_123",
    "STRIPE_WEBHOOK_SECRET": "whsec_test_123",
    "STRIPE_PRICE_BOOK": "price_book",
    "STRIPE_PRICE_PREMIUM_MONTHLY": "price_monthly",
    "STRIPE_PRICE_PREMIUM_LIFETIME": "price_lifetime",
})

from datetime import datetime, timezone, timedelta

import jwt  # PyJWT
import pytest
from fastapi.testclient import TestClient

# The app must be imported before any module routes
from api.app import create_app
from api.dependencies import (
    get_admin_service,
    get_analytics_service,
    get_auth_service,
    get_billing_service,
    get_feature_repository,
    get_sitelock_service,
    reset_container,
)
from modules.admin.service import AdminService
from modules.analytics.service import AnalyticsService
from modules.auth.models import AuthProvider
from modules.auth.service import AuthService
from modules.billing.service import BillingService
from modules.sitelock.service import SiteLockService
from shared.config import get_settings
from shared.database import reset_database_cache

from tests.fakes import (
    FakeEventRepository,
    FakeFeatureRepository,
    FakeGateway,
    FakeSettingsRepository,
    FakeUserRepository,
    StubIdentityVerifier,
)


def create_test_token(
    user_id: int = 1,
    email: str = "test@example.com",
    is_admin: bool = False,
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a session token the way the API mints them.

    Args:
        user_id: User ID to put in ``sub``
        email: Email claim
        is_admin: Admin snapshot claim
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(days=30)

    payload = {
        "sub": str(user_id),
        "email": email,
        "is_admin": is_admin,
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, database handle and container around each test."""
    get_settings.cache_clear()
    reset_database_cache()
    reset_container()
    yield
    reset_container()
    reset_database_cache()
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def feature_repo() -> FakeFeatureRepository:
    return FakeFeatureRepository()


@pytest.fixture
def settings_store() -> FakeSettingsRepository:
    return FakeSettingsRepository()


@pytest.fixture
def events() -> FakeEventRepository:
    return FakeEventRepository()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def google_verifier() -> StubIdentityVerifier:
    return StubIdentityVerifier(AuthProvider.GOOGLE)


@pytest.fixture
def apple_verifier() -> StubIdentityVerifier:
    return StubIdentityVerifier(AuthProvider.APPLE)


@pytest.fixture
def auth_service(users, settings, google_verifier, apple_verifier) -> AuthService:
    return AuthService(
        users,
        settings=settings,
        verifiers={
            AuthProvider.GOOGLE: google_verifier,
            AuthProvider.APPLE: apple_verifier,
        },
    )


@pytest.fixture
def billing_service(users, settings, gateway) -> BillingService:
    return BillingService(users, settings=settings, gateway=gateway)


@pytest.fixture
def sitelock_service(settings_store, settings) -> SiteLockService:
    return SiteLockService(settings_store, settings=settings)


@pytest.fixture
def admin_service(users, feature_repo, sitelock_service) -> AdminService:
    return AdminService(users, feature_repo, sitelock_service)


@pytest.fixture
def analytics_service(events) -> AnalyticsService:
    return AnalyticsService(events)


@pytest.fixture
def app(
    auth_service,
    billing_service,
    admin_service,
    analytics_service,
    sitelock_service,
    feature_repo,
):
    """Create a fresh app wired to the in-memory fakes."""
    application = create_app()
    application.dependency_overrides[get_auth_service] = lambda: auth_service
    application.dependency_overrides[get_billing_service] = lambda: billing_service
    application.dependency_overrides[get_admin_service] = lambda: admin_service
    application.dependency_overrides[get_analytics_service] = lambda: analytics_service
    application.dependency_overrides[get_sitelock_service] = lambda: sitelock_service
    application.dependency_overrides[get_feature_repository] = lambda: feature_repo
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_user(users):
    """An admin account already in the store."""
    return users.add("admin@fundsedge.test", is_admin=True)


@pytest.fixture
def admin_headers(admin_user) -> dict[str, str]:
    return bearer(create_test_token(admin_user.id, admin_user.email, is_admin=True))
