"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations on top of the shared
database handle.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.schema import SchemaManager
    from modules.auth.interfaces import IAuthService, IUserRepository
    from modules.admin.interfaces import IAdminService
    from modules.analytics.interfaces import IAnalyticsService, IEventRepository
    from modules.billing.interfaces import IBillingService
    from modules.features.interfaces import IFeatureRepository
    from modules.sitelock.interfaces import ISettingsRepository, ISiteLockService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access, so a
    request that never touches the database never opens the pool.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self.reset()

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def users(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._users is None:
            from modules.auth.repository import UserRepository
            from shared.database import get_database
            self._users = UserRepository(get_database())
        return self._users

    @property
    def features(self) -> "IFeatureRepository":
        """Get the feature repository instance."""
        if self._features is None:
            from modules.features.repository import FeatureRepository
            from shared.database import get_database
            self._features = FeatureRepository(get_database())
        return self._features

    @property
    def settings_store(self) -> "ISettingsRepository":
        """Get the settings repository instance."""
        if self._settings_store is None:
            from modules.sitelock.repository import SettingsRepository
            from shared.database import get_database
            self._settings_store = SettingsRepository(get_database())
        return self._settings_store

    @property
    def events(self) -> "IEventRepository":
        """Get the analytics event repository instance."""
        if self._events is None:
            from modules.analytics.repository import EventRepository
            from shared.database import get_database
            self._events = EventRepository(get_database())
        return self._events

    @property
    def schema(self) -> "SchemaManager":
        """Get the schema manager covering every repository."""
        if self._schema is None:
            from shared.schema import SchemaManager, SchemaTask
            self._schema = SchemaManager([
                SchemaTask("users", self.users.ensure_schema),
                SchemaTask("features", self.features.ensure_schema),
                SchemaTask("settings", self.settings_store.ensure_schema),
                SchemaTask("tracking", self.events.ensure_schema, optional=True),
            ])
        return self._schema

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.users)
        return self._auth_service

    @property
    def billing(self) -> "IBillingService":
        """Get the billing service instance."""
        if self._billing_service is None:
            from modules.billing.service import BillingService
            self._billing_service = BillingService(self.users)
        return self._billing_service

    @property
    def admin(self) -> "IAdminService":
        """Get the admin service instance."""
        if self._admin_service is None:
            from modules.admin.service import AdminService
            self._admin_service = AdminService(self.users, self.features, self.sitelock)
        return self._admin_service

    @property
    def analytics(self) -> "IAnalyticsService":
        """Get the analytics service instance."""
        if self._analytics_service is None:
            from modules.analytics.service import AnalyticsService
            self._analytics_service = AnalyticsService(self.events)
        return self._analytics_service

    @property
    def sitelock(self) -> "ISiteLockService":
        """Get the site lock service instance."""
        if self._sitelock_service is None:
            from modules.sitelock.service import SiteLockService
            self._sitelock_service = SiteLockService(self.settings_store)
        return self._sitelock_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._users = None
        self._features = None
        self._settings_store = None
        self._events = None
        self._schema = None
        self._auth_service = None
        self._billing_service = None
        self._admin_service = None
        self._analytics_service = None
        self._sitelock_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_billing_service() -> "IBillingService":
    """FastAPI dependency for billing service."""
    return get_container().billing


def get_admin_service() -> "IAdminService":
    """FastAPI dependency for admin service."""
    return get_container().admin


def get_analytics_service() -> "IAnalyticsService":
    """FastAPI dependency for analytics service."""
    return get_container().analytics


def get_sitelock_service() -> "ISiteLockService":
    """FastAPI dependency for site lock service."""
    return get_container().sitelock


def get_feature_repository() -> "IFeatureRepository":
    """FastAPI dependency for the feature repository."""
    return get_container().features
