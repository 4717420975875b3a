"""
Centralized configuration for the FundsEdge backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., STRIPE_*, SITELOCK_*).
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "FundsEdge API"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Database (Postgres connection string, e.g. a Neon URL)
    database_url: str = ""
    database_pool_max: int = 10

    # Sessions
    jwt_secret: str = ""
    session_ttl_days: int = 30
    session_cookie_name: str = "fe_auth"
    bcrypt_rounds: int = 12

    # Identity
    admin_email: Optional[str] = None
    google_client_id: str = ""

    # Stripe
    stripe_secret_key: str = ""
    stripe_publishable_key: str = ""
    stripe_webhook_secret: str = ""
    stripe_api_version: str = "2024-06-20"
    stripe_price_book: str = ""
    stripe_price_premium_monthly: str = ""
    stripe_price_premium_lifetime: str = ""

    # Site lock
    sitelock_cookie_name: str = "fe_sitelock_bypass"
    sitelock_bypass_days: int = 7

    @property
    def is_production(self) -> bool:
        """Whether cookies should be marked secure."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
