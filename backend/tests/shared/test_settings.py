"""Tests for shared/config.py."""

from shared.config import Settings, get_settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("JWT_SECRET", "ADMIN_EMAIL", "DATABASE_URL", "BCRYPT_ROUNDS", "ENVIRONMENT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.port == 3000
        assert settings.session_ttl_days == 30
        assert settings.bcrypt_rounds == 12
        assert settings.sitelock_bypass_days == 7
        assert settings.admin_email is None
        assert settings.database_url == ""
        assert settings.is_production is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/fe")
        monkeypatch.setenv("SESSION_TTL_DAYS", "7")
        monkeypatch.setenv("ENVIRONMENT", "Production")

        settings = Settings(_env_file=None)

        assert settings.database_url == "postgresql://u:p@db/fe"
        assert settings.session_ttl_days == 7
        assert settings.is_production is True

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
