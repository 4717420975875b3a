"""Tests for the access-lock gate."""

import hashlib
import hmac

import bcrypt
import pytest

from modules.auth.exceptions import AuthConfigurationError
from modules.auth.passwords import hash_password
from modules.sitelock.exceptions import InvalidUnlockPasswordError
from modules.sitelock.models import BYPASS_MARKER, SiteLockSettingsUpdate
from modules.sitelock.service import SiteLockService
from tests.fakes import FakeSettingsRepository


@pytest.fixture
def locked_store():
    return FakeSettingsRepository({
        "sitelock_enabled": "true",
        "sitelock_message": "Closed for maintenance",
    })


class TestSiteLockService:

    @pytest.mark.asyncio
    async def test_unlocked_by_default(self, settings):
        status = await SiteLockService(FakeSettingsRepository(), settings).get_status()
        assert status.sitelock_enabled is False

    @pytest.mark.asyncio
    async def test_locked(self, locked_store, settings):
        status = await SiteLockService(locked_store, settings).get_status()
        assert status.sitelock_enabled is True
        assert status.sitelock_message == "Closed for maintenance"

    @pytest.mark.asyncio
    async def test_fails_open_when_store_unreachable(self, settings):
        service = SiteLockService(FakeSettingsRepository(fail=True), settings)
        status = await service.get_status()
        assert status.sitelock_enabled is False

    @pytest.mark.asyncio
    async def test_bypass_cookie(self, locked_store, settings):
        service = SiteLockService(locked_store, settings)

        assert (await service.get_status(service.bypass_cookie_value())).sitelock_enabled is False
        assert (await service.get_status("forged")).sitelock_enabled is True

    def test_bypass_value_depends_on_secret(self, settings):
        store = FakeSettingsRepository()
        one = SiteLockService(store, settings).bypass_cookie_value()
        other = SiteLockService(store, settings.model_copy(update={"jwt_secret": "rotated"})).bypass_cookie_value()
        assert one != other
        assert len(one) == 64

    @pytest.mark.asyncio
    async def test_missing_secret_never_bypasses(self, locked_store, settings):
        service = SiteLockService(locked_store, settings.model_copy(update={"jwt_secret": ""}))
        empty_key_cookie = hmac.new(b"", BYPASS_MARKER.encode("utf-8"), hashlib.sha256).hexdigest()

        assert (await service.get_status(empty_key_cookie)).sitelock_enabled is True
        with pytest.raises(AuthConfigurationError):
            service.bypass_cookie_value()

    @pytest.mark.asyncio
    async def test_unlock_refused_without_secret(self, locked_store, settings):
        locked_store.values["sitelock_password_hash"] = await hash_password("open-sesame", rounds=4)
        service = SiteLockService(locked_store, settings.model_copy(update={"jwt_secret": ""}))

        with pytest.raises(AuthConfigurationError):
            await service.unlock("open-sesame")

    @pytest.mark.asyncio
    async def test_unlock_without_password_set(self, locked_store, settings):
        with pytest.raises(InvalidUnlockPasswordError):
            await SiteLockService(locked_store, settings).unlock("anything")

    @pytest.mark.asyncio
    async def test_unlock(self, locked_store, settings):
        locked_store.values["sitelock_password_hash"] = await hash_password("open-sesame", rounds=4)
        service = SiteLockService(locked_store, settings)

        assert await service.unlock("open-sesame") == service.bypass_cookie_value()
        with pytest.raises(InvalidUnlockPasswordError):
            await service.unlock("wrong")

    @pytest.mark.asyncio
    async def test_update_settings_hashes_password(self, settings):
        store = FakeSettingsRepository()
        service = SiteLockService(store, settings)

        result = await service.update_settings(SiteLockSettingsUpdate(sitelock_password="pw"))

        assert result.sitelock_password_set is True
        assert store.values["sitelock_password_hash"].startswith("$2")
        assert await service.unlock("pw")


class TestSiteLockRoutes:

    def test_status_route(self, client, settings_store):
        settings_store.values["sitelock_enabled"] = "true"
        response = client.get("/api/settings")
        assert response.status_code == 200
        assert response.json()["sitelock_enabled"] is True

    def test_status_route_fails_open(self, client, settings_store):
        settings_store.fail = True
        response = client.get("/api/settings")
        assert response.status_code == 200
        assert response.json()["sitelock_enabled"] is False

    def test_unlock_sets_bypass_cookie(self, client, settings_store, settings, sitelock_service):
        settings_store.values["sitelock_enabled"] = "true"
        settings_store.values["sitelock_password_hash"] = bcrypt.hashpw(
            b"open-sesame", bcrypt.gensalt(rounds=4)
        ).decode()

        response = client.post("/api/settings/unlock", json={"password": "open-sesame"})

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert response.cookies.get(settings.sitelock_cookie_name) == sitelock_service.bypass_cookie_value()
        assert client.get("/api/settings").json()["sitelock_enabled"] is False

    def test_unlock_wrong_password(self, client):
        response = client.post("/api/settings/unlock", json={"password": "nope"})
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_PASSWORD"
