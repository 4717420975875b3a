"""Tests for feature flags."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from api.app import create_app
from modules.features.models import DEFAULT_FEATURES, FeatureToggleRequest
from modules.features.repository import FeatureRepository


class TestDefaults:

    def test_nine_seeded_features(self):
        keys = [f.key for f in DEFAULT_FEATURES]
        assert len(keys) == 9
        assert len(set(keys)) == 9
        assert all(f.enabled for f in DEFAULT_FEATURES)
        assert all(f.url.startswith("premium-") for f in DEFAULT_FEATURES)

    def test_toggle_requires_real_boolean(self):
        with pytest.raises(ValueError):
            FeatureToggleRequest(enabled="yes")
        with pytest.raises(ValueError):
            FeatureToggleRequest(enabled=1)
        assert FeatureToggleRequest(enabled=False).enabled is False


class TestFeatureRepository:

    @pytest.mark.asyncio
    async def test_ensure_schema_seeds_without_overwriting(self):
        db = MagicMock()
        db.execute = AsyncMock(return_value=1)

        await FeatureRepository(db).ensure_schema()

        statements = [call.args[0] for call in db.execute.await_args_list]
        assert "CREATE TABLE IF NOT EXISTS features" in statements[0]
        seeds = statements[1:]
        assert len(seeds) == 9
        assert all("ON CONFLICT (key) DO NOTHING" in s for s in seeds)

    @pytest.mark.asyncio
    async def test_set_enabled_unknown_key(self):
        db = MagicMock()
        db.fetch_one = AsyncMock(return_value=None)
        assert await FeatureRepository(db).set_enabled("nope", True) is None
        assert db.fetch_one.await_args.args[1] == (True, "nope")


class TestFeatureMapRoute:

    def test_public_map(self, client, feature_repo):
        feature_repo._features["calendar"] = feature_repo._features["calendar"].model_copy(update={"enabled": False})

        response = client.get("/api/features")

        assert response.status_code == 200
        features = response.json()["features"]
        assert features["calendar"] is False
        assert features["health-score"] is True
        assert len(features) == 9

    def test_empty_map_when_store_fails(self, client, feature_repo):
        feature_repo.fail = True
        response = client.get("/api/features")
        assert response.status_code == 200
        assert response.json() == {"features": {}}

    def test_empty_map_without_database(self):
        """Without overrides the real repository has no database to reach."""
        response = TestClient(create_app()).get("/api/features")

        assert response.status_code == 200
        assert response.json() == {"features": {}}
