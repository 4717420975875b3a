"""
Feature repository for database access.
"""

from typing import Any, Optional

from shared.repository import BaseRepository

from .models import DEFAULT_FEATURES, Feature

FEATURE_COLUMNS = "key, label, icon, url, enabled, updated_at"


class FeatureRepository(BaseRepository[Feature]):
    """Repository for the features table."""

    schema_statements = (
        """
        CREATE TABLE IF NOT EXISTS features (
            key        TEXT PRIMARY KEY,
            label      TEXT NOT NULL,
            icon       TEXT NOT NULL DEFAULT '◈',
            url        TEXT NOT NULL,
            enabled    BOOLEAN NOT NULL DEFAULT TRUE,
            updated_at TIMESTAMPTZ DEFAULT NOW()
        )
        """,
    )

    async def ensure_schema(self) -> None:
        await super().ensure_schema()
        await self.seed_defaults(DEFAULT_FEATURES)

    async def seed_defaults(self, features: list[Feature]) -> None:
        """Insert the default rows, leaving existing rows untouched."""
        for feature in features:
            await self._db.execute(
                """
                INSERT INTO features (key, label, icon, url, enabled)
                VALUES (%s, %s, %s, %s, %s)
                ON CONFLICT (key) DO NOTHING
                """,
                (feature.key, feature.label, feature.icon, feature.url, feature.enabled),
            )

    async def list_features(self) -> list[Feature]:
        rows = await self._db.fetch_all(f"SELECT {FEATURE_COLUMNS} FROM features ORDER BY key")
        return [self._map_to_feature(row) for row in rows]

    async def set_enabled(self, key: str, enabled: bool) -> Optional[Feature]:
        row = await self._db.fetch_one(
            f"""
            UPDATE features SET enabled = %s, updated_at = NOW()
            WHERE key = %s
            RETURNING {FEATURE_COLUMNS}
            """,
            (enabled, key),
        )
        return self._map_to_feature(row) if row else None

    def _map_to_feature(self, data: dict[str, Any]) -> Feature:
        return Feature(**data)
