"""
Settings repository for database access.
"""

from typing import Optional

from shared.repository import BaseRepository

from .models import DEFAULT_SETTINGS


class SettingsRepository(BaseRepository[str]):
    """Repository for the settings key/value table."""

    schema_statements = (
        """
        CREATE TABLE IF NOT EXISTS settings (
            key        TEXT PRIMARY KEY,
            value      TEXT NOT NULL,
            updated_at TIMESTAMPTZ DEFAULT NOW()
        )
        """,
    )

    async def ensure_schema(self) -> None:
        await super().ensure_schema()
        for key, value in DEFAULT_SETTINGS.items():
            await self._db.execute(
                "INSERT INTO settings (key, value) VALUES (%s, %s) ON CONFLICT (key) DO NOTHING",
                (key, value),
            )

    async def get_all(self) -> dict[str, str]:
        rows = await self._db.fetch_all("SELECT key, value FROM settings")
        return {row["key"]: row["value"] for row in rows}

    async def get(self, key: str) -> Optional[str]:
        row = await self._db.fetch_one("SELECT value FROM settings WHERE key = %s", (key,))
        return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        await self._db.execute(
            """
            INSERT INTO settings (key, value, updated_at) VALUES (%s, %s, NOW())
            ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value, updated_at = NOW()
            """,
            (key, value),
        )
