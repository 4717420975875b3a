"""Tests for shared/database.py."""

import psycopg2
import pytest
from psycopg2.pool import PoolError
from unittest.mock import MagicMock, patch

from shared.database import (
    Database,
    get_database,
    is_database_configured,
    reset_database_cache,
)
from shared.exceptions import DatabaseUnavailableError


def mock_pool(rows=None, rowcount=0):
    """A pool whose connections return the given rows."""
    cursor = MagicMock()
    cursor.fetchall.return_value = rows or []
    cursor.fetchone.return_value = (rows or [None])[0]
    cursor.rowcount = rowcount

    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cursor

    pool = MagicMock()
    pool.getconn.return_value = conn
    return pool, conn, cursor


class TestDatabase:
    def setup_method(self):
        """Reset cache before each test."""
        reset_database_cache()

    @pytest.mark.asyncio
    async def test_unconfigured_raises_on_use(self):
        db = Database("")
        assert db.configured is False
        with pytest.raises(DatabaseUnavailableError):
            await db.fetch_all("SELECT 1")

    @pytest.mark.asyncio
    @patch("shared.database.ThreadedConnectionPool")
    async def test_pool_opened_lazily_once(self, mock_pool_cls):
        pool, _, _ = mock_pool(rows=[{"ok": 1}])
        mock_pool_cls.return_value = pool

        db = Database("postgresql://localhost/fe", max_connections=5)
        mock_pool_cls.assert_not_called()

        await db.fetch_one("SELECT 1 AS ok")
        await db.fetch_one("SELECT 1 AS ok")

        mock_pool_cls.assert_called_once_with(1, 5, "postgresql://localhost/fe")

    @pytest.mark.asyncio
    @patch("shared.database.ThreadedConnectionPool")
    async def test_fetch_all_commits_and_returns_dicts(self, mock_pool_cls):
        pool, conn, cursor = mock_pool(rows=[{"key": "a"}, {"key": "b"}])
        mock_pool_cls.return_value = pool

        rows = await Database("postgresql://x").fetch_all("SELECT key FROM t WHERE v = %s", ("v",))

        assert rows == [{"key": "a"}, {"key": "b"}]
        cursor.execute.assert_called_once_with("SELECT key FROM t WHERE v = %s", ("v",))
        conn.commit.assert_called_once()
        pool.putconn.assert_called_once_with(conn)

    @pytest.mark.asyncio
    @patch("shared.database.ThreadedConnectionPool")
    async def test_execute_returns_rowcount(self, mock_pool_cls):
        pool, _, _ = mock_pool(rowcount=3)
        mock_pool_cls.return_value = pool

        assert await Database("postgresql://x").execute("UPDATE t SET v = 1") == 3

    @pytest.mark.asyncio
    @patch("shared.database.ThreadedConnectionPool")
    async def test_error_rolls_back_and_releases(self, mock_pool_cls):
        pool, conn, cursor = mock_pool()
        cursor.execute.side_effect = psycopg2.IntegrityError("duplicate")
        mock_pool_cls.return_value = pool

        with pytest.raises(psycopg2.IntegrityError):
            await Database("postgresql://x").execute("INSERT ...")

        conn.rollback.assert_called_once()
        pool.putconn.assert_called_once_with(conn)

    @pytest.mark.asyncio
    @patch("shared.database.ThreadedConnectionPool")
    async def test_connection_failure(self, mock_pool_cls):
        mock_pool_cls.side_effect = psycopg2.OperationalError("could not connect")
        db = Database("postgresql://x")

        with pytest.raises(DatabaseUnavailableError):
            await db.fetch_all("SELECT 1")
        assert await db.ping() is False

    @pytest.mark.asyncio
    @patch("shared.database.ThreadedConnectionPool")
    async def test_exhausted_pool_is_unavailable(self, mock_pool_cls):
        pool, _, _ = mock_pool()
        pool.getconn.side_effect = PoolError("connection pool exhausted")
        mock_pool_cls.return_value = pool

        with pytest.raises(DatabaseUnavailableError):
            await Database("postgresql://x").fetch_all("SELECT 1")
        pool.putconn.assert_not_called()

    @patch("shared.database.get_settings")
    def test_get_database_caches_handle(self, mock_settings):
        mock_settings.return_value.database_url = "postgresql://x"
        mock_settings.return_value.database_pool_max = 10

        assert get_database() is get_database()
        assert is_database_configured() is True

    @patch("shared.database.get_settings")
    def test_not_configured(self, mock_settings):
        mock_settings.return_value.database_url = ""
        assert is_database_configured() is False
