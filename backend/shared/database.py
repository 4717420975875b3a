"""
Database client factory for Postgres.

Wraps a psycopg2 connection pool behind a small async API. Each statement
runs in a worker thread so route handlers never block the event loop.
The pool itself is opened on the first statement, not at construction.
"""

import asyncio
import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence, Union

import psycopg2
from psycopg2 import sql
from psycopg2.extras import RealDictCursor
from psycopg2.pool import PoolError, ThreadedConnectionPool

from .config import get_settings
from .exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)

Query = Union[str, sql.Composable]
Params = Optional[Union[Sequence[Any], dict[str, Any]]]


class Database:
    """
    Async facade over a psycopg2 ThreadedConnectionPool.

    Every call checks out a connection, runs one statement inside its own
    transaction and returns plain dicts.
    """

    def __init__(self, dsn: str, max_connections: int = 10) -> None:
        self._dsn = dsn
        self._max_connections = max_connections
        self._pool: Optional[ThreadedConnectionPool] = None
        self._pool_lock = threading.Lock()

    @property
    def configured(self) -> bool:
        return bool(self._dsn)

    def _get_pool(self) -> ThreadedConnectionPool:
        if self._pool is not None:
            return self._pool

        with self._pool_lock:
            if self._pool is None:
                if not self._dsn:
                    raise DatabaseUnavailableError(
                        "Database configuration missing. Set the DATABASE_URL environment variable."
                    )
                try:
                    self._pool = ThreadedConnectionPool(1, self._max_connections, self._dsn)
                except psycopg2.Error as e:
                    logger.error(f"Database connection failed: {e}")
                    raise DatabaseUnavailableError("Database connection failed") from e
        return self._pool

    @contextmanager
    def _cursor(self) -> Iterator[RealDictCursor]:
        pool = self._get_pool()
        try:
            conn = pool.getconn()
        except PoolError as e:
            logger.error(f"No database connection available: {e}")
            raise DatabaseUnavailableError() from e
        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                yield cur
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            pool.putconn(conn)

    def _run(self, query: Query, params: Params, fetch: str) -> Any:
        try:
            with self._cursor() as cur:
                cur.execute(query, params)
                if fetch == "all":
                    return [dict(row) for row in cur.fetchall()]
                if fetch == "one":
                    row = cur.fetchone()
                    return dict(row) if row is not None else None
                return cur.rowcount
        except (psycopg2.OperationalError, psycopg2.InterfaceError) as e:
            logger.error(f"Database unreachable: {e}")
            raise DatabaseUnavailableError() from e

    async def fetch_all(self, query: Query, params: Params = None) -> list[dict[str, Any]]:
        """Run a query and return every row."""
        return await asyncio.to_thread(self._run, query, params, "all")

    async def fetch_one(self, query: Query, params: Params = None) -> Optional[dict[str, Any]]:
        """Run a query and return the first row, or None."""
        return await asyncio.to_thread(self._run, query, params, "one")

    async def execute(self, query: Query, params: Params = None) -> int:
        """Run a statement and return the affected row count."""
        return await asyncio.to_thread(self._run, query, params, "none")

    async def ping(self) -> bool:
        """Check that the database answers a trivial query."""
        try:
            await self.fetch_one("SELECT 1 AS ok")
            return True
        except DatabaseUnavailableError:
            return False

    def close(self) -> None:
        """Close every pooled connection."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None


# Module-level client cache
_database: Optional[Database] = None


def is_database_configured() -> bool:
    """Whether a connection string has been provided."""
    return bool(get_settings().database_url)


def get_database() -> Database:
    """
    Get the shared database handle.

    The handle is cheap to create; statements raise DatabaseUnavailableError
    if DATABASE_URL is not set or the server cannot be reached.
    """
    global _database

    if _database is None:
        settings = get_settings()
        _database = Database(settings.database_url, settings.database_pool_max)

    return _database


def reset_database_cache() -> None:
    """
    Close and forget the cached database handle.

    Useful for testing or when configuration changes.
    """
    global _database
    if _database is not None:
        _database.close()
    _database = None
