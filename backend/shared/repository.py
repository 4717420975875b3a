"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
database handle access and the schema statements each record family owns.
"""

from typing import TypeVar, Generic

from .database import Database


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Database handle access via self._db
    - Generic type parameter for model type hints
    - ensure_schema() running the class's idempotent DDL statements

    Subclasses implement domain-specific data access methods and handle
    row-to-Pydantic model mapping internally.

    Example:
        class FeatureRepository(BaseRepository[Feature]):
            schema_statements = ("CREATE TABLE IF NOT EXISTS features (...)",)

            async def list_features(self) -> list[Feature]:
                rows = await self._db.fetch_all("SELECT * FROM features ORDER BY key")
                return [Feature(**row) for row in rows]
    """

    schema_statements: tuple[str, ...] = ()

    def __init__(self, db: Database) -> None:
        """
        Initialize the repository with a database handle.

        Args:
            db: Database instance for executing statements.
        """
        self._db = db

    async def ensure_schema(self) -> None:
        """Create or evolve this repository's tables. Safe to run repeatedly."""
        for statement in self.schema_statements:
            await self._db.execute(statement)
