"""
User repository for database access.

Encapsulates all SQL for the users table, including its idempotent
create/evolve statements.
"""

from typing import Any, Optional

from psycopg2 import errors as pg_errors
from psycopg2 import sql

from shared.repository import BaseRepository

from .exceptions import EmailAlreadyRegisteredError
from .models import AuthProvider, ExternalIdentity, SubscriptionTier, User

USER_COLUMNS = (
    "id, email, name, picture, provider, subscription_status, is_admin, "
    "has_book, stripe_customer_id, created_at, last_login"
)

# Columns that update_fields() may write
UPDATABLE_COLUMNS = frozenset({"subscription_status", "is_admin", "has_book", "stripe_customer_id"})


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    All methods return Pydantic models mapped from database rows.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for that.
    """

    schema_statements = (
        """
        CREATE TABLE IF NOT EXISTS users (
            id                  SERIAL PRIMARY KEY,
            email               TEXT UNIQUE NOT NULL,
            name                TEXT,
            picture             TEXT,
            provider            TEXT NOT NULL,
            provider_id         TEXT NOT NULL,
            password_hash       TEXT,
            subscription_status TEXT DEFAULT 'free',
            is_admin            BOOLEAN DEFAULT FALSE,
            created_at          TIMESTAMPTZ DEFAULT NOW(),
            last_login          TIMESTAMPTZ DEFAULT NOW()
        )
        """,
        # Additive columns for tables created by earlier releases
        "ALTER TABLE users ADD COLUMN IF NOT EXISTS password_hash TEXT",
        "ALTER TABLE users ADD COLUMN IF NOT EXISTS is_admin BOOLEAN DEFAULT FALSE",
        "ALTER TABLE users ADD COLUMN IF NOT EXISTS has_book BOOLEAN DEFAULT FALSE",
        "ALTER TABLE users ADD COLUMN IF NOT EXISTS stripe_customer_id TEXT",
        "CREATE INDEX IF NOT EXISTS idx_users_stripe_customer ON users(stripe_customer_id)",
    )

    async def upsert_external(self, identity: ExternalIdentity) -> User:
        row = await self._db.fetch_one(
            f"""
            INSERT INTO users (email, name, picture, provider, provider_id, last_login)
            VALUES (%s, %s, %s, %s, %s, NOW())
            ON CONFLICT (email) DO UPDATE SET
                name       = EXCLUDED.name,
                picture    = EXCLUDED.picture,
                last_login = NOW()
            RETURNING {USER_COLUMNS}
            """,
            (
                identity.email,
                identity.name,
                identity.picture,
                identity.provider.value,
                identity.subject,
            ),
        )
        return self._map_to_user(row)

    async def create_email_user(self, email: str, name: str, password_hash: str) -> User:
        try:
            row = await self._db.fetch_one(
                f"""
                INSERT INTO users (email, name, provider, provider_id, password_hash)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING {USER_COLUMNS}
                """,
                (email, name, AuthProvider.EMAIL.value, email, password_hash),
            )
        except pg_errors.UniqueViolation as e:
            raise EmailAlreadyRegisteredError() from e
        return self._map_to_user(row)

    async def get_by_email(self, email: str) -> Optional[User]:
        row = await self._db.fetch_one(
            f"SELECT {USER_COLUMNS}, password_hash FROM users WHERE email = %s",
            (email,),
        )
        return self._map_to_user(row) if row else None

    async def get_by_id(self, user_id: int) -> Optional[User]:
        row = await self._db.fetch_one(
            f"SELECT {USER_COLUMNS} FROM users WHERE id = %s",
            (user_id,),
        )
        return self._map_to_user(row) if row else None

    async def list_all(self) -> list[User]:
        rows = await self._db.fetch_all(
            f"SELECT {USER_COLUMNS} FROM users ORDER BY created_at DESC"
        )
        return [self._map_to_user(row) for row in rows]

    async def update_fields(self, user_id: int, changes: dict[str, Any]) -> Optional[User]:
        unknown = set(changes) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Columns not updatable: {sorted(unknown)}")
        if not changes:
            return await self.get_by_id(user_id)

        columns = sorted(changes)
        query = sql.SQL("UPDATE users SET {assignments} WHERE id = %s RETURNING {returning}").format(
            assignments=sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(column)) for column in columns
            ),
            returning=sql.SQL(USER_COLUMNS),
        )
        params = [changes[column] for column in columns] + [user_id]
        row = await self._db.fetch_one(query, params)
        return self._map_to_user(row) if row else None

    async def set_admin_by_email(self, email: str) -> None:
        await self._db.execute("UPDATE users SET is_admin = TRUE WHERE email = %s", (email,))

    async def set_tier_by_customer(self, customer_id: str, tier: SubscriptionTier) -> int:
        return await self._db.execute(
            "UPDATE users SET subscription_status = %s WHERE stripe_customer_id = %s",
            (tier.value, customer_id),
        )

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map a users row to a User model, tolerating NULLs from old rows."""
        return User(
            id=data["id"],
            email=data["email"],
            name=data.get("name"),
            picture=data.get("picture"),
            provider=AuthProvider(data["provider"]),
            subscription_status=SubscriptionTier(data.get("subscription_status") or "free"),
            is_admin=bool(data.get("is_admin")),
            has_book=bool(data.get("has_book")),
            stripe_customer_id=data.get("stripe_customer_id"),
            created_at=data.get("created_at"),
            last_login=data.get("last_login"),
            password_hash=data.get("password_hash"),
        )
