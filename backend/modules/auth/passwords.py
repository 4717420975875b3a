"""
Password hashing with bcrypt.

Hashing is deliberately slow, so both helpers run in a worker thread.
"""

import asyncio

import bcrypt

MIN_PASSWORD_LENGTH = 8
DEFAULT_ROUNDS = 12


def _hash(password: str, rounds: int) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def _check(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


async def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Return a salted bcrypt hash of the password."""
    return await asyncio.to_thread(_hash, password, rounds)


async def verify_password(password: str, password_hash: str) -> bool:
    """Compare a password against a stored bcrypt hash."""
    return await asyncio.to_thread(_check, password, password_hash)
