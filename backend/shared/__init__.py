"""
Shared infrastructure for FundsEdge backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Postgres connection pool facade
- schema: Once-only schema initialization
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import Database, get_database, is_database_configured, reset_database_cache
from .exceptions import (
    FundsEdgeError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ServiceUnavailableError,
    DatabaseUnavailableError,
    ExternalServiceError,
)
from .models import SessionClaims
from .schema import SchemaManager, SchemaTask

__all__ = [
    "Settings",
    "get_settings",
    "Database",
    "get_database",
    "is_database_configured",
    "reset_database_cache",
    "FundsEdgeError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "ServiceUnavailableError",
    "DatabaseUnavailableError",
    "ExternalServiceError",
    "SessionClaims",
    "SchemaManager",
    "SchemaTask",
]
