"""Engine factory for the two supported backends.

Connection strings are normalised to the async drivers (asyncpg for PostgreSQL,
aiosqlite for SQLite) and given per-dialect pool settings.
"""

import logging
from typing import Any, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from pydocuments.connection.exceptions import UnsupportedDialectError

logger = logging.getLogger(__name__)

POSTGRESQL = "postgresql"
SQLITE = "sqlite"


def detect_dialect(dsn: str) -> str:
    """Detect the database dialect of a connection string.

    Args:
        dsn: Database connection string

    Returns:
        ``"postgresql"`` or ``"sqlite"``

    Raises:
        UnsupportedDialectError: If the DSN names any other backend
    """
    dsn_lower = dsn.lower()
    if dsn_lower.startswith(("postgresql://", "postgres://", "postgresql+asyncpg://")):
        return POSTGRESQL
    if dsn_lower.startswith(("sqlite://", "sqlite+aiosqlite://")):
        return SQLITE
    raise UnsupportedDialectError(f"Cannot detect dialect from DSN: {dsn}")


def normalize_dsn(dsn: str) -> str:
    """Rewrite a DSN so it uses the async driver of its dialect."""
    if dsn.startswith("postgresql://"):
        return dsn.replace("postgresql://", "postgresql+asyncpg://", 1)
    if dsn.startswith("postgres://"):
        return dsn.replace("postgres://", "postgresql+asyncpg://", 1)
    if dsn.startswith("sqlite://"):
        return dsn.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return dsn


def is_sqlite_memory_dsn(dsn: str) -> bool:
    return ":memory:" in dsn or dsn.rstrip("/").endswith(("sqlite:", "sqlite+aiosqlite:"))


def get_engine_kwargs(dialect_name: str, dsn: Optional[str] = None) -> dict[str, Any]:
    """Dialect-appropriate ``create_async_engine`` settings.

    An in-memory SQLite database only lives as long as its connection, so it is
    pinned to a single shared connection.
    """
    if dialect_name == POSTGRESQL:
        return {
            "pool_size": 5,
            "max_overflow": 0,
            "pool_pre_ping": True,
        }
    engine_kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if dsn is not None and is_sqlite_memory_dsn(dsn):
        engine_kwargs.update(
            {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        )
    return engine_kwargs


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys = ON")
    finally:
        cursor.close()


def create_async_engine_for_dsn(dsn: str, **extra_kwargs: Any) -> AsyncEngine:
    """Create an async engine configured for the DSN's dialect.

    Args:
        dsn: PostgreSQL or SQLite connection string, with or without the async
            driver name
        **extra_kwargs: Passed to ``create_async_engine``, overriding the
            dialect defaults

    Returns:
        Configured ``AsyncEngine``; SQLite connections have foreign keys enabled
    """
    dialect_name = detect_dialect(dsn)
    normalized_dsn = normalize_dsn(dsn)
    engine_kwargs = get_engine_kwargs(dialect_name, normalized_dsn)
    engine_kwargs.update(extra_kwargs)

    engine = create_async_engine(normalized_dsn, **engine_kwargs)
    if dialect_name == SQLITE:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug("created engine", extra={"dialect": dialect_name, "url": engine.url.render_as_string()})
    return engine
