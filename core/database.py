"""
SQLAlchemy async database client for the Something Sweet bot.

One storage interface, two interchangeable backends chosen by configuration:
- sqlite: embedded file database (aiosqlite) for development
- postgres: networked PostgreSQL (asyncpg) for production

Both receive the same SQLAlchemy Core expressions, so no SQL is rewritten
per backend.
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from .config import get_sqlite_path, get_storage_backend
from .tables import metadata

# Module-level engine (created on first use)
_engine: AsyncEngine | None = None


def _get_postgres_url() -> str:
    """
    Construct async PostgreSQL URL from DATABASE_URL.

    For asyncpg, we need:
        postgresql+asyncpg://...
    """
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        raise ValueError(
            "DATABASE_URL environment variable must be set when STORAGE_BACKEND=postgres"
        )

    # Convert postgresql:// (and Heroku-style postgres://) to postgresql+asyncpg://
    for prefix in ("postgresql://", "postgres://"):
        if database_url.startswith(prefix):
            return database_url.replace(prefix, "postgresql+asyncpg://", 1)

    return database_url


def _get_database_url() -> str:
    """Async database URL for the configured backend."""
    if get_storage_backend() == "postgres":
        return _get_postgres_url()

    sqlite_path = get_sqlite_path()
    sqlite_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{sqlite_path}"


def get_engine() -> AsyncEngine:
    """Get or create the async SQLAlchemy engine singleton."""
    global _engine
    if _engine is None:
        database_url = _get_database_url()
        echo = os.environ.get("SQL_ECHO", "").lower() == "true"
        if database_url.startswith("sqlite"):
            _engine = create_async_engine(database_url, echo=echo)
        else:
            _engine = create_async_engine(
                database_url,
                echo=echo,
                # Connection pool settings
                pool_size=5,
                max_overflow=10,
                pool_timeout=30,
                pool_recycle=1800,  # Recycle connections every 30 minutes
            )
    return _engine


def set_engine(engine: AsyncEngine | None) -> None:
    """Replace the engine singleton. Used by tests to inject a scratch database."""
    global _engine
    _engine = engine


@asynccontextmanager
async def get_connection() -> AsyncGenerator[AsyncConnection, None]:
    """
    Get an async database connection from the pool.

    Usage:
        async with get_connection() as conn:
            result = await conn.execute(select(users))
            row = result.mappings().first()
    """
    engine = get_engine()
    async with engine.connect() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncGenerator[AsyncConnection, None]:
    """
    Get an async database connection with automatic transaction management.
    Commits on success, rolls back on exception.

    Usage:
        async with get_transaction() as conn:
            await conn.execute(insert(users).values(...))
            # Auto-commits if no exception
    """
    engine = get_engine()
    async with engine.begin() as conn:
        yield conn


async def create_tables() -> None:
    """
    Create any missing tables. Safe to run on every startup.

    Managed PostgreSQL deployments can use the Alembic migrations instead;
    both describe the same schema.
    """
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def close_engine() -> None:
    """Close the engine and all connections. Call on shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


def get_sync_database_url() -> str:
    """
    Get synchronous database URL for Alembic migrations.

    Alembic runs migrations synchronously, so we need a psycopg2 or pysqlite URL.
    """
    if get_storage_backend() == "sqlite":
        return f"sqlite:///{get_sqlite_path()}"

    database_url = _get_postgres_url()
    return database_url.replace("postgresql+asyncpg://", "postgresql://", 1)
