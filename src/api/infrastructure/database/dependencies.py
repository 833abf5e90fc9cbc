"""Database dependency injection for FastAPI.

Provides the async session factory and per-request write sessions with
explicit transaction management.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_write_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

_probe = DefaultConnectionProbe()

# Module-level engine and sessionmaker (created on first use)
_write_engine: AsyncEngine | None = None
_write_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_write_engine() -> AsyncEngine:
    """Get the write database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.

    Returns:
        Configured async engine for write operations
    """
    global _write_engine, _write_sessionmaker
    if _write_engine is None:
        with _engine_lock:
            if _write_engine is None:
                settings = get_database_settings()
                _write_engine = create_write_engine(settings)
                _write_sessionmaker = async_sessionmaker(
                    _write_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    host=settings.host,
                    database=settings.database,
                    pool_size=settings.pool_max_connections,
                )
    return _write_engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the shared sessionmaker.

    Used by components that run outside a request's session, such as
    event listeners that open their own unit of work.

    Returns:
        The sessionmaker bound to the write engine
    """
    get_write_engine()
    assert _write_sessionmaker is not None
    return _write_sessionmaker


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a write session for mutations (FastAPI dependency).

    The session does NOT auto-commit. Callers must explicitly manage
    transactions using `async with session.begin()`.

    Yields:
        AsyncSession for database operations
    """
    async with get_session_factory()() as session:
        yield session


async def get_auth_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session dedicated to credential resolution (FastAPI dependency).

    Kept apart from the write session so that resolving the bearer token
    never leaves a transaction open on the session the route's service
    will use.

    Yields:
        AsyncSession for credential lookups
    """
    async with get_session_factory()() as session:
        yield session


async def close_database_connections() -> None:
    """Dispose the engine and reset the sessionmaker.

    Should be called on application shutdown.
    """
    global _write_engine, _write_sessionmaker

    if _write_engine is not None:
        await _write_engine.dispose()
        _probe.pool_closed()
        _write_engine = None
        _write_sessionmaker = None
