"""Database dependency injection for FastAPI.

Owns the process-wide engine: created lazily (or eagerly by the application
lifespan), shared by every request, and disposed on shutdown. Sessions are
handed to request handlers through ``get_session``.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine
from infrastructure.observability import ConnectionProbe, DefaultConnectionProbe
from infrastructure.settings import get_database_settings

_probe: ConnectionProbe = DefaultConnectionProbe()

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_engine() -> AsyncEngine:
    """Get the database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker bound to the engine.

    Returns:
        Configured async engine
    """
    global _engine, _sessionmaker
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                settings = get_database_settings()
                _engine = create_engine(settings)
                _sessionmaker = async_sessionmaker(
                    _engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                # Read from the parsed URL so a DATABASE_URL override is reported
                _probe.engine_created(
                    host=_engine.url.host or "",
                    database=_engine.url.database or "",
                    pool_size=settings.pool_size,
                )
    return _engine


def init_database() -> AsyncEngine:
    """Create the engine at application startup.

    Connections are opened lazily by the pool; this only builds the engine
    so that configuration errors surface at boot instead of first request.
    """
    return get_engine()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for the current request (FastAPI dependency).

    The session does NOT auto-commit. Callers own their transactions
    using ``async with session.begin()``.

    Yields:
        AsyncSession for database operations
    """
    get_engine()
    assert _sessionmaker is not None

    async with _sessionmaker() as session:
        yield session


async def check_database_connection() -> bool:
    """Run ``SELECT 1`` against the store.

    Returns:
        True if the round trip succeeded, False otherwise
    """
    try:
        async with get_engine().connect() as connection:
            await connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        _probe.connectivity_check_failed(e)
        return False


async def close_database_connections() -> None:
    """Dispose of the engine and its pooled connections.

    Called on application shutdown. Also resets the sessionmaker so the
    engine can be re-created (used by tests).
    """
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _probe.engine_disposed()
        _engine = None
        _sessionmaker = None
