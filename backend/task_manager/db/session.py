"""Async Session Factory — provides async DB sessions for direct usage outside FastAPI.

Invariants:
    - Meant for scripts (seed) and migrations, never for request handling

Design Decisions:
    - Returns the engine too so callers can dispose it when the script ends
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)


def create_session_factory(
    database_url: str,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create an async engine and session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    return engine, factory
