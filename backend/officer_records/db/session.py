"""Async Session Factory — provides async DB sessions for direct usage outside FastAPI.

Invariants:
    - Used outside the request path (test fixtures, one-off tooling), never by routes

Design Decisions:
    - Separate from infrastructure/database.py: callers need a raw factory without the
      FastAPI lifespan singleton
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)


def create_session_factory(
    database_url: str,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create an engine and an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    return engine, factory
