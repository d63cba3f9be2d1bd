"""Async engine and per-request transactions for PostgreSQL."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from forum.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine; SQL is echoed in debug mode."""
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory.

    Objects stay readable after commit, and nothing is flushed until a
    repository asks for it.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Open a session that commits on success and rolls back on error.

    One transaction spans one request, so a thread replace commits
    together with the reputation and counter updates that follow it.
    """
    async with session_factory() as session:
        try:
            yield session
        except Exception as e:
            logfire.warn("Transaction rolled back", error=str(e))
            await session.rollback()
            raise
        await session.commit()
