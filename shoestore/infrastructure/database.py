"""Database configuration and session management.

Provides the async SQLAlchemy engine, session factory and declarative base.
PostgreSQL (asyncpg) is the deployed backend; SQLite (aiosqlite) URLs are
accepted for local runs and tests.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from shoestore.infrastructure.config import settings


def engine_options(database_url: str) -> dict[str, Any]:
    """Get create_async_engine keyword arguments for a database URL."""
    options: dict[str, Any] = {"echo": settings.debug}
    if make_url(database_url).get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return options


engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a request-scoped database session.

    Commits when the request succeeds, rolls back and re-raises otherwise.

    Yields:
        AsyncSession for database operations.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
