"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from topten.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def constraint_name(error: IntegrityError) -> Optional[str]:
    """Name of the constraint behind an IntegrityError, when the driver reports it.

    asyncpg exposes ``constraint_name`` on its exception, which SQLAlchemy
    wraps (possibly twice) before it reaches us.
    """
    candidate: BaseException | None = error.orig
    while candidate is not None:
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name
        candidate = candidate.__cause__
    return None
