"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from topten.config import Settings
from topten.domain.repository import (
    CategoryRepository,
    TopTenListRepository,
    UserRepository,
    VoteRepository,
)
from topten.persistence.database import create_engine, create_session_factory
from topten.persistence.repository import (
    PostgresCategoryRepository,
    PostgresTopTenListRepository,
    PostgresUserRepository,
    PostgresVoteRepository,
)
from topten.util.di.base import ProviderBase
from topten.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Postgres through SQLAlchemy's async engine.

    One engine per container; one session, and so one transaction, per
    request. Repositories of a request share its session, which is what
    lets a vote switch and the list lookup before it see the same snapshot.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Commit when the request finishes cleanly, roll back otherwise.

        Domain errors raised after a write (AlreadyVoted after a lookup, a
        rejected update) also roll back, so a request never half-applies.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn(
                    "Request transaction rolled back",
                    error_type=type(e).__name__,
                )
                await session.rollback()
                raise
            await session.commit()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_category_repository(self, session: AsyncSession) -> CategoryRepository:
        return PostgresCategoryRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_list_repository(self, session: AsyncSession) -> TopTenListRepository:
        return PostgresTopTenListRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        return PostgresVoteRepository(session)
