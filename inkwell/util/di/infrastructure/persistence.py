"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from inkwell.config import Settings
from inkwell.domain.repository import (
    CategoryRepository,
    CommentRepository,
    PostRepository,
    UserRepository,
)
from inkwell.persistence.database import create_engine, create_session_factory
from inkwell.persistence.repository import (
    PostgresCategoryRepository,
    PostgresCommentRepository,
    PostgresPostRepository,
    PostgresUserRepository,
)
from inkwell.util.di.base import ProviderBase
from inkwell.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL-backed repositories sharing one session per request."""

    __is_mock__ = False

    scope = Scope.APP

    # Repositories only need the request's session.
    users = provide(
        PostgresUserRepository, provides=UserRepository, scope=Scope.REQUEST
    )
    categories = provide(
        PostgresCategoryRepository, provides=CategoryRepository, scope=Scope.REQUEST
    )
    posts = provide(
        PostgresPostRepository, provides=PostRepository, scope=Scope.REQUEST
    )
    comments = provide(
        PostgresCommentRepository, provides=CommentRepository, scope=Scope.REQUEST
    )

    @provide
    async def engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Instrumented engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide
    def session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Unit of work for one request.

        Commits when the request finishes cleanly. Any exception escaping
        the request rolls everything back.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                logfire.warn("Request rolled back", error=str(e))
                raise
            else:
                await session.commit()
