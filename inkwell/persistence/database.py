"""Async SQLAlchemy engine and sessions for PostgreSQL (asyncpg driver)."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from inkwell.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the engine shared by every request.

    Connections are tagged with ``application_name`` so they can be told
    apart in ``pg_stat_activity``.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": "inkwell"}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the per-request session factory.

    Repositories issue Core statements and map rows themselves, so objects
    are never expired or autoflushed; the request scope commits once.
    """
    return async_sessionmaker(
        engine,
        expire_on_commit=False,
        autoflush=False,
    )
