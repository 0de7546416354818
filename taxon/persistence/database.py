"""Async PostgreSQL engine and session factory."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taxon.config import Settings

APPLICATION_NAME = "taxon"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine described by ``settings.database``.

    SQL is echoed in debug mode. Connections identify themselves as
    ``taxon`` in ``pg_stat_activity``.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used for request-scoped transactions.

    Objects stay usable after commit and nothing is flushed implicitly;
    repositories flush explicitly where ordering matters.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
