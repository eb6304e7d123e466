"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from whistle.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg-backed engine.

    Connect and statement timeouts are passed to asyncpg, so an unreachable
    or stalled database surfaces as an error instead of a hung read.
    """
    database = settings.database
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,  # Drop connections the server closed while idle
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_timeout=database.connect_timeout_seconds,
        connect_args={
            "timeout": database.connect_timeout_seconds,
            "command_timeout": database.command_timeout_seconds,
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the request session factory.

    Sessions never autoflush; repositories flush after each write and use
    cases commit explicitly.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
