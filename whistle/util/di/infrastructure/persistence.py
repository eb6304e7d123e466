"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from whistle.config import Settings
from whistle.domain.repository import (
    BoostRepository,
    CommentEditRepository,
    CommentRepository,
    ForestReader,
    ProfileRepository,
    RoleRepository,
    TransactionManager,
    VoteRepository,
)
from whistle.persistence.database import create_engine, create_session_factory
from whistle.persistence.repository import (
    PostgresBoostRepository,
    PostgresCommentEditRepository,
    PostgresCommentRepository,
    PostgresForestReader,
    PostgresProfileRepository,
    PostgresRoleRepository,
    PostgresTransactionManager,
    PostgresVoteRepository,
)
from whistle.util.di.base import ProviderBase
from whistle.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the app shuts down."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Use cases commit explicitly before invalidating caches; anything
        left uncommitted when the request fails is rolled back.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(self, session: AsyncSession) -> TransactionManager:
        """Provide transaction manager for the request session."""
        return PostgresTransactionManager(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_role_repository(self, session: AsyncSession) -> RoleRepository:
        """Provide Role repository."""
        return PostgresRoleRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_edit_repository(self, session: AsyncSession) -> CommentEditRepository:
        """Provide CommentEdit repository."""
        return PostgresCommentEditRepository(session)

    @provide(scope=Scope.APP)
    def get_profile_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> ProfileRepository:
        """Provide Profile repository (opens its own sessions)."""
        return PostgresProfileRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_boost_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> BoostRepository:
        """Provide Boost repository (opens its own sessions)."""
        return PostgresBoostRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_forest_reader(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> ForestReader:
        """Provide the forest read port (opens its own sessions)."""
        return PostgresForestReader(session_factory)
