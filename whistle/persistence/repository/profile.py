"""PostgreSQL implementation of Profile repository."""

from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from whistle.domain.model import Profile
from whistle.domain.repository import ProfileRepository
from whistle.domain.value import UserId
from whistle.persistence.errors import translate_storage_errors
from whistle.persistence.mappers import profile_to_dict, row_to_profile
from whistle.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository.

    Profile lookups run alongside the request's vote lookup, and an
    AsyncSession cannot run two statements at once, so every call opens
    its own short-lived session.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    @translate_storage_errors("profile lookup")
    async def find_by_user_ids(self, user_ids: Sequence[UserId]) -> List[Profile]:
        """Find profiles for many users in one query."""
        if not user_ids:
            return []

        stmt = select(profiles_table).where(profiles_table.c.user_id.in_(user_ids))
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [row_to_profile(row._asdict()) for row in result.fetchall()]

    @translate_storage_errors("profile write")
    async def save(self, profile: Profile) -> Profile:
        """Create or replace a profile."""
        profile_dict = profile_to_dict(profile)
        stmt = insert(profiles_table).values(**profile_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[profiles_table.c.user_id],
            set_={
                "username": stmt.excluded.username,
                "display_name": stmt.excluded.display_name,
                "avatar_url": stmt.excluded.avatar_url,
            },
        )
        async with self.session_factory() as session:
            await session.execute(stmt)
            await session.commit()
        return profile
