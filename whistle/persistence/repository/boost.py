"""PostgreSQL implementation of Boost repository."""

from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from whistle.domain.model import Boost
from whistle.domain.repository import BoostRepository
from whistle.domain.value import BoostId
from whistle.persistence.errors import translate_storage_errors
from whistle.persistence.mappers import boost_to_dict, row_to_boost
from whistle.persistence.tables import post_boosts_table


class PostgresBoostRepository(BoostRepository):
    """PostgreSQL implementation of BoostRepository.

    Opens a session per call, like the profile repository, so the lookup
    can run alongside the other enrichment queries.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @translate_storage_errors("boost lookup")
    async def find_by_ids(self, boost_ids: Sequence[BoostId]) -> List[Boost]:
        """Find boosts by ID in one query."""
        if not boost_ids:
            return []

        stmt = select(post_boosts_table).where(post_boosts_table.c.id.in_(boost_ids))
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [row_to_boost(row._asdict()) for row in result.fetchall()]

    @translate_storage_errors("boost write")
    async def save(self, boost: Boost) -> Boost:
        """Create or replace a boost."""
        stmt = insert(post_boosts_table).values(**boost_to_dict(boost))
        stmt = stmt.on_conflict_do_update(
            index_elements=[post_boosts_table.c.id],
            set_={
                "amount_cents": stmt.excluded.amount_cents,
                "currency": stmt.excluded.currency,
            },
        )
        async with self.session_factory() as session:
            await session.execute(stmt)
            await session.commit()
        return boost
