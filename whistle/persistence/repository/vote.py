"""PostgreSQL implementation of Vote repository."""

from typing import List, Sequence

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from whistle.domain.model import CommentVote
from whistle.domain.repository import VoteRepository
from whistle.domain.value import CommentId, UserId
from whistle.persistence.errors import translate_storage_errors
from whistle.persistence.mappers import row_to_vote, vote_to_dict
from whistle.persistence.tables import comment_votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @translate_storage_errors("vote lookup")
    async def find_by_user_and_comments(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> List[CommentVote]:
        """Find a user's votes on many comments in one query."""
        if not comment_ids:
            return []

        stmt = select(comment_votes_table).where(
            and_(
                comment_votes_table.c.user_id == user_id,
                comment_votes_table.c.comment_id.in_(comment_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    @translate_storage_errors("vote write")
    async def upsert(self, vote: CommentVote) -> CommentVote:
        """Cast a vote, replacing the user's previous vote on the comment."""
        stmt = insert(comment_votes_table).values(**vote_to_dict(vote))
        stmt = stmt.on_conflict_do_update(
            index_elements=[
                comment_votes_table.c.comment_id,
                comment_votes_table.c.user_id,
            ],
            set_={
                "direction": stmt.excluded.direction,
                "created_at": stmt.excluded.created_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    @translate_storage_errors("vote write")
    async def delete_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> bool:
        """Withdraw a vote."""
        stmt = delete(comment_votes_table).where(
            and_(
                comment_votes_table.c.user_id == user_id,
                comment_votes_table.c.comment_id == comment_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @translate_storage_errors("vote tally")
    async def sum_by_comment(self, comment_id: CommentId) -> int:
        """Net score of a comment."""
        total = func.coalesce(func.sum(comment_votes_table.c.direction), 0)
        stmt = select(total).where(comment_votes_table.c.comment_id == comment_id)
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)
