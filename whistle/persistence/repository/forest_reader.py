"""PostgreSQL implementation of the forest read port."""

from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from whistle.domain.model import Comment, CommentVote
from whistle.domain.repository import ForestReader
from whistle.domain.value import AppRole, CommentId, PostId, UserId
from whistle.persistence.repository.comment import PostgresCommentRepository
from whistle.persistence.repository.role import PostgresRoleRepository
from whistle.persistence.repository.vote import PostgresVoteRepository


class PostgresForestReader(ForestReader):
    """Runs each read in its own short-lived session.

    The queries are the session-bound repositories' own; only the session
    lifetime differs, so a cancelled request cannot close a session that a
    shared build is still using.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize reader with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    async def find_comments(
        self,
        post_id: PostId,
        include_removed: bool = False,
        visible_to: Optional[UserId] = None,
    ) -> List[Comment]:
        async with self.session_factory() as session:
            return await PostgresCommentRepository(session).find_by_post(
                post_id, include_removed=include_removed, visible_to=visible_to
            )

    async def count_active(self, post_id: PostId) -> int:
        async with self.session_factory() as session:
            return await PostgresCommentRepository(session).count_by_post(post_id)

    async def find_roles(self, user_id: UserId) -> set[AppRole]:
        async with self.session_factory() as session:
            return await PostgresRoleRepository(session).find_roles(user_id)

    async def find_votes(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> List[CommentVote]:
        if not comment_ids:
            return []
        async with self.session_factory() as session:
            return await PostgresVoteRepository(session).find_by_user_and_comments(
                user_id, comment_ids
            )
