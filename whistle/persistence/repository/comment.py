"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from whistle.domain.model import Comment
from whistle.domain.repository import CommentRepository
from whistle.domain.value import CommentId, PostId, UserId
from whistle.persistence.errors import translate_storage_errors
from whistle.persistence.mappers import comment_to_dict, row_to_comment
from whistle.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @translate_storage_errors("comment lookup")
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @translate_storage_errors("comment fetch")
    async def find_by_post(
        self,
        post_id: PostId,
        include_removed: bool = False,
        visible_to: Optional[UserId] = None,
    ) -> List[Comment]:
        """Find the comments of a post in chronological order."""
        stmt = select(comments_table).where(comments_table.c.post_id == post_id)

        if not include_removed:
            if visible_to is not None:
                stmt = stmt.where(
                    or_(
                        comments_table.c.is_removed.is_(False),
                        comments_table.c.author_id == visible_to,
                    )
                )
            else:
                stmt = stmt.where(comments_table.c.is_removed.is_(False))

        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @translate_storage_errors("comment write")
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or replace)."""
        comment_dict = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)

        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    @translate_storage_errors("comment edit")
    async def update_body(
        self, comment_id: CommentId, body: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace the body of an active comment and mark it edited."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.is_removed.is_(False))
            .values(body=body, is_edited=True, edited_at=edited_at)
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            # Comment not found or removed
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    @translate_storage_errors("comment removal")
    async def set_removed(
        self,
        comment_id: CommentId,
        removed: bool,
        removed_by: Optional[UserId] = None,
        reason: Optional[str] = None,
        removed_at: Optional[datetime] = None,
    ) -> Optional[Comment]:
        """Set or clear the removal flag of a comment."""
        if removed:
            values = dict(
                is_removed=True,
                removed_at=removed_at or datetime.now(),
                removed_by=removed_by,
                removal_reason=reason,
            )
        else:
            values = dict(
                is_removed=False,
                removed_at=None,
                removed_by=None,
                removal_reason=None,
            )

        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(**values)
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    @translate_storage_errors("comment distinguish")
    async def set_distinguished(
        self, comment_id: CommentId, distinguished: bool
    ) -> Optional[Comment]:
        """Set or clear the moderator highlight of a comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(is_distinguished=distinguished)
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    @translate_storage_errors("comment score update")
    async def set_score(self, comment_id: CommentId, score: int) -> None:
        """Overwrite the denormalized score of a comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(score=score)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @translate_storage_errors("comment count")
    async def count_by_post(self, post_id: PostId) -> int:
        """Count active comments of a post."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.is_removed.is_(False))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
