"""PostgreSQL implementation of CommentEdit repository."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from whistle.domain.model import CommentEdit
from whistle.domain.repository import CommentEditRepository
from whistle.domain.value import CommentId
from whistle.persistence.errors import translate_storage_errors
from whistle.persistence.mappers import edit_to_dict, row_to_edit
from whistle.persistence.tables import comment_edits_table


class PostgresCommentEditRepository(CommentEditRepository):
    """PostgreSQL implementation of CommentEditRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @translate_storage_errors("edit history write")
    async def save(self, edit: CommentEdit) -> CommentEdit:
        """Record a previous body."""
        stmt = comment_edits_table.insert().values(**edit_to_dict(edit))
        await self.session.execute(stmt)
        await self.session.flush()
        return edit

    @translate_storage_errors("edit history lookup")
    async def find_by_comment(self, comment_id: CommentId) -> List[CommentEdit]:
        """Find the edit history of a comment, oldest first."""
        stmt = (
            select(comment_edits_table)
            .where(comment_edits_table.c.comment_id == comment_id)
            .order_by(comment_edits_table.c.created_at, comment_edits_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_edit(row._asdict()) for row in result.fetchall()]
