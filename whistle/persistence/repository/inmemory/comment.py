"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional

from whistle.domain.model.comment import Comment
from whistle.domain.repository.comment import CommentRepository
from whistle.domain.value import CommentId, PostId, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(
        self,
        post_id: PostId,
        include_removed: bool = False,
        visible_to: Optional[UserId] = None,
    ) -> list[Comment]:
        """Find the comments of a post in chronological order."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]

        if not include_removed:
            comments = [
                c
                for c in comments
                if not c.is_removed
                or (visible_to is not None and c.author_id == visible_to)
            ]

        comments.sort(key=lambda c: c.sort_key)
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or replace)."""
        self._comments[comment.id] = comment
        return comment

    async def update_body(
        self, comment_id: CommentId, body: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace the body of an active comment."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_removed:
            return None

        updated = comment.model_copy(
            update={"body": body, "is_edited": True, "edited_at": edited_at}
        )
        self._comments[comment_id] = updated
        return updated

    async def set_removed(
        self,
        comment_id: CommentId,
        removed: bool,
        removed_by: Optional[UserId] = None,
        reason: Optional[str] = None,
        removed_at: Optional[datetime] = None,
    ) -> Optional[Comment]:
        """Set or clear the removal flag of a comment."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        if removed:
            update = {
                "is_removed": True,
                "removed_at": removed_at or datetime.now(),
                "removed_by": removed_by,
                "removal_reason": reason,
            }
        else:
            update = {
                "is_removed": False,
                "removed_at": None,
                "removed_by": None,
                "removal_reason": None,
            }

        updated = comment.model_copy(update=update)
        self._comments[comment_id] = updated
        return updated

    async def set_distinguished(
        self, comment_id: CommentId, distinguished: bool
    ) -> Optional[Comment]:
        """Set or clear the moderator highlight of a comment."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(update={"is_distinguished": distinguished})
        self._comments[comment_id] = updated
        return updated

    async def set_score(self, comment_id: CommentId, score: int) -> None:
        """Overwrite the score of a comment."""
        comment = self._comments.get(comment_id)
        if comment:
            self._comments[comment_id] = comment.model_copy(update={"score": score})

    async def count_by_post(self, post_id: PostId) -> int:
        """Count active comments of a post."""
        return sum(
            1
            for c in self._comments.values()
            if c.post_id == post_id and not c.is_removed
        )
