"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from whistle.domain.model.comment import Comment
from whistle.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer and raise
    StorageUnavailable when the backing store cannot be reached.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found (removed or not), None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        include_removed: bool = False,
        visible_to: Optional[UserId] = None,
    ) -> List[Comment]:
        """Find the comments of a post in chronological order.

        Rows are ordered by created_at ascending, then by id ascending.

        Args:
            post_id: The post ID
            include_removed: Include every removed comment (moderator view)
            visible_to: Also include removed comments written by this user

        Returns:
            List of comments, empty if the post has none
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or replace).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_body(
        self, comment_id: CommentId, body: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace the body of an active comment and mark it edited.

        Args:
            comment_id: The comment ID
            body: New body text
            edited_at: Time of the edit

        Returns:
            The updated comment, None if missing or removed
        """
        pass

    @abstractmethod
    async def set_removed(
        self,
        comment_id: CommentId,
        removed: bool,
        removed_by: Optional[UserId] = None,
        reason: Optional[str] = None,
        removed_at: Optional[datetime] = None,
    ) -> Optional[Comment]:
        """Set or clear the removal flag of a comment (soft delete).

        Clearing the flag also clears the removal audit fields.

        Returns:
            The updated comment, None if missing
        """
        pass

    @abstractmethod
    async def set_distinguished(
        self, comment_id: CommentId, distinguished: bool
    ) -> Optional[Comment]:
        """Set or clear the moderator highlight of a comment.

        Returns:
            The updated comment, None if missing
        """
        pass

    @abstractmethod
    async def set_score(self, comment_id: CommentId, score: int) -> None:
        """Overwrite the denormalized score of a comment."""
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count active (not removed) comments of a post."""
        pass
