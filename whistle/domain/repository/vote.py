"""Comment vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from whistle.domain.model.vote import CommentVote
from whistle.domain.value import CommentId, UserId


class VoteRepository(ABC):
    """Repository for CommentVote entity."""

    @abstractmethod
    async def find_by_user_and_comments(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> List[CommentVote]:
        """Find a user's votes on many comments (batch query).

        Args:
            user_id: The voter
            comment_ids: Comments to check

        Returns:
            Votes that exist; comments without a vote are omitted
        """
        pass

    @abstractmethod
    async def upsert(self, vote: CommentVote) -> CommentVote:
        """Cast a vote, replacing the user's previous vote on the comment."""
        pass

    @abstractmethod
    async def delete_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> bool:
        """Withdraw a vote.

        Returns:
            True if a vote was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def sum_by_comment(self, comment_id: CommentId) -> int:
        """Net score of a comment: upvotes minus downvotes."""
        pass
