"""Read port used by comment forest builds."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from whistle.domain.model.comment import Comment
from whistle.domain.model.vote import CommentVote
from whistle.domain.value import AppRole, CommentId, PostId, UserId


class ForestReader(ABC):
    """Reads everything a comment forest build needs.

    A coalesced build is shared by every request waiting on it and can
    outlive the request that started it. Implementations therefore must
    not hold a request-bound session: each call acquires and releases its
    own connection.
    """

    @abstractmethod
    async def find_comments(
        self,
        post_id: PostId,
        include_removed: bool = False,
        visible_to: Optional[UserId] = None,
    ) -> List[Comment]:
        """Find the comments of a post ordered by created_at, then id.

        Args:
            post_id: The post ID
            include_removed: Include every removed comment (moderator view)
            visible_to: Also include removed comments written by this user
        """
        pass

    @abstractmethod
    async def count_active(self, post_id: PostId) -> int:
        """Count active (not removed) comments of a post."""
        pass

    @abstractmethod
    async def find_roles(self, user_id: UserId) -> set[AppRole]:
        """Find every role held by a user."""
        pass

    @abstractmethod
    async def find_votes(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> List[CommentVote]:
        """Find a user's votes on many comments (batch query)."""
        pass
