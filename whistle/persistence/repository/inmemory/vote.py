"""In-memory vote repository for testing."""

from typing import Sequence

from whistle.domain.model.vote import CommentVote
from whistle.domain.repository.vote import VoteRepository
from whistle.domain.value import CommentId, UserId


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[tuple[CommentId, UserId], CommentVote] = {}

    async def find_by_user_and_comments(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> list[CommentVote]:
        """Find a user's votes on many comments."""
        return [
            vote
            for comment_id in comment_ids
            if (vote := self._votes.get((comment_id, user_id))) is not None
        ]

    async def upsert(self, vote: CommentVote) -> CommentVote:
        """Cast or replace a vote."""
        self._votes[(vote.comment_id, vote.user_id)] = vote
        return vote

    async def delete_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> bool:
        """Withdraw a vote."""
        return self._votes.pop((comment_id, user_id), None) is not None

    async def sum_by_comment(self, comment_id: CommentId) -> int:
        """Net score of a comment."""
        return sum(
            int(vote.direction)
            for (voted_id, _), vote in self._votes.items()
            if voted_id == comment_id
        )
