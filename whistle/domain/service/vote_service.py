"""Vote domain service."""

from datetime import datetime

import logfire

from whistle.domain.model import Comment, CommentVote
from whistle.domain.repository import CommentRepository, VoteRepository
from whistle.domain.value import CommentId, UserId, VoteDirection

from .base import Service
from .comment_service import CommentService


class VoteService(Service):
    """Domain service for comment votes."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        comment_repository: CommentRepository,
        comment_service: CommentService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            comment_repository: Comment repository
            comment_service: Comment domain service
        """
        self.vote_repository = vote_repository
        self.comment_repository = comment_repository
        self.comment_service = comment_service

    async def vote_comment(
        self,
        comment_id: CommentId,
        user_id: UserId,
        direction: VoteDirection | None,
    ) -> Comment:
        """Cast, change or withdraw a user's vote on a comment.

        The comment score is recomputed from all votes afterwards.

        Args:
            comment_id: Comment ID
            user_id: Voter
            direction: UP, DOWN, or None to withdraw

        Returns:
            Comment with its updated score

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "vote_service.vote_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
            direction=int(direction) if direction is not None else None,
        ):
            comment = await self.comment_service.get_comment_by_id(comment_id)

            if direction is None:
                deleted = await self.vote_repository.delete_by_user_and_comment(
                    user_id=user_id, comment_id=comment_id
                )
                if not deleted:
                    logfire.info(
                        "No vote to withdraw",
                        comment_id=str(comment_id),
                        user_id=str(user_id),
                    )
            else:
                await self.vote_repository.upsert(
                    CommentVote(
                        comment_id=comment_id,
                        user_id=user_id,
                        direction=direction,
                        created_at=datetime.now(),
                    )
                )

            score = await self.vote_repository.sum_by_comment(comment_id)
            if score != comment.score:
                await self.comment_repository.set_score(comment_id, score)

            logfire.info(
                "Comment vote recorded",
                comment_id=str(comment_id),
                post_id=str(comment.post_id),
                score=score,
            )
            return comment.model_copy(update={"score": score})
