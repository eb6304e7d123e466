"""Vote comment use case."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from whistle.application.usecase.base import BaseUseCase
from whistle.domain.repository import TransactionManager
from whistle.domain.service import CommentForestService, ViewerService, VoteService
from whistle.domain.value import CommentId, UserId, VoteDirection


class VoteCommentRequest(BaseModel):
    """Vote comment request."""

    comment_id: str  # UUID string
    direction: Literal[1, -1] | None = None  # None withdraws the vote
    user_id: str | None = None  # User ID from authenticated user


class VoteCommentResponse(BaseModel):
    """Vote comment response."""

    comment_id: str
    post_id: str
    score: int
    viewer_vote: int | None


class VoteCommentUseCase(BaseUseCase):
    """Use case for casting, changing or withdrawing a vote on a comment."""

    def __init__(
        self,
        vote_service: VoteService,
        viewer_service: ViewerService,
        forest_service: CommentForestService,
        transaction: TransactionManager,
    ) -> None:
        """Initialize vote comment use case.

        Args:
            vote_service: Vote domain service
            viewer_service: Viewer domain service
            forest_service: Comment forest domain service
            transaction: Commits the request's writes
        """
        self.vote_service = vote_service
        self.viewer_service = viewer_service
        self.forest_service = forest_service
        self.transaction = transaction

    async def execute(self, request: VoteCommentRequest) -> VoteCommentResponse:
        """Execute vote comment flow.

        Raises:
            NotAuthenticated: If there is no user
            NotFoundError: If the comment does not exist
        """
        user_id = UserId(UUID(request.user_id)) if request.user_id else None
        viewer = await self.viewer_service.require(user_id, "vote on a comment")

        direction = (
            VoteDirection(request.direction) if request.direction is not None else None
        )
        comment = await self.vote_service.vote_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            user_id=viewer.user_id,
            direction=direction,
        )
        await self.transaction.commit()
        self.forest_service.invalidate(comment.post_id)

        return VoteCommentResponse(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            score=comment.score,
            viewer_vote=int(direction) if direction is not None else None,
        )
