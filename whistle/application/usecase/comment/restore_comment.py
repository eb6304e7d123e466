"""Restore comment use case."""

from uuid import UUID

from pydantic import BaseModel

from whistle.application.usecase.base import BaseUseCase
from whistle.domain.repository import TransactionManager
from whistle.domain.service import CommentForestService, CommentService, ViewerService
from whistle.domain.value import CommentId, UserId

from .common import CommentResponse


class RestoreCommentRequest(BaseModel):
    """Restore comment request."""

    comment_id: str  # UUID string
    user_id: str | None = None  # Moderator


class RestoreCommentUseCase(BaseUseCase):
    """Use case for moderators to undo a comment removal."""

    def __init__(
        self,
        comment_service: CommentService,
        viewer_service: ViewerService,
        forest_service: CommentForestService,
        transaction: TransactionManager,
    ) -> None:
        self.comment_service = comment_service
        self.viewer_service = viewer_service
        self.forest_service = forest_service
        self.transaction = transaction

    async def execute(self, request: RestoreCommentRequest) -> CommentResponse:
        """Execute restore comment flow.

        Raises:
            NotAuthenticated: If there is no user
            NotAuthorizedError: If the user is not a moderator
            NotFoundError: If the comment does not exist
        """
        user_id = UserId(UUID(request.user_id)) if request.user_id else None
        viewer = await self.viewer_service.require(user_id, "restore a comment")

        comment = await self.comment_service.restore_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            actor=viewer,
        )
        await self.transaction.commit()
        self.forest_service.invalidate(comment.post_id)

        return CommentResponse.from_domain(comment)
