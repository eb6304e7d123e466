"""Edit comment use case."""

from uuid import UUID

from pydantic import BaseModel

from whistle.application.usecase.base import BaseUseCase
from whistle.domain.repository import TransactionManager
from whistle.domain.service import CommentForestService, CommentService, ViewerService
from whistle.domain.value import CommentId, UserId

from .common import CommentResponse


class EditCommentRequest(BaseModel):
    """Edit comment request."""

    comment_id: str  # UUID string
    body: str  # New body, replaces the current one
    user_id: str | None = None  # Current user ID (must be author)


class EditCommentUseCase(BaseUseCase):
    """Use case for replacing a comment's body."""

    def __init__(
        self,
        comment_service: CommentService,
        viewer_service: ViewerService,
        forest_service: CommentForestService,
        transaction: TransactionManager,
    ) -> None:
        """Initialize edit comment use case.

        Args:
            comment_service: Comment domain service
            viewer_service: Viewer domain service
            forest_service: Comment forest domain service
            transaction: Commits the request's writes
        """
        self.comment_service = comment_service
        self.viewer_service = viewer_service
        self.forest_service = forest_service
        self.transaction = transaction

    async def execute(self, request: EditCommentRequest) -> CommentResponse:
        """Execute edit comment flow.

        Raises:
            NotAuthenticated: If there is no user
            NotAuthorizedError: If the user is not the author
            ContentRemovedError: If the comment is removed
            NotFoundError: If the comment does not exist
            ValidationError: If the new body is invalid
        """
        user_id = UserId(UUID(request.user_id)) if request.user_id else None
        viewer = await self.viewer_service.require(user_id, "edit a comment")

        comment = await self.comment_service.edit_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            editor=viewer,
            body=request.body,
        )
        await self.transaction.commit()
        self.forest_service.invalidate(comment.post_id)

        return CommentResponse.from_domain(comment)
