"""Create comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from whistle.application.usecase.base import BaseUseCase
from whistle.domain.repository import TransactionManager
from whistle.domain.service import CommentForestService, CommentService, ViewerService
from whistle.domain.value import CommentId, PostId, UserId

from .common import CommentResponse


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    body: str
    author_id: str | None = None  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        viewer_service: ViewerService,
        forest_service: CommentForestService,
        transaction: TransactionManager,
    ) -> None:
        """Initialize create comment use case.

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

    async def execute(self, request: CreateCommentRequest) -> CommentResponse:
        """Execute create comment flow.

        Steps:
        1. Require an authenticated author
        2. Create comment via comment service (validates body and parent)
        3. Commit, then invalidate the post's cached forests and count

        Args:
            request: Create comment request

        Returns:
            Created comment

        Raises:
            NotAuthenticated: If there is no author
            ValidationError: If body or parent comment is invalid
            StorageUnavailable: If the write could not be committed
        """
        author_id = UserId(UUID(request.author_id)) if request.author_id else None
        viewer = await self.viewer_service.require(author_id, "create a comment")

        post_id = PostId(UUID(request.post_id))
        parent_id = CommentId(UUID(request.parent_id)) if request.parent_id else None

        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author_id=viewer.user_id,
            body=request.body,
            parent_id=parent_id,
        )
        await self.transaction.commit()
        self.forest_service.invalidate(post_id)

        logfire.info(
            "Comment published", comment_id=str(comment.id), post_id=str(post_id)
        )
        return CommentResponse.from_domain(comment)
