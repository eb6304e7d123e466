"""Get comment forest use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from whistle.application.usecase.base import BaseUseCase
from whistle.domain.service import CommentForestService
from whistle.domain.value import PostId, UserId

from .common import CommentNodeResponse


class GetCommentForestRequest(BaseModel):
    """Get comment forest request."""

    post_id: str  # UUID string
    viewer_id: str | None = None  # User ID from token, None for anonymous


class GetCommentForestResponse(BaseModel):
    """Get comment forest response."""

    post_id: str
    comments: list[CommentNodeResponse]
    total: int
    built_at: datetime


class GetCommentForestUseCase(BaseUseCase):
    """Use case for reading the threaded comments of a post."""

    def __init__(self, forest_service: CommentForestService) -> None:
        """Initialize get comment forest use case.

        Args:
            forest_service: Comment forest domain service
        """
        self.forest_service = forest_service

    async def execute(
        self, request: GetCommentForestRequest
    ) -> GetCommentForestResponse:
        """Execute get comment forest flow.

        Args:
            request: Post ID and optional viewer

        Returns:
            Root comments in chronological order, each with nested replies

        Raises:
            StorageUnavailable: If comments could not be loaded
        """
        post_id = PostId(UUID(request.post_id))
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None

        forest = await self.forest_service.get_forest(post_id, viewer_id)

        return GetCommentForestResponse(
            post_id=request.post_id,
            comments=[CommentNodeResponse.from_domain(root) for root in forest.roots],
            total=forest.total,
            built_at=forest.built_at,
        )
