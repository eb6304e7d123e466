"""Get comment count use case."""

from uuid import UUID

from pydantic import BaseModel

from whistle.application.usecase.base import BaseUseCase
from whistle.domain.service import CommentForestService
from whistle.domain.value import PostId


class GetCommentCountRequest(BaseModel):
    """Get comment count request."""

    post_id: str  # UUID string


class GetCommentCountResponse(BaseModel):
    """Get comment count response."""

    post_id: str
    count: int


class GetCommentCountUseCase(BaseUseCase):
    """Use case for counting the active comments of a post."""

    def __init__(self, forest_service: CommentForestService) -> None:
        self.forest_service = forest_service

    async def execute(self, request: GetCommentCountRequest) -> GetCommentCountResponse:
        post_id = PostId(UUID(request.post_id))
        count = await self.forest_service.get_comment_count(post_id)
        return GetCommentCountResponse(post_id=request.post_id, count=count)
