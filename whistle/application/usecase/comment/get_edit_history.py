"""Get comment edit history use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from whistle.application.usecase.base import BaseUseCase
from whistle.domain.service import CommentService
from whistle.domain.value import CommentId


class CommentEditItem(BaseModel):
    """A previous version of a comment."""

    edit_id: str
    previous_body: str
    edited_by: str
    created_at: datetime


class GetEditHistoryRequest(BaseModel):
    """Get edit history request."""

    comment_id: str  # UUID string


class GetEditHistoryResponse(BaseModel):
    """Get edit history response."""

    comment_id: str
    edits: list[CommentEditItem]


class GetEditHistoryUseCase(BaseUseCase):
    """Use case for listing previous bodies of a comment, oldest first."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetEditHistoryRequest) -> GetEditHistoryResponse:
        """Execute get edit history flow.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment_id = CommentId(UUID(request.comment_id))
        comment = await self.comment_service.get_comment_by_id(comment_id)
        edits = await self.comment_service.get_edit_history(comment.id)

        return GetEditHistoryResponse(
            comment_id=request.comment_id,
            edits=[
                CommentEditItem(
                    edit_id=str(edit.id),
                    previous_body=edit.previous_body,
                    edited_by=str(edit.edited_by),
                    created_at=edit.created_at,
                )
                for edit in edits
            ],
        )
