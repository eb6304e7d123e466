"""Comment edit history entity."""

from datetime import datetime

from pydantic import Field

from whistle.domain.model.common import DomainModel
from whistle.domain.value import CommentId, EditId, UserId


class CommentEdit(DomainModel):
    """Snapshot of a comment body taken before an edit."""

    id: EditId
    comment_id: CommentId
    previous_body: str
    edited_by: UserId
    created_at: datetime = Field(default_factory=datetime.now)
