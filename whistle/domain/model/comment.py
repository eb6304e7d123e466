"""Comment entity.

Comments are stored flat: each row only knows its parent. The threaded
view is rebuilt per read by the forest builder.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from whistle.domain.model.common import DomainModel
from whistle.domain.value import BoostId, CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment row as read from storage.

    Removal is a soft delete: the row stays so its replies keep their
    parent. Removed rows are only returned to their author and to
    moderators.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    parent_id: Optional[CommentId] = None
    body: str = Field(min_length=1)
    score: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    is_removed: bool = False
    removed_at: Optional[datetime] = None
    removed_by: Optional[UserId] = None
    removal_reason: Optional[str] = None
    is_distinguished: bool = False  # Highlighted by a moderator
    boost_id: Optional[BoostId] = None

    @property
    def sort_key(self) -> tuple[datetime, str]:
        """Chronological order, ties broken by identifier."""
        return (self.created_at, str(self.id))
