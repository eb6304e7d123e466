"""Comment vote entity."""

from datetime import datetime

from pydantic import Field

from whistle.domain.model.common import DomainModel
from whistle.domain.value import CommentId, UserId, VoteDirection


class CommentVote(DomainModel):
    """A user's vote on a comment.

    Business rules:
    - One vote per user per comment (changing direction replaces it)
    - Withdrawing a vote deletes the record
    """

    comment_id: CommentId
    user_id: UserId
    direction: VoteDirection
    created_at: datetime = Field(default_factory=datetime.now)
