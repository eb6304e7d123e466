"""Comment forest entities.

A forest is the threaded, per-viewer view of all comments on a post.
It is rebuilt from storage on every cache miss and never mutated.
"""

from collections.abc import Iterator
from datetime import datetime
from typing import Optional

from pydantic import Field

from whistle.domain.model.comment import Comment
from whistle.domain.model.common import DomainModel
from whistle.domain.model.profile import AuthorSummary
from whistle.domain.value import CommentId, PostId, UserId, VoteDirection


class EnrichedComment(DomainModel):
    """A comment with its author, the viewer's vote and its replies.

    Replies are owned by their parent node and ordered by creation time.
    Boost fields are set when the comment came with a paid post boost.
    """

    comment: Comment
    author: AuthorSummary
    viewer_vote: Optional[VoteDirection] = None
    boost_amount_cents: Optional[int] = None
    boost_currency: Optional[str] = None
    replies: tuple["EnrichedComment", ...] = ()

    @property
    def id(self) -> CommentId:
        return self.comment.id


EnrichedComment.model_rebuild()


class CommentForest(DomainModel):
    """Ordered root comments of one post, as seen by one viewer."""

    post_id: PostId
    viewer_id: Optional[UserId] = None
    roots: tuple[EnrichedComment, ...] = ()
    repaired_ids: tuple[CommentId, ...] = ()  # Promoted to root by cycle breaking
    built_at: datetime = Field(default_factory=datetime.now)

    def walk(self) -> Iterator[EnrichedComment]:
        """Yield every node in depth-first pre-order."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.replies))

    @property
    def total(self) -> int:
        """Number of comments in the forest, replies included."""
        return sum(1 for _ in self.walk())
