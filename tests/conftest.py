"""Test configuration and helpers."""

from datetime import datetime, timedelta
from uuid import UUID, uuid4

from whistle.domain.model import AuthorSummary, Comment, EnrichedComment
from whistle.domain.value import BoostId, CommentId, PostId, UserId

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


def make_comment(
    post_id: PostId,
    *,
    comment_id: CommentId | UUID | None = None,
    parent_id: CommentId | UUID | None = None,
    author_id: UserId | None = None,
    at: int = 0,
    body: str = "A comment",
    is_removed: bool = False,
    boost_id: BoostId | None = None,
) -> Comment:
    """Build a comment row created `at` seconds after a fixed base time."""
    return Comment(
        id=CommentId(comment_id or uuid4()),
        post_id=post_id,
        author_id=author_id or UserId(uuid4()),
        parent_id=CommentId(parent_id) if parent_id else None,
        body=body,
        created_at=BASE_TIME + timedelta(seconds=at),
        is_removed=is_removed,
        boost_id=boost_id,
    )


def enrich(comment: Comment) -> EnrichedComment:
    """Wrap a row with a placeholder author, as enrichment would."""
    return EnrichedComment(
        comment=comment,
        author=AuthorSummary.anonymous(comment.author_id, "Anonymous"),
    )


def cid(n: int) -> CommentId:
    """Deterministic comment ID whose string form sorts by n."""
    return CommentId(UUID(int=n))
