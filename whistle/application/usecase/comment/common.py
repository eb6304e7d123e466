"""Response models shared by comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from whistle.domain.model import AuthorSummary, Comment, EnrichedComment


class CommentResponse(BaseModel):
    """A single comment as returned by mutations."""

    comment_id: str
    post_id: str
    author_id: str
    parent_id: str | None
    body: str
    score: int
    created_at: datetime
    is_edited: bool
    edited_at: datetime | None
    is_removed: bool
    is_distinguished: bool

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentResponse":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            body=comment.body,
            score=comment.score,
            created_at=comment.created_at,
            is_edited=comment.is_edited,
            edited_at=comment.edited_at,
            is_removed=comment.is_removed,
            is_distinguished=comment.is_distinguished,
        )


class AuthorResponse(BaseModel):
    """Comment author."""

    author_id: str
    display_name: str
    username: str | None
    avatar_url: str | None

    @classmethod
    def from_domain(cls, author: AuthorSummary) -> "AuthorResponse":
        return cls(
            author_id=str(author.author_id),
            display_name=author.display_name,
            username=author.username,
            avatar_url=author.avatar_url,
        )


class CommentNodeResponse(BaseModel):
    """A comment in a thread, with its replies."""

    comment_id: str
    parent_id: str | None
    author: AuthorResponse
    body: str
    score: int
    created_at: datetime
    is_edited: bool
    edited_at: datetime | None
    is_removed: bool
    is_distinguished: bool
    viewer_vote: int | None  # 1, -1, or None when the viewer has not voted
    boost_amount_cents: int | None = None
    boost_currency: str | None = None
    replies: list["CommentNodeResponse"] = []

    @classmethod
    def from_domain(cls, node: EnrichedComment) -> "CommentNodeResponse":
        """Convert a node and its whole subtree, deepest replies first."""
        order: list[EnrichedComment] = []
        stack = [node]
        while stack:
            current = stack.pop()
            order.append(current)
            stack.extend(current.replies)

        converted: dict[int, CommentNodeResponse] = {}
        for current in reversed(order):
            comment = current.comment
            converted[id(current)] = cls(
                comment_id=str(comment.id),
                parent_id=str(comment.parent_id) if comment.parent_id else None,
                author=AuthorResponse.from_domain(current.author),
                body=comment.body,
                score=comment.score,
                created_at=comment.created_at,
                is_edited=comment.is_edited,
                edited_at=comment.edited_at,
                is_removed=comment.is_removed,
                is_distinguished=comment.is_distinguished,
                viewer_vote=int(current.viewer_vote)
                if current.viewer_vote is not None
                else None,
                boost_amount_cents=current.boost_amount_cents,
                boost_currency=current.boost_currency,
                replies=[converted[id(reply)] for reply in current.replies],
            )
        return converted[id(node)]


CommentNodeResponse.model_rebuild()

