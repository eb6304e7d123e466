"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from whistle.domain.model import Boost, Comment, CommentEdit, CommentVote, Profile
from whistle.domain.value import (
    BoostId,
    CommentId,
    EditId,
    PostId,
    UserId,
    VoteDirection,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    removed_by = row.get("removed_by")
    boost_id = row.get("boost_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        parent_id=CommentId(_uuid(parent_id)) if parent_id else None,
        body=row["body"],
        score=row["score"],
        created_at=row["created_at"],
        is_edited=row["is_edited"],
        edited_at=row.get("edited_at"),
        is_removed=row["is_removed"],
        removed_at=row.get("removed_at"),
        removed_by=UserId(_uuid(removed_by)) if removed_by else None,
        removal_reason=row.get("removal_reason"),
        is_distinguished=row.get("is_distinguished", False),
        boost_id=BoostId(_uuid(boost_id)) if boost_id else None,
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_boost(row: Dict[str, Any]) -> Boost:
    """Convert database row to Boost domain model."""
    return Boost(
        id=BoostId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        amount_cents=row["amount_cents"],
        currency=row["currency"],
        created_at=row["created_at"],
    )


def boost_to_dict(boost: Boost) -> Dict[str, Any]:
    """Convert Boost domain model to database dict."""
    return boost.model_dump()


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model."""
    return Profile(
        user_id=UserId(_uuid(row["user_id"])),
        username=row.get("username"),
        display_name=row.get("display_name"),
        avatar_url=row.get("avatar_url"),
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to database dict."""
    return profile.model_dump()


def row_to_vote(row: Dict[str, Any]) -> CommentVote:
    """Convert database row to CommentVote domain model."""
    return CommentVote(
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        direction=VoteDirection(row["direction"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: CommentVote) -> Dict[str, Any]:
    """Convert CommentVote domain model to database dict."""
    return {
        "comment_id": vote.comment_id,
        "user_id": vote.user_id,
        "direction": int(vote.direction),
        "created_at": vote.created_at,
    }


def row_to_edit(row: Dict[str, Any]) -> CommentEdit:
    """Convert database row to CommentEdit domain model."""
    return CommentEdit(
        id=EditId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        previous_body=row["previous_body"],
        edited_by=UserId(_uuid(row["edited_by"])),
        created_at=row["created_at"],
    )


def edit_to_dict(edit: CommentEdit) -> Dict[str, Any]:
    """Convert CommentEdit domain model to database dict."""
    return edit.model_dump()
