"""Domain value objects for Whistle."""

from whistle.domain.value.identifiers import (
    BoostId,
    CommentId,
    EditId,
    PostId,
    UserId,
)
from whistle.domain.value.types import MODERATION_ROLES, AppRole, VoteDirection

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "EditId",
    "BoostId",
    # Types
    "AppRole",
    "MODERATION_ROLES",
    "VoteDirection",
]
