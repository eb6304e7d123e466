"""Domain value types for Whistle.

Value types are immutable and defined by their values, not identity.
"""

from enum import Enum, IntEnum


class VoteDirection(IntEnum):
    """Direction of a vote on a comment.

    The integer value is the vote's contribution to the comment score.
    """

    UP = 1
    DOWN = -1


class AppRole(str, Enum):
    """Platform-wide roles held by a user."""

    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"


# Roles that may see and restore removed comments
MODERATION_ROLES = frozenset({AppRole.ADMIN, AppRole.MODERATOR})
