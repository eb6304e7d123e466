"""Domain model entities for Whistle."""

from whistle.domain.model.boost import Boost
from whistle.domain.model.comment import Comment
from whistle.domain.model.edit import CommentEdit
from whistle.domain.model.forest import CommentForest, EnrichedComment
from whistle.domain.model.profile import AuthorSummary, Profile
from whistle.domain.model.viewer import Viewer
from whistle.domain.model.vote import CommentVote

__all__ = [
    "Boost",
    "Comment",
    "CommentEdit",
    "CommentForest",
    "EnrichedComment",
    "AuthorSummary",
    "Profile",
    "Viewer",
    "CommentVote",
]
