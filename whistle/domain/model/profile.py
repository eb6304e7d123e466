"""Author profile entities."""

from typing import Optional

from whistle.domain.model.common import DomainModel
from whistle.domain.value import UserId


class Profile(DomainModel):
    """Public profile record of a user."""

    user_id: UserId
    username: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


class AuthorSummary(DomainModel):
    """Author attributes copied onto every comment they wrote."""

    author_id: UserId
    display_name: str
    username: Optional[str] = None
    avatar_url: Optional[str] = None

    @classmethod
    def from_profile(cls, profile: Profile, fallback_name: str) -> "AuthorSummary":
        """Summarize a profile, preferring display name over username."""
        name = (profile.display_name or "").strip() or (profile.username or "").strip()
        return cls(
            author_id=profile.user_id,
            display_name=name or fallback_name,
            username=profile.username,
            avatar_url=profile.avatar_url,
        )

    @classmethod
    def anonymous(cls, author_id: UserId, display_name: str) -> "AuthorSummary":
        """Placeholder for an author without a profile record."""
        return cls(author_id=author_id, display_name=display_name)
