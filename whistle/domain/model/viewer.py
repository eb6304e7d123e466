"""Viewer identity used to personalize comment reads."""

from pydantic import Field

from whistle.domain.model.common import DomainModel
from whistle.domain.value import MODERATION_ROLES, AppRole, UserId


class Viewer(DomainModel):
    """An authenticated user reading or writing comments."""

    user_id: UserId
    roles: frozenset[AppRole] = Field(default_factory=frozenset)

    @property
    def is_moderator(self) -> bool:
        """Whether the viewer holds moderator or admin capability."""
        return bool(self.roles & MODERATION_ROLES)
