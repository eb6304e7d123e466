"""Profile repository interface."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from whistle.domain.model.profile import Profile
from whistle.domain.value import UserId


class ProfileRepository(ABC):
    """Repository for Profile entity."""

    @abstractmethod
    async def find_by_user_ids(self, user_ids: Sequence[UserId]) -> List[Profile]:
        """Find profiles for many users (batch query).

        Args:
            user_ids: Users to look up

        Returns:
            Profiles that exist; users without a profile are omitted
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update)."""
        pass
