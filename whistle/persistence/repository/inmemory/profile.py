"""In-memory profile repository for testing."""

from typing import Sequence

from whistle.domain.model.profile import Profile
from whistle.domain.repository.profile import ProfileRepository
from whistle.domain.value import UserId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[UserId, Profile] = {}

    async def find_by_user_ids(self, user_ids: Sequence[UserId]) -> list[Profile]:
        """Find profiles for many users; missing users are omitted."""
        return [
            self._profiles[user_id]
            for user_id in dict.fromkeys(user_ids)
            if user_id in self._profiles
        ]

    async def save(self, profile: Profile) -> Profile:
        """Create or replace a profile."""
        self._profiles[profile.user_id] = profile
        return profile
