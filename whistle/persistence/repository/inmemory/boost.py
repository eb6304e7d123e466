"""In-memory boost repository for testing."""

from typing import Sequence

from whistle.domain.model.boost import Boost
from whistle.domain.repository.boost import BoostRepository
from whistle.domain.value import BoostId


class InMemoryBoostRepository(BoostRepository):
    """In-memory implementation of BoostRepository for testing."""

    def __init__(self) -> None:
        self._boosts: dict[BoostId, Boost] = {}

    async def find_by_ids(self, boost_ids: Sequence[BoostId]) -> list[Boost]:
        return [
            self._boosts[boost_id]
            for boost_id in dict.fromkeys(boost_ids)
            if boost_id in self._boosts
        ]

    async def save(self, boost: Boost) -> Boost:
        self._boosts[boost.id] = boost
        return boost
