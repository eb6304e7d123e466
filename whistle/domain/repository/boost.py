"""Post boost repository interface."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from whistle.domain.model.boost import Boost
from whistle.domain.value import BoostId


class BoostRepository(ABC):
    """Repository for Boost entity.

    Boosts are created by the payment flow; comments only read them.
    """

    @abstractmethod
    async def find_by_ids(self, boost_ids: Sequence[BoostId]) -> List[Boost]:
        """Find boosts by ID (batch query).

        Args:
            boost_ids: Boosts to look up

        Returns:
            Boosts that exist; unknown IDs are omitted
        """
        pass

    @abstractmethod
    async def save(self, boost: Boost) -> Boost:
        """Save a boost (create or replace)."""
        pass
