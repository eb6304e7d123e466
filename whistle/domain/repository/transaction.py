"""Transaction boundary interface."""

from abc import ABC, abstractmethod


class TransactionManager(ABC):
    """Commits pending writes of the current unit of work.

    A write counts as confirmed only once commit() has returned; cache
    invalidation is ordered after it.
    """

    @abstractmethod
    async def commit(self) -> None:
        pass
