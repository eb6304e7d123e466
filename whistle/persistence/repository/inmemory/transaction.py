"""In-memory transaction manager for testing."""

from whistle.domain.repository.transaction import TransactionManager


class InMemoryTransactionManager(TransactionManager):
    """Counts commits; in-memory writes are visible immediately."""

    def __init__(self) -> None:
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1
