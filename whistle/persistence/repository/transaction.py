"""SQLAlchemy session transaction manager."""

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from whistle.domain.repository import TransactionManager
from whistle.persistence.errors import translate_storage_errors


class PostgresTransactionManager(TransactionManager):
    """Commits the request session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @translate_storage_errors("commit")
    async def commit(self) -> None:
        await self.session.commit()
        logfire.info("Session committed")
