"""PostgreSQL repository implementations."""

from whistle.persistence.repository.boost import PostgresBoostRepository
from whistle.persistence.repository.comment import PostgresCommentRepository
from whistle.persistence.repository.edit import PostgresCommentEditRepository
from whistle.persistence.repository.forest_reader import PostgresForestReader
from whistle.persistence.repository.profile import PostgresProfileRepository
from whistle.persistence.repository.role import PostgresRoleRepository
from whistle.persistence.repository.transaction import PostgresTransactionManager
from whistle.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresBoostRepository",
    "PostgresCommentRepository",
    "PostgresCommentEditRepository",
    "PostgresForestReader",
    "PostgresProfileRepository",
    "PostgresRoleRepository",
    "PostgresTransactionManager",
    "PostgresVoteRepository",
]
