"""In-memory repository implementations for testing."""

from .boost import InMemoryBoostRepository
from .comment import InMemoryCommentRepository
from .edit import InMemoryCommentEditRepository
from .forest_reader import InMemoryForestReader
from .profile import InMemoryProfileRepository
from .role import InMemoryRoleRepository
from .transaction import InMemoryTransactionManager
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryBoostRepository",
    "InMemoryCommentEditRepository",
    "InMemoryCommentRepository",
    "InMemoryForestReader",
    "InMemoryProfileRepository",
    "InMemoryRoleRepository",
    "InMemoryTransactionManager",
    "InMemoryVoteRepository",
]
