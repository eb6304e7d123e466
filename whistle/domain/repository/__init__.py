"""Repository interfaces for Whistle domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from whistle.domain.repository.boost import BoostRepository
from whistle.domain.repository.comment import CommentRepository
from whistle.domain.repository.edit import CommentEditRepository
from whistle.domain.repository.forest_reader import ForestReader
from whistle.domain.repository.profile import ProfileRepository
from whistle.domain.repository.role import RoleRepository
from whistle.domain.repository.transaction import TransactionManager
from whistle.domain.repository.vote import VoteRepository

__all__ = [
    "BoostRepository",
    "CommentRepository",
    "CommentEditRepository",
    "ForestReader",
    "ProfileRepository",
    "RoleRepository",
    "TransactionManager",
    "VoteRepository",
]
