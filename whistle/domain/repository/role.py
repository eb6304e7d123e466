"""User role repository interface."""

from abc import ABC, abstractmethod

from whistle.domain.value import AppRole, UserId


class RoleRepository(ABC):
    """Repository for platform roles held by users."""

    @abstractmethod
    async def find_roles(self, user_id: UserId) -> set[AppRole]:
        """Find every role held by a user (empty set for none)."""
        pass

    @abstractmethod
    async def grant(self, user_id: UserId, role: AppRole) -> None:
        """Grant a role to a user (idempotent)."""
        pass
