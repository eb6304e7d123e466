"""In-memory role repository for testing."""

from whistle.domain.repository.role import RoleRepository
from whistle.domain.value import AppRole, UserId


class InMemoryRoleRepository(RoleRepository):
    """In-memory implementation of RoleRepository for testing."""

    def __init__(self) -> None:
        self._roles: dict[UserId, set[AppRole]] = {}

    async def find_roles(self, user_id: UserId) -> set[AppRole]:
        return set(self._roles.get(user_id, set()))

    async def grant(self, user_id: UserId, role: AppRole) -> None:
        self._roles.setdefault(user_id, set()).add(role)
