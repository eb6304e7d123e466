"""Viewer domain service."""

import logfire

from whistle.domain.error import NotAuthenticated
from whistle.domain.model import Viewer
from whistle.domain.repository import RoleRepository
from whistle.domain.value import UserId

from .base import Service


class ViewerService(Service):
    """Resolves user identities into viewers with their capabilities."""

    def __init__(self, role_repository: RoleRepository) -> None:
        """Initialize viewer service.

        Args:
            role_repository: Role repository
        """
        self.role_repository = role_repository

    async def resolve(self, user_id: UserId | None) -> Viewer | None:
        """Resolve a viewer, None for anonymous readers."""
        if user_id is None:
            return None

        with logfire.span("viewer_service.resolve", user_id=str(user_id)):
            roles = await self.role_repository.find_roles(user_id)
            return Viewer(user_id=user_id, roles=frozenset(roles))

    async def require(self, user_id: UserId | None, action: str) -> Viewer:
        """Resolve a viewer for a mutation.

        Raises:
            NotAuthenticated: If no user identity is known
        """
        viewer = await self.resolve(user_id)
        if viewer is None:
            logfire.warn("Unauthenticated mutation attempt", action=action)
            raise NotAuthenticated(action)
        return viewer
