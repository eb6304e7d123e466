"""PostgreSQL implementation of Role repository."""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from whistle.domain.repository import RoleRepository
from whistle.domain.value import AppRole, UserId
from whistle.persistence.errors import translate_storage_errors
from whistle.persistence.tables import user_roles_table


class PostgresRoleRepository(RoleRepository):
    """PostgreSQL implementation of RoleRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @translate_storage_errors("role lookup")
    async def find_roles(self, user_id: UserId) -> set[AppRole]:
        """Find the roles held by a user."""
        stmt = select(user_roles_table.c.role).where(
            user_roles_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return {AppRole(role) for role in result.scalars().all()}

    @translate_storage_errors("role write")
    async def grant(self, user_id: UserId, role: AppRole) -> None:
        """Grant a role to a user (no-op if already held)."""
        stmt = (
            insert(user_roles_table)
            .values(user_id=user_id, role=role.value)
            .on_conflict_do_nothing()
        )
        await self.session.execute(stmt)
        await self.session.flush()
