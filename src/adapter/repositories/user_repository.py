"""SQLAlchemy User Repository Implementation

One implementation, two capabilities: the scope is fixed at construction.
"""

from typing import List, Optional, Sequence
from sqlalchemy import false
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.storage_scope import StorageScope
from src.app.repositories.user_repository import UserRepository
from src.domain.user import User


class SqlAlchemyUserRepository(UserRepository):
    """
    SQLAlchemy implementation of UserRepository

    SCOPED: every query is restricted to rows of ``organization_id`` (the
    tenant captured in the caller's session). Without an organization the
    scoped repository sees nothing.
    PRIVILEGED: no row filter. Only for principal resolution fallback and
    server-side jobs.
    """

    def __init__(
        self,
        session: AsyncSession,
        scope: StorageScope = StorageScope.PRIVILEGED,
        organization_id: Optional[str] = None,
    ):
        self.session = session
        self.scope = scope
        self.organization_id = organization_id

    def _restrict(self, statement):
        if self.scope != StorageScope.SCOPED:
            return statement
        if not self.organization_id:
            return statement.where(false())
        return statement.where(User.organization_id == self.organization_id)

    async def get_by_auth_id(self, auth_id: str) -> Optional[User]:
        statement = self._restrict(select(User).where(User.auth_id == auth_id))
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> Optional[User]:
        statement = self._restrict(select(User).where(User.id == user_id))
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_ids(self, user_ids: Sequence[str]) -> List[User]:
        if not user_ids:
            return []
        statement = self._restrict(select(User).where(User.id.in_(list(user_ids))))
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_organization(self, organization_id: str, active_only: bool = False) -> int:
        statement = select(func.count()).select_from(User).where(User.organization_id == organization_id)
        if active_only:
            statement = statement.where(User.is_active.is_(True))
        result = await self.session.execute(self._restrict(statement))
        return result.scalar_one()
