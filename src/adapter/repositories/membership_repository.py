"""SQLAlchemy Membership Repository Implementation"""

from typing import List
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.membership_repository import MembershipRepository
from src.domain.membership import ResourceMember


class SqlAlchemyMembershipRepository(MembershipRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def is_member(self, resource_type: str, resource_id: str, user_id: str) -> bool:
        statement = (
            select(func.count())
            .select_from(ResourceMember)
            .where(ResourceMember.resource_type == resource_type)
            .where(ResourceMember.resource_id == resource_id)
            .where(ResourceMember.user_id == user_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one() > 0

    async def list_user_ids(self, resource_type: str, resource_id: str) -> List[str]:
        statement = (
            select(ResourceMember.user_id)
            .where(ResourceMember.resource_type == resource_type)
            .where(ResourceMember.resource_id == resource_id)
            .order_by(ResourceMember.created_at)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
