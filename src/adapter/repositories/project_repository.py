"""SQLAlchemy Project and Allocation Repository Implementations"""

from datetime import date
from typing import Dict, List, Optional, Sequence
from sqlalchemy import or_
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.project_repository import AllocationRepository, ProjectRepository
from src.domain.project import MemberAllocation, Project


class SqlAlchemyProjectRepository(ProjectRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, project_id: str) -> Optional[Project]:
        statement = select(Project).where(Project.id == project_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def count_by_organization(self, organization_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(Project)
            .where(Project.organization_id == organization_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def count_by_templates(self, template_ids: Sequence[str]) -> Dict[str, int]:
        if not template_ids:
            return {}
        statement = (
            select(Project.template_id, func.count())
            .where(Project.template_id.in_(list(template_ids)))
            .group_by(Project.template_id)
        )
        result = await self.session.execute(statement)
        counts = {template_id: 0 for template_id in template_ids}
        counts.update({template_id: count for template_id, count in result.all()})
        return counts


class SqlAlchemyAllocationRepository(AllocationRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_by_project(self, project_id: str) -> List[MemberAllocation]:
        statement = (
            select(MemberAllocation)
            .where(MemberAllocation.project_id == project_id)
            .order_by(MemberAllocation.start_date)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_by_users_in_range(
        self, user_ids: Sequence[str], start_date: date, end_date: date
    ) -> List[MemberAllocation]:
        if not user_ids:
            return []
        statement = (
            select(MemberAllocation)
            .where(MemberAllocation.user_id.in_(list(user_ids)))
            .where(MemberAllocation.start_date <= end_date)
            .where(or_(MemberAllocation.end_date.is_(None), MemberAllocation.end_date >= start_date))
            .order_by(MemberAllocation.start_date)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
