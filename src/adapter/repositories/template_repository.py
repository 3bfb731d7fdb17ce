"""SQLAlchemy Project Template Repository Implementation"""

from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.template_repository import TemplateRepository
from src.domain.template import ProjectTemplate


class SqlAlchemyTemplateRepository(TemplateRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, template_id: str) -> Optional[ProjectTemplate]:
        statement = select(ProjectTemplate).where(ProjectTemplate.id == template_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def create(self, template: ProjectTemplate) -> ProjectTemplate:
        self.session.add(template)
        await self.session.flush()
        await self.session.refresh(template)
        return template

    async def delete(self, template: ProjectTemplate) -> None:
        await self.session.delete(template)
        await self.session.flush()

    async def list_all(self, limit: int, offset: int) -> Tuple[List[ProjectTemplate], int]:
        total = (
            await self.session.execute(select(func.count()).select_from(ProjectTemplate))
        ).scalar_one()

        statement = (
            select(ProjectTemplate)
            .order_by(ProjectTemplate.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def list_visible_in_organization(
        self, organization_id: str, user_id: str
    ) -> List[ProjectTemplate]:
        statement = (
            select(ProjectTemplate)
            .where(ProjectTemplate.organization_id == organization_id)
            .where(or_(ProjectTemplate.is_public.is_(True), ProjectTemplate.created_by == user_id))
            .order_by(ProjectTemplate.created_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_publicly_available(self) -> List[ProjectTemplate]:
        statement = (
            select(ProjectTemplate)
            .where(ProjectTemplate.is_publicly_available.is_(True))
            .order_by(ProjectTemplate.created_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_organization(self, organization_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(ProjectTemplate)
            .where(ProjectTemplate.organization_id == organization_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()
