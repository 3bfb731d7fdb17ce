"""SQLAlchemy API Key Repository Implementation"""

from datetime import datetime
from typing import List, Optional, Tuple
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.api_key_repository import ApiKeyRepository
from src.domain.api_key import ApiKey, ApiKeyScope, ApiKeyStatus


class SqlAlchemyApiKeyRepository(ApiKeyRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, api_key: ApiKey) -> ApiKey:
        self.session.add(api_key)
        await self.session.flush()
        await self.session.refresh(api_key)
        return api_key

    async def get_by_id(self, api_key_id: str) -> Optional[ApiKey]:
        statement = select(ApiKey).where(ApiKey.id == api_key_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_key_id(self, key_id: str) -> Optional[ApiKey]:
        statement = select(ApiKey).where(ApiKey.key_id == key_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list(
        self,
        status: Optional[ApiKeyStatus] = None,
        scope: Optional[ApiKeyScope] = None,
        organization_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[ApiKey], int]:
        conditions = []
        if status:
            conditions.append(ApiKey.status == status)
        if scope:
            conditions.append(ApiKey.scope == scope)
        if organization_id:
            conditions.append(ApiKey.organization_id == organization_id)

        count_statement = select(func.count()).select_from(ApiKey).where(*conditions)
        total = (await self.session.execute(count_statement)).scalar_one()

        statement = (
            select(ApiKey)
            .where(*conditions)
            .order_by(ApiKey.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def update(self, api_key: ApiKey) -> ApiKey:
        api_key.updated_at = datetime.utcnow()
        self.session.add(api_key)
        await self.session.flush()
        await self.session.refresh(api_key)
        return api_key
