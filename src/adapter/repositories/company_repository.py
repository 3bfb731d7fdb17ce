"""SQLAlchemy Company / Opportunity / Commission Repository Implementation"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.company_repository import CompanyRepository
from src.domain.company import Company, CommissionStatus, Opportunity, PartnerCommission


class SqlAlchemyCompanyRepository(CompanyRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_in_organization(self, company_id: str, organization_id: str) -> Optional[Company]:
        statement = (
            select(Company)
            .where(Company.id == company_id)
            .where(Company.organization_id == organization_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_opportunity_in_organization(
        self, opportunity_id: str, organization_id: str
    ) -> Optional[Opportunity]:
        statement = (
            select(Opportunity)
            .where(Opportunity.id == opportunity_id)
            .where(Opportunity.organization_id == organization_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_referred_opportunities(
        self, organization_id: str, partner_company_id: str
    ) -> List[Opportunity]:
        statement = (
            select(Opportunity)
            .where(Opportunity.organization_id == organization_id)
            .where(Opportunity.referred_by_company_id == partner_company_id)
            .order_by(Opportunity.created_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_commissions(
        self,
        organization_id: str,
        partner_company_id: str,
        status: Optional[CommissionStatus] = None,
    ) -> List[PartnerCommission]:
        statement = (
            select(PartnerCommission)
            .where(PartnerCommission.organization_id == organization_id)
            .where(PartnerCommission.partner_company_id == partner_company_id)
        )
        if status:
            statement = statement.where(PartnerCommission.status == status)
        statement = statement.order_by(PartnerCommission.created_at.desc())

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create_commission(self, commission: PartnerCommission) -> PartnerCommission:
        self.session.add(commission)
        await self.session.flush()
        await self.session.refresh(commission)
        return commission
