"""Partner API Routes

Commission statistics and commission records of partner companies.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.company_repository import SqlAlchemyCompanyRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.dependencies import get_principal
from src.api.error import ClientError
from src.app.use_cases.insights import CreatePartnerCommission, GetPartnerStats
from src.app.use_cases.insights.dtos import (
    CommissionDTO,
    CreateCommissionCommandDTO,
    PartnerStatsResponseDTO,
)
from src.depends import get_session, get_session_factory, open_sessions
from src.domain.access import Principal

router = APIRouter(prefix="/ops/partners", tags=["Partners"])


@router.get("/{partner_id}/stats", response_model=PartnerStatsResponseDTO)
async def get_partner_stats(
    partner_id: str,
    principal: Principal = Depends(get_principal),
    session_factory: sessionmaker = Depends(get_session_factory),
):
    """
    Referral and commission summary of a partner company.

    `pending_commission` covers pending and approved commissions;
    percentages have one decimal and are 0 when there is nothing to divide by.
    """
    async with open_sessions(session_factory, 2) as (company_session, commission_session):
        use_case = GetPartnerStats(
            SqlAlchemyCompanyRepository(company_session),
            SqlAlchemyCompanyRepository(commission_session),
        )
        result = await use_case.execute(principal, partner_id)

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "/{partner_id}/commissions",
    response_model=CommissionDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_partner_commission(
    partner_id: str,
    command: CreateCommissionCommandDTO,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    """Record a commission; the rate defaults to the partner's rate"""
    use_case = CreatePartnerCommission(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCompanyRepository(session),
        SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(principal, partner_id, command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
