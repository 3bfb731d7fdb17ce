"""PartnerStats Use Case

Referral and commission summary of a partner company.
"""

import asyncio
import logging
from libs.result import Result, Return
from src.app import errors
from src.app.repositories.company_repository import CompanyRepository
from src.domain.access import Principal
from src.domain.company import (
    DUE_COMMISSION_STATUSES,
    OPEN_OPPORTUNITY_STATUSES,
    CommissionStatus,
    OpportunityStatus,
)
from src.domain.metrics import percentage, sum_amounts
from .dtos import CommissionDTO, PartnerDTO, PartnerStatsResponseDTO, PartnerSummaryDTO

logger = logging.getLogger(__name__)


class GetPartnerStats:
    """
    Get Partner Stats Use Case

    Read-only. Referred opportunities and commissions are loaded
    concurrently; a failed slice is logged and treated as empty.

    Summary rules:
    - pending commission = pending + approved
    - paid commission = paid
    - pipeline value = open opportunities (new, working, negotiation, pending)
    - total revenue = converted opportunities
    - percentages are 0 when the denominator is 0
    """

    def __init__(self, company_repo: CompanyRepository, commission_repo: CompanyRepository):
        # Two repositories so the slices can load on separate sessions
        self.company_repo = company_repo
        self.commission_repo = commission_repo

    async def execute(self, principal: Principal, partner_id: str) -> Result[PartnerStatsResponseDTO]:
        if not principal.organization_id:
            return Return.err(errors.bad_request(errors.NO_ORGANIZATION_MESSAGE))
        organization_id = principal.organization_id

        try:
            partner = await self.company_repo.get_in_organization(partner_id, organization_id)
        except Exception as e:
            return Return.err(errors.internal_error("Failed to load partner", e))

        if not partner:
            return Return.err(errors.not_found("Partner company"))
        if not partner.is_partner:
            return Return.err(errors.bad_request("Company is not marked as a partner"))

        opportunities, commissions = await asyncio.gather(
            self.company_repo.list_referred_opportunities(organization_id, partner_id),
            self.commission_repo.list_commissions(organization_id, partner_id),
            return_exceptions=True,
        )
        if isinstance(opportunities, Exception):
            logger.error(f"Error loading referred opportunities for partner {partner_id}: {opportunities}")
            opportunities = []
        if isinstance(commissions, Exception):
            logger.error(f"Error loading commissions for partner {partner_id}: {commissions}")
            commissions = []

        converted = [o for o in opportunities if o.status == OpportunityStatus.CONVERTED]
        pending = sum_amounts(c.commission_amount for c in commissions if c.status in DUE_COMMISSION_STATUSES)
        paid = sum_amounts(c.commission_amount for c in commissions if c.status == CommissionStatus.PAID)
        total = pending + paid

        summary = PartnerSummaryDTO(
            referred_opportunities_count=len(opportunities),
            converted_opportunities_count=len(converted),
            conversion_rate=percentage(len(converted), len(opportunities), 1),
            total_revenue=sum_amounts(o.value for o in converted),
            pipeline_value=sum_amounts(
                o.value for o in opportunities if o.status in OPEN_OPPORTUNITY_STATUSES
            ),
            pending_commission=pending,
            paid_commission=paid,
            total_commission=total,
            paid_commission_percentage=percentage(paid, total, 1),
        )

        return Return.ok(
            PartnerStatsResponseDTO(
                partner=PartnerDTO(
                    id=partner.id,
                    name=partner.name,
                    commission_rate=partner.partner_commission_rate,
                ),
                summary=summary,
                commissions=[CommissionDTO.model_validate(c) for c in commissions],
            )
        )
