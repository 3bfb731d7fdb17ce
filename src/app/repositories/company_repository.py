"""Company / Opportunity / Partner Commission Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.company import Company, CommissionStatus, Opportunity, PartnerCommission


class CompanyRepository(ABC):
    """
    Repository interface for ops/CRM records

    Every lookup is constrained to one organization.
    """

    @abstractmethod
    async def get_in_organization(self, company_id: str, organization_id: str) -> Optional[Company]:
        pass

    @abstractmethod
    async def get_opportunity_in_organization(
        self, opportunity_id: str, organization_id: str
    ) -> Optional[Opportunity]:
        pass

    @abstractmethod
    async def list_referred_opportunities(
        self, organization_id: str, partner_company_id: str
    ) -> List[Opportunity]:
        pass

    @abstractmethod
    async def list_commissions(
        self,
        organization_id: str,
        partner_company_id: str,
        status: Optional[CommissionStatus] = None,
    ) -> List[PartnerCommission]:
        """
        Retrieve commissions of a partner, newest first

        Args:
            organization_id: Organization identifier
            partner_company_id: Partner company identifier
            status: Optional filter by status

        Returns:
            List of commissions
        """
        pass

    @abstractmethod
    async def create_commission(self, commission: PartnerCommission) -> PartnerCommission:
        pass
