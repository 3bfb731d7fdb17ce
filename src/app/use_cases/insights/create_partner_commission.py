"""CreatePartnerCommission Use Case"""

from decimal import Decimal
from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.company_repository import CompanyRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.access import Principal
from src.domain.company import CommissionStatus, PartnerCommission
from src.domain.invoice_rules import HUNDRED, round2
from .dtos import CommissionDTO, CreateCommissionCommandDTO


class CreatePartnerCommission:
    """
    Use Case: Record a commission owed to a partner

    Business Rules:
    1. Partner must be a partner company of the caller's organization
    2. base_amount must be > 0
    3. Rate defaults to the partner's rate and must end up > 0
    4. commission_amount = round2(base_amount * rate / 100)
    5. Linked opportunity / invoice must belong to the same organization
    6. Created as pending
    """

    def __init__(
        self,
        uow: UnitOfWork,
        company_repo: CompanyRepository,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.company_repo = company_repo
        self.invoice_repo = invoice_repo

    async def execute(
        self, principal: Principal, partner_id: str, command: CreateCommissionCommandDTO
    ) -> Result[CommissionDTO]:
        if not principal.organization_id:
            return Return.err(errors.bad_request(errors.NO_ORGANIZATION_MESSAGE))
        organization_id = principal.organization_id

        try:
            partner = await self.company_repo.get_in_organization(partner_id, organization_id)
            if not partner:
                return Return.err(errors.not_found("Partner company"))
            if not partner.is_partner:
                return Return.err(errors.bad_request("Company is not marked as a partner"))

            if command.base_amount is None or command.base_amount <= 0:
                return Return.err(errors.bad_request("Base amount must be a positive number"))

            rate = command.commission_rate
            if rate is None:
                rate = partner.partner_commission_rate or Decimal("0")
            if rate <= 0:
                return Return.err(errors.bad_request("Commission rate must be specified"))

            if command.opportunity_id:
                opportunity = await self.company_repo.get_opportunity_in_organization(
                    command.opportunity_id, organization_id
                )
                if not opportunity:
                    return Return.err(errors.bad_request("Invalid opportunity ID"))

            if command.invoice_id:
                invoice = await self.invoice_repo.get_by_id(command.invoice_id)
                if not invoice or invoice.organization_id != organization_id:
                    return Return.err(errors.bad_request("Invalid invoice ID"))

            commission = await self.company_repo.create_commission(
                PartnerCommission(
                    organization_id=organization_id,
                    partner_company_id=partner.id,
                    opportunity_id=command.opportunity_id,
                    invoice_id=command.invoice_id,
                    commission_rate=rate,
                    base_amount=round2(command.base_amount),
                    commission_amount=round2(command.base_amount * rate / HUNDRED),
                    status=CommissionStatus.PENDING,
                    notes=command.notes,
                )
            )
            await self.uow.commit()
            return Return.ok(CommissionDTO.model_validate(commission))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to create commission", e))
