"""ListInvoices Use Case"""

from libs.result import Result, Return
from src.app import errors
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.access import Principal
from .common import to_invoice_dto
from .dtos import InvoiceListResponseDTO, ListInvoicesQueryDTO


class ListInvoices:
    """
    List Invoices Use Case

    Read-only listing of the caller's organization invoices, newest first,
    with optional status / project / company filters and the total count
    for pagination.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self, principal: Principal, query: ListInvoicesQueryDTO
    ) -> Result[InvoiceListResponseDTO]:
        if not principal.organization_id:
            return Return.err(errors.bad_request(errors.NO_ORGANIZATION_MESSAGE))

        try:
            invoices, total = await self.invoice_repo.list_by_organization(
                organization_id=principal.organization_id,
                status=query.status,
                project_id=query.project_id,
                company_id=query.company_id,
                limit=query.limit,
                offset=query.offset,
            )
        except Exception as e:
            return Return.err(errors.internal_error("Failed to list invoices", e))

        return Return.ok(
            InvoiceListResponseDTO(
                invoices=[to_invoice_dto(invoice) for invoice in invoices],
                total=total,
                limit=query.limit,
                offset=query.offset,
            )
        )
