"""RenderInvoicePdf Use Case"""

from libs.result import Result, Return
from src.app import errors
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.services.pdf_service import PdfService
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal
from .common import load_authorized_invoice
from .dtos import InvoicePdfDTO


class RenderInvoicePdf:
    """
    Use Case: Render an invoice as PDF

    Business Rules:
    1. Invoice must exist (not soft-deleted) and be readable by the caller
    2. Any status can be rendered
    3. Line items are printed in display order
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        pdf_service: PdfService,
        authorizer: AuthorizeAccess,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.pdf_service = pdf_service
        self.authorizer = authorizer

    async def execute(self, principal: Principal, invoice_id: str) -> Result[InvoicePdfDTO]:
        try:
            loaded = await load_authorized_invoice(
                self.invoice_repo, self.authorizer, principal, invoice_id
            )
            if loaded.is_err():
                return Return.err(loaded.error)
            invoice = loaded.value

            line_items = await self.invoice_line_repo.get_by_invoice_id(invoice.id)
            pdf_bytes = self.pdf_service.generate_invoice(invoice, line_items)

            return Return.ok(
                InvoicePdfDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    content=pdf_bytes,
                )
            )

        except Exception as e:
            return Return.err(errors.internal_error("Failed to render invoice PDF", e))
