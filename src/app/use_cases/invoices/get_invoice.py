"""GetInvoice Use Case"""

from libs.result import Result, Return
from src.app import errors
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.invoice_payment_repository import InvoicePaymentRepository
from src.app.repositories.invoice_history_repository import InvoiceHistoryRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal
from .common import load_authorized_invoice, to_invoice_dto
from .dtos import InvoiceResponseDTO


class GetInvoice:
    """
    Get Invoice Use Case

    Read-only. Returns the invoice with its line items (display order) and
    payments (newest first) and history (newest first). Soft-deleted
    invoices are not found.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        payment_repo: InvoicePaymentRepository,
        history_repo: InvoiceHistoryRepository,
        authorizer: AuthorizeAccess,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.payment_repo = payment_repo
        self.history_repo = history_repo
        self.authorizer = authorizer

    async def execute(self, principal: Principal, invoice_id: str) -> Result[InvoiceResponseDTO]:
        try:
            loaded = await load_authorized_invoice(
                self.invoice_repo, self.authorizer, principal, invoice_id
            )
            if loaded.is_err():
                return Return.err(loaded.error)

            invoice = loaded.value
            line_items = await self.invoice_line_repo.get_by_invoice_id(invoice.id)
            payments = await self.payment_repo.get_by_invoice_id(invoice.id)
            history = await self.history_repo.get_by_invoice_id(invoice.id)

            return Return.ok(to_invoice_dto(invoice, line_items, payments, history))

        except Exception as e:
            return Return.err(errors.internal_error("Failed to get invoice", e))
