"""DeleteInvoice Use Case"""

from datetime import datetime
from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_history_repository import InvoiceHistoryRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal
from .common import load_authorized_invoice, record_history


class DeleteInvoice:
    """
    Use Case: Soft delete an invoice

    The row is kept with deleted_at set; it disappears from reads and
    listings but its number stays reserved. The deletion is recorded in the
    invoice history.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        history_repo: InvoiceHistoryRepository,
        authorizer: AuthorizeAccess,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.history_repo = history_repo
        self.authorizer = authorizer

    async def execute(self, principal: Principal, invoice_id: str) -> Result[None]:
        try:
            loaded = await load_authorized_invoice(
                self.invoice_repo, self.authorizer, principal, invoice_id, write=True
            )
            if loaded.is_err():
                return Return.err(loaded.error)

            invoice = loaded.value
            now = datetime.utcnow()
            invoice.deleted_at = now
            invoice.updated_by = principal.user_id
            invoice.updated_at = now

            await self.invoice_repo.update(invoice)
            await record_history(
                self.history_repo, invoice, invoice.status, principal.user_id, "Invoice deleted"
            )
            await self.uow.commit()

            return Return.ok()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to delete invoice", e))
