"""SendInvoice Use Case

Marks an invoice as sent to a recipient and notifies.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.notification_service import InvoiceEvent, NotificationService
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_history_repository import InvoiceHistoryRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal
from src.domain.invoice import InvoiceStatus
from .common import load_authorized_invoice, record_history, to_invoice_dto
from .dtos import InvoiceResponseDTO, SendInvoiceCommandDTO

logger = logging.getLogger(__name__)

SENDABLE_STATUSES = frozenset({InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.OVERDUE})


class SendInvoice:
    """
    Use Case: Send invoice

    Business Rules:
    1. Only draft, sent (re-send) and overdue invoices can be sent
    2. Recipient defaults to the invoice's client email
    3. Status becomes sent; sent_at and sent_to_email are stamped
       and the change is recorded in the invoice history
    4. Notification is best effort and never fails the operation
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        history_repo: InvoiceHistoryRepository,
        authorizer: AuthorizeAccess,
        notification_service: Optional[NotificationService] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.history_repo = history_repo
        self.authorizer = authorizer
        self.notification_service = notification_service

    async def execute(
        self, principal: Principal, invoice_id: str, command: SendInvoiceCommandDTO
    ) -> Result[InvoiceResponseDTO]:
        try:
            loaded = await load_authorized_invoice(
                self.invoice_repo, self.authorizer, principal, invoice_id, write=True
            )
            if loaded.is_err():
                return Return.err(loaded.error)
            invoice = loaded.value

            if invoice.status not in SENDABLE_STATUSES:
                return Return.err(
                    errors.validation_error(
                        f"Cannot send an invoice with status {invoice.status.value}"
                    )
                )

            recipient = command.email or invoice.client_email
            if not recipient:
                return Return.err(errors.validation_error("Recipient email is required"))

            previous_status = invoice.status
            now = datetime.utcnow()
            invoice.status = InvoiceStatus.SENT
            invoice.sent_at = now
            invoice.sent_to_email = recipient
            invoice.updated_by = principal.user_id
            invoice.updated_at = now

            updated_invoice = await self.invoice_repo.update(invoice)
            await record_history(
                self.history_repo,
                updated_invoice,
                previous_status,
                principal.user_id,
                f"Invoice sent to {recipient}",
            )
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to send invoice", e))

        await self._notify(updated_invoice)
        return Return.ok(to_invoice_dto(updated_invoice))

    async def _notify(self, invoice) -> None:
        if not self.notification_service:
            return
        try:
            await self.notification_service.send_invoice_event(invoice, InvoiceEvent.SENT)
        except Exception as e:
            logger.error(f"Failed to send notification for invoice {invoice.id}: {e}")
