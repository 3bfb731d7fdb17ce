"""MarkInvoicePaid Use Case

Records a payment and settles the invoice once fully paid.
"""

import logging
from datetime import date, datetime
from typing import Optional
from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.notification_service import InvoiceEvent, NotificationService
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_payment_repository import InvoicePaymentRepository
from src.app.repositories.invoice_history_repository import InvoiceHistoryRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_payment import InvoicePayment
from src.domain.invoice_rules import round2
from .common import load_authorized_invoice, record_history, to_invoice_dto
from .dtos import InvoicePaymentDTO, PaymentResultDTO, RecordPaymentCommandDTO

logger = logging.getLogger(__name__)


class MarkInvoicePaid:
    """
    Use Case: Record a payment against an invoice

    Business Rules:
    1. Payment amount must be > 0
    2. Cancelled invoices accept no payments
    3. Payments are append-only; partial payments are allowed
    4. Invoice becomes paid when the sum of all payments >= total_amount
    5. Every payment is recorded in the invoice history

    Flow:
    1. Load and authorize
    2. Validate payment
    3. Insert payment
    4. Sum all payments, switch status when settled, record history
    5. Commit transaction
    6. Notify (best effort) and return
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: InvoicePaymentRepository,
        history_repo: InvoiceHistoryRepository,
        authorizer: AuthorizeAccess,
        notification_service: Optional[NotificationService] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.history_repo = history_repo
        self.authorizer = authorizer
        self.notification_service = notification_service

    async def execute(
        self, principal: Principal, invoice_id: str, command: RecordPaymentCommandDTO
    ) -> Result[PaymentResultDTO]:
        became_paid = False
        try:
            # Step 1: Load and authorize
            loaded = await load_authorized_invoice(
                self.invoice_repo, self.authorizer, principal, invoice_id, write=True
            )
            if loaded.is_err():
                return Return.err(loaded.error)
            invoice = loaded.value

            # Step 2: Validate payment
            if command.amount is None or command.amount <= 0:
                return Return.err(errors.validation_error("Payment amount must be greater than 0"))

            if invoice.status == InvoiceStatus.CANCELLED:
                return Return.err(
                    errors.validation_error("Cannot record a payment on a cancelled invoice")
                )

            # Step 3: Insert payment
            payment = await self.payment_repo.create(
                InvoicePayment(
                    invoice_id=invoice.id,
                    amount=round2(command.amount),
                    payment_date=command.payment_date or date.today(),
                    payment_method=command.payment_method,
                    notes=command.notes,
                    created_by=principal.user_id,
                )
            )

            # Step 4: Settle when fully paid
            previous_status = invoice.status
            total_paid = await self.payment_repo.total_paid(invoice.id)
            if total_paid >= invoice.total_amount and invoice.status != InvoiceStatus.PAID:
                invoice.status = InvoiceStatus.PAID
                invoice.updated_by = principal.user_id
                invoice.updated_at = datetime.utcnow()
                invoice = await self.invoice_repo.update(invoice)
                became_paid = True

            await record_history(
                self.history_repo,
                invoice,
                previous_status,
                principal.user_id,
                f"Payment of {payment.amount} recorded",
            )

            # Step 5: Commit transaction
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to record payment", e))

        # Step 6: Notify and build response
        if became_paid:
            await self._notify(invoice)

        return Return.ok(
            PaymentResultDTO(
                invoice=to_invoice_dto(invoice),
                payment=InvoicePaymentDTO.model_validate(payment),
                total_paid=total_paid,
            )
        )

    async def _notify(self, invoice) -> None:
        if not self.notification_service:
            return
        try:
            await self.notification_service.send_invoice_event(invoice, InvoiceEvent.PAID)
        except Exception as e:
            logger.error(f"Failed to send notification for invoice {invoice.id}: {e}")
