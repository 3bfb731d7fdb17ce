"""UpdateInvoice Use Case

Applies a partial update to a draft invoice.
"""

from datetime import datetime
from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.invoice_history_repository import InvoiceHistoryRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_rules import add_period, calculate_totals, validate_invoice
from .common import (
    build_line_items,
    load_authorized_invoice,
    record_history,
    resolve_line_inputs,
    to_invoice_dto,
)
from .dtos import InvoiceResponseDTO, UpdateInvoiceCommandDTO

# Fields copied as-is when present in the patch
_PLAIN_FIELDS = (
    "client_email",
    "client_address",
    "due_date",
    "notes",
    "terms",
    "recurring_end_date",
)

# Present in the patch but null means "leave unchanged"
_REQUIRED_FIELDS = ("issue_date",)


class UpdateInvoice:
    """
    Use Case: Edit a draft invoice

    Business Rules:
    1. Invoice must exist and be writable by the caller
    2. Only draft invoices can be edited
    3. Validation uses the patched values merged over the stored ones
    4. Line items are replaced wholesale when present in the patch
    5. A tax-rate-only patch recomputes totals from the stored line items
    6. next_invoice_date is recomputed when recurrence settings change
    7. Every edit is recorded in the invoice history

    Flow:
    1. Load and authorize
    2. Check status
    3. Validate merged values
    4. Apply fields and totals
    5. Replace line items
    6. Commit transaction
    7. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        history_repo: InvoiceHistoryRepository,
        authorizer: AuthorizeAccess,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.history_repo = history_repo
        self.authorizer = authorizer

    async def execute(
        self, principal: Principal, invoice_id: str, command: UpdateInvoiceCommandDTO
    ) -> Result[InvoiceResponseDTO]:
        try:
            # Step 1: Load and authorize
            loaded = await load_authorized_invoice(
                self.invoice_repo, self.authorizer, principal, invoice_id, write=True
            )
            if loaded.is_err():
                return Return.err(loaded.error)
            invoice = loaded.value

            # Step 2: Only drafts are mutable
            if invoice.status != InvoiceStatus.DRAFT:
                return Return.err(errors.validation_error("Only draft invoices can be edited"))

            fields = command.model_fields_set
            replace_lines = "line_items" in fields and command.line_items is not None
            tax_rate = command.tax_rate if command.tax_rate is not None else invoice.tax_rate
            client_name = invoice.client_name
            if "client_name" in fields:
                client_name = command.client_name or ""

            # Step 3: Validate merged values
            if replace_lines:
                line_items = resolve_line_inputs(command.line_items)
            else:
                line_items = await self.invoice_line_repo.get_by_invoice_id(invoice.id)

            if fields & {"client_name", "line_items", "tax_rate"}:
                reason = validate_invoice(client_name, line_items, tax_rate)
                if reason:
                    return Return.err(errors.validation_error(reason))

            is_recurring = invoice.is_recurring
            if "is_recurring" in fields and command.is_recurring is not None:
                is_recurring = command.is_recurring
            frequency = invoice.recurring_frequency
            if "recurring_frequency" in fields:
                frequency = command.recurring_frequency
            if is_recurring and not frequency:
                return Return.err(
                    errors.validation_error("Recurring frequency is required for recurring invoices")
                )

            # Step 4: Apply fields and totals
            invoice.client_name = client_name.strip()
            for name in _PLAIN_FIELDS:
                if name in fields:
                    setattr(invoice, name, getattr(command, name))
            for name in _REQUIRED_FIELDS:
                if name in fields and getattr(command, name) is not None:
                    setattr(invoice, name, getattr(command, name))

            if replace_lines or "tax_rate" in fields:
                totals = calculate_totals(line_items, tax_rate)
                invoice.tax_rate = tax_rate
                invoice.subtotal = totals.subtotal
                invoice.tax_amount = totals.tax_amount
                invoice.total_amount = totals.total

            if fields & {"is_recurring", "recurring_frequency", "issue_date"}:
                invoice.is_recurring = is_recurring
                invoice.recurring_frequency = frequency if is_recurring else None
                invoice.next_invoice_date = (
                    add_period(invoice.issue_date, frequency) if is_recurring else None
                )
                if not is_recurring:
                    invoice.recurring_end_date = None

            invoice.updated_by = principal.user_id
            invoice.updated_at = datetime.utcnow()

            # Step 5: Replace line items
            if replace_lines:
                await self.invoice_line_repo.delete_by_invoice_id(invoice.id)
                line_items = await self.invoice_line_repo.create_many(
                    build_line_items(invoice.id, line_items)
                )

            updated_invoice = await self.invoice_repo.update(invoice)
            await record_history(
                self.history_repo, updated_invoice, InvoiceStatus.DRAFT, principal.user_id, "Invoice updated"
            )

            # Step 6: Commit transaction
            await self.uow.commit()

            # Step 7: Build response
            return Return.ok(to_invoice_dto(updated_invoice, line_items))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to update invoice", e))
