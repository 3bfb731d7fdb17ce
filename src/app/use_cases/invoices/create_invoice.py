"""CreateInvoice Use Case

Creates a draft invoice with its line items.
"""

from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.invoice_history_repository import InvoiceHistoryRepository
from src.app.repositories.organization_repository import OrganizationRepository
from src.domain.access import Principal
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_rules import add_period, calculate_totals, validate_invoice
from .common import build_line_items, record_history, resolve_line_inputs, to_invoice_dto
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO
from .numbering import InvoiceNumberGenerator


class CreateInvoice:
    """
    Use Case: Create draft invoice

    Business Rules:
    1. Caller must belong to an organization; the invoice belongs to it
    2. Invoice data is validated before anything is written
    3. Totals are computed, never taken from the caller
    4. Invoice number is unique ({PREFIX}-{YEAR}-{SEQUENCE})
    5. Recurring invoices get next_invoice_date = issue_date + one period
    6. Header, line items and the creation history entry are written in one
       transaction

    Flow:
    1. Check organization
    2. Validate input
    3. Calculate totals
    4. Generate invoice number
    5. Create header, then line items in input order, then history
    6. Commit transaction
    7. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        history_repo: InvoiceHistoryRepository,
        organization_repo: OrganizationRepository,
        number_generator: InvoiceNumberGenerator,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.history_repo = history_repo
        self.organization_repo = organization_repo
        self.number_generator = number_generator

    async def execute(
        self, principal: Principal, command: CreateInvoiceCommandDTO
    ) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            principal: Resolved caller
            command: CreateInvoiceCommandDTO with client, line items and dates

        Returns:
            Result[InvoiceResponseDTO]: Created invoice with line items or error
        """
        # Step 1: Invoices always belong to the caller's organization
        if not principal.organization_id:
            return Return.err(errors.bad_request(errors.NO_ORGANIZATION_MESSAGE))

        # Step 2: Validate
        line_inputs = resolve_line_inputs(command.line_items)
        reason = validate_invoice(command.client_name, line_inputs, command.tax_rate)
        if reason:
            return Return.err(errors.validation_error(reason))

        if command.is_recurring and not command.recurring_frequency:
            return Return.err(
                errors.validation_error("Recurring frequency is required for recurring invoices")
            )

        try:
            # Step 3: Totals
            totals = calculate_totals(line_inputs, command.tax_rate)

            # Step 4: Number
            prefix = command.prefix
            if not prefix:
                organization = await self.organization_repo.get_by_id(principal.organization_id)
                prefix = organization.invoice_prefix if organization else None
            invoice_number = await self.number_generator.generate(prefix)

            next_invoice_date = None
            if command.is_recurring:
                next_invoice_date = add_period(command.issue_date, command.recurring_frequency)

            # Step 5: Header, then line items
            invoice = Invoice(
                organization_id=principal.organization_id,
                project_id=command.project_id,
                company_id=command.company_id,
                opportunity_id=command.opportunity_id,
                invoice_number=invoice_number,
                status=InvoiceStatus.DRAFT,
                client_name=command.client_name.strip(),
                client_email=command.client_email,
                client_address=command.client_address,
                issue_date=command.issue_date,
                due_date=command.due_date,
                subtotal=totals.subtotal,
                tax_rate=command.tax_rate,
                tax_amount=totals.tax_amount,
                total_amount=totals.total,
                currency=command.currency,
                notes=command.notes,
                terms=command.terms,
                is_recurring=command.is_recurring,
                recurring_frequency=command.recurring_frequency if command.is_recurring else None,
                recurring_end_date=command.recurring_end_date if command.is_recurring else None,
                next_invoice_date=next_invoice_date,
                created_by=principal.user_id,
                updated_by=principal.user_id,
            )
            created_invoice = await self.invoice_repo.create(invoice)

            line_items = await self.invoice_line_repo.create_many(
                build_line_items(created_invoice.id, line_inputs)
            )
            history = await record_history(
                self.history_repo, created_invoice, None, principal.user_id, "Invoice created"
            )

            # Step 6: Commit transaction
            await self.uow.commit()

            # Step 7: Build response
            return Return.ok(to_invoice_dto(created_invoice, line_items, history=[history]))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to create invoice", e))
