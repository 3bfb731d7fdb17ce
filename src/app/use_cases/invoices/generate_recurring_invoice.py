"""GenerateRecurringInvoice Use Case

Issues the next invoice of a recurring series.
"""

from datetime import date, datetime
from typing import Optional
from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.invoice_history_repository import InvoiceHistoryRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal, ResourceAccess
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLineItem
from src.domain.invoice_rules import add_period, calculate_totals
from .common import record_history, to_invoice_dto
from .dtos import InvoiceResponseDTO
from .numbering import InvoiceNumberGenerator


class GenerateRecurringInvoice:
    """
    Use Case: Generate the next invoice of a recurring parent

    Business Rules:
    1. Parent must be recurring with a frequency
    2. Series must not have ended (today > recurring_end_date)
    3. next_invoice_date must be set and reached (day granularity)
    4. Child is a draft dated at the parent's next_invoice_date, cloning
       client info, line items, tax rate, notes and terms
    5. Child keeps the parent's issue-to-due offset in days
    6. Child number reuses the parent's prefix
    7. Parent's next_invoice_date advances by one period
    8. Child carries parent_invoice_id and is not itself recurring
    9. Child gets a creation history entry

    ``today`` is injectable; the worker passes its run date, the API uses
    the current date.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        history_repo: InvoiceHistoryRepository,
        number_generator: InvoiceNumberGenerator,
        authorizer: Optional[AuthorizeAccess] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.history_repo = history_repo
        self.number_generator = number_generator
        self.authorizer = authorizer

    async def execute(
        self,
        parent_invoice_id: str,
        today: Optional[date] = None,
        principal: Optional[Principal] = None,
    ) -> Result[InvoiceResponseDTO]:
        """
        Execute recurring invoice generation

        Args:
            parent_invoice_id: Recurring parent invoice
            today: Reference date (defaults to date.today())
            principal: Caller; None when run by the worker

        Returns:
            Result[InvoiceResponseDTO]: The new child invoice or error
        """
        today = today or date.today()
        try:
            # Step 1: Load parent
            parent = await self.invoice_repo.get_by_id(parent_invoice_id)
            if not parent:
                return Return.err(errors.not_found("Parent invoice"))

            if principal is not None and self.authorizer is not None:
                access = await self.authorizer.execute(
                    principal, ResourceAccess(parent.descriptor(), write=True)
                )
                if access.is_err():
                    return Return.err(access.error)

            # Step 2: Series checks
            reason = self._check_due(parent, today)
            if reason:
                return Return.err(errors.validation_error(reason))

            # Step 3: Dates
            issue_date = parent.next_invoice_date
            due_date = None
            if parent.due_date:
                due_date = issue_date + (parent.due_date - parent.issue_date)

            # Step 4: Clone line items and recompute totals
            parent_lines = await self.invoice_line_repo.get_by_invoice_id(parent.id)
            totals = calculate_totals(parent_lines, parent.tax_rate)

            invoice_number = await self.number_generator.generate(parent.number_prefix)

            child = Invoice(
                organization_id=parent.organization_id,
                project_id=parent.project_id,
                company_id=parent.company_id,
                opportunity_id=parent.opportunity_id,
                invoice_number=invoice_number,
                status=InvoiceStatus.DRAFT,
                client_name=parent.client_name,
                client_email=parent.client_email,
                client_address=parent.client_address,
                issue_date=issue_date,
                due_date=due_date,
                subtotal=totals.subtotal,
                tax_rate=parent.tax_rate,
                tax_amount=totals.tax_amount,
                total_amount=totals.total,
                currency=parent.currency,
                notes=parent.notes,
                terms=parent.terms,
                parent_invoice_id=parent.id,
                created_by=parent.created_by,
                updated_by=principal.user_id if principal else parent.created_by,
            )
            created_child = await self.invoice_repo.create(child)

            child_lines = await self.invoice_line_repo.create_many(
                [
                    InvoiceLineItem(
                        invoice_id=created_child.id,
                        description=line.description,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                        amount=line.amount,
                        display_order=line.display_order,
                    )
                    for line in parent_lines
                ]
            )
            history = await record_history(
                self.history_repo,
                created_child,
                None,
                principal.user_id if principal else None,
                f"Generated from recurring invoice {parent.invoice_number}",
            )

            # Step 5: Advance the parent
            parent.next_invoice_date = add_period(issue_date, parent.recurring_frequency)
            parent.updated_at = datetime.utcnow()
            await self.invoice_repo.update(parent)

            # Step 6: Commit transaction
            await self.uow.commit()

            return Return.ok(to_invoice_dto(created_child, child_lines, history=[history]))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to generate recurring invoice", e))

    @staticmethod
    def _check_due(parent: Invoice, today: date) -> Optional[str]:
        if not parent.is_recurring or not parent.recurring_frequency:
            return "Parent invoice is not a recurring invoice"
        if parent.recurring_end_date and today > parent.recurring_end_date:
            return "Recurring invoice series has ended"
        if not parent.next_invoice_date:
            return "Next invoice date is not set"
        if parent.next_invoice_date > today:
            return "Next invoice date has not been reached"
        return None
