"""Helpers shared by the invoice use cases"""

from typing import Iterable, List, Optional
from libs.result import Result, Return
from src.app import errors
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_history_repository import InvoiceHistoryRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal, ResourceAccess
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_history import InvoiceHistory
from src.domain.invoice_line import InvoiceLineItem
from src.domain.invoice_payment import InvoicePayment
from src.domain.invoice_rules import line_amount, round2
from .dtos import (
    InvoiceHistoryDTO,
    InvoiceLineDTO,
    InvoicePaymentDTO,
    InvoiceResponseDTO,
    LineItemInputDTO,
)


def resolve_line_inputs(items: Optional[Iterable[LineItemInputDTO]]) -> List[LineItemInputDTO]:
    """Fill in missing amounts as quantity * unit_price"""
    resolved = []
    for item in items or []:
        amount = item.amount if item.amount is not None else line_amount(item.quantity, item.unit_price)
        resolved.append(item.model_copy(update={"amount": round2(amount)}))
    return resolved


def build_line_items(invoice_id: str, items: Iterable[LineItemInputDTO]) -> List[InvoiceLineItem]:
    return [
        InvoiceLineItem(
            invoice_id=invoice_id,
            description=item.description.strip(),
            quantity=item.quantity,
            unit_price=item.unit_price,
            amount=item.amount,
            display_order=index,
        )
        for index, item in enumerate(items)
    ]


def to_invoice_dto(
    invoice: Invoice,
    line_items: Iterable[InvoiceLineItem] = (),
    payments: Iterable[InvoicePayment] = (),
    history: Iterable[InvoiceHistory] = (),
) -> InvoiceResponseDTO:
    return InvoiceResponseDTO.model_validate(invoice).model_copy(
        update={
            "line_items": [InvoiceLineDTO.model_validate(line) for line in line_items],
            "payments": [InvoicePaymentDTO.model_validate(p) for p in payments],
            "history": [InvoiceHistoryDTO.model_validate(entry) for entry in history],
        }
    )


async def load_authorized_invoice(
    invoice_repo: InvoiceRepository,
    authorizer: AuthorizeAccess,
    principal: Principal,
    invoice_id: str,
    write: bool = False,
) -> Result[Invoice]:
    """
    Fetch a non-deleted invoice and check the caller may access it

    Returns:
        Result[Invoice]: NOT_FOUND when absent, the access decision's error
        when denied
    """
    invoice = await invoice_repo.get_by_id(invoice_id)
    if not invoice:
        return Return.err(errors.not_found("Invoice", f"Invoice {invoice_id} does not exist"))

    access = await authorizer.execute(principal, ResourceAccess(invoice.descriptor(), write=write))
    if access.is_err():
        return Return.err(access.error)

    return Return.ok(invoice)


async def record_history(
    history_repo: InvoiceHistoryRepository,
    invoice: Invoice,
    from_status: Optional[InvoiceStatus],
    changed_by: Optional[str],
    notes: Optional[str] = None,
) -> InvoiceHistory:
    """Append a history entry for the invoice's current status"""
    return await history_repo.create(
        InvoiceHistory(
            invoice_id=invoice.id,
            from_status=from_status,
            to_status=invoice.status,
            changed_by=changed_by,
            notes=notes,
        )
    )
