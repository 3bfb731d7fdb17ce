"""Invoice API Routes

FastAPI routes for the invoice engine: drafts, numbering, payments,
recurring generation and PDF rendering.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.invoice_history_repository import SqlAlchemyInvoiceHistoryRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_payment_repository import SqlAlchemyInvoicePaymentRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.organization_repository import SqlAlchemyOrganizationRepository
from src.adapter.services.invoice_number_sequence import SqlAlchemyInvoiceNumberSequence
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.dependencies import build_authorizer, get_notification_service, get_principal
from src.api.error import ClientError
from src.api.schemas.invoice_request import (
    CreateInvoiceRequestSchema,
    RecordPaymentRequestSchema,
    SendInvoiceRequestSchema,
    UpdateInvoiceRequestSchema,
)
from src.app.services.notification_service import NotificationService
from src.app.use_cases.invoices import (
    CreateInvoice,
    DeleteInvoice,
    GenerateRecurringInvoice,
    GetInvoice,
    InvoiceNumberGenerator,
    ListInvoices,
    MarkInvoicePaid,
    RenderInvoicePdf,
    SendInvoice,
    UpdateInvoice,
)
from src.app.use_cases.invoices.dtos import (
    CreateInvoiceCommandDTO,
    InvoiceListResponseDTO,
    InvoiceResponseDTO,
    ListInvoicesQueryDTO,
    PaymentResultDTO,
    RecordPaymentCommandDTO,
    SendInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
)
from src.depends import get_session
from src.domain.access import Principal
from src.domain.invoice import InvoiceStatus

router = APIRouter(prefix="/ops/invoices", tags=["Invoices"])

ERROR_EXAMPLE = {
    "application/json": {
        "example": {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Line item quantity must be greater than 0"
            }
        }
    }
}


def build_number_generator(session: AsyncSession, invoice_repo: SqlAlchemyInvoiceRepository) -> InvoiceNumberGenerator:
    return InvoiceNumberGenerator(
        invoice_repo,
        SqlAlchemyInvoiceNumberSequence(session),
        max_attempts=ApplicationConfig.INVOICE_NUMBER_MAX_ATTEMPTS,
        backoff_ms=ApplicationConfig.INVOICE_NUMBER_BACKOFF_MS,
        default_prefix=ApplicationConfig.DEFAULT_INVOICE_PREFIX,
    )


@router.get("", response_model=InvoiceListResponseDTO)
async def list_invoices(
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    project_id: Optional[str] = None,
    company_id: Optional[str] = None,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    """List the caller's organization invoices, newest first"""
    query = ListInvoicesQueryDTO(
        status=status_filter,
        project_id=project_id,
        company_id=company_id,
        limit=limit,
        offset=offset,
    )
    result = await ListInvoices(SqlAlchemyInvoiceRepository(session)).execute(principal, query)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid invoice", "content": ERROR_EXAMPLE},
        401: {"description": "Missing or invalid session"},
    }
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a draft invoice.

    Line amounts default to `quantity * unit_price`. Subtotal, tax and total
    are computed server-side and rounded half-up to 2 places. The invoice
    number (`{PREFIX}-{YEAR}-{SEQUENCE}`) is allocated with collision checks.

    **Returns:**
    - 201: Invoice created
    - 400: Invoice failed validation, or the caller has no organization
    - 401: Missing or invalid session
    """
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    use_case = CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        invoice_repo,
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyInvoiceHistoryRepository(session),
        SqlAlchemyOrganizationRepository(session),
        build_number_generator(session, invoice_repo),
    )
    command = CreateInvoiceCommandDTO(**request.model_dump())
    result = await use_case.execute(principal, command)

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/{invoice_id}", response_model=InvoiceResponseDTO)
async def get_invoice(
    invoice_id: str,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    """Invoice with its line items (display order), payments and history (newest first)"""
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyInvoicePaymentRepository(session),
        SqlAlchemyInvoiceHistoryRepository(session),
        build_authorizer(session),
    )
    result = await use_case.execute(principal, invoice_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={400: {"description": "Invoice is not a draft or failed validation", "content": ERROR_EXAMPLE}},
)
async def update_invoice(
    invoice_id: str,
    request: UpdateInvoiceRequestSchema,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    """
    Patch a draft invoice.

    Only the fields present in the body are applied. Totals are recomputed
    when line items or the tax rate change.
    """
    use_case = UpdateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyInvoiceHistoryRepository(session),
        build_authorizer(session),
    )
    command = UpdateInvoiceCommandDTO(**request.model_dump(exclude_unset=True))
    result = await use_case.execute(principal, invoice_id, command)

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: str,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceHistoryRepository(session),
        build_authorizer(session),
    )
    result = await use_case.execute(principal, invoice_id)
    if result.is_err():
        raise ClientError(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{invoice_id}/send", response_model=InvoiceResponseDTO)
async def send_invoice(
    invoice_id: str,
    request: SendInvoiceRequestSchema,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
    notification_service: NotificationService = Depends(get_notification_service),
):
    """Mark the invoice as sent to `email` (defaults to the client's email)"""
    use_case = SendInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceHistoryRepository(session),
        build_authorizer(session),
        notification_service,
    )
    result = await use_case.execute(principal, invoice_id, SendInvoiceCommandDTO(email=request.email))
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "/{invoice_id}/payments",
    response_model=PaymentResultDTO,
    status_code=status.HTTP_201_CREATED,
)
async def record_payment(
    invoice_id: str,
    request: RecordPaymentRequestSchema,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
    notification_service: NotificationService = Depends(get_notification_service),
):
    """
    Record a payment.

    The invoice switches to `paid` once the sum of all its payments reaches
    the total amount.
    """
    use_case = MarkInvoicePaid(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoicePaymentRepository(session),
        SqlAlchemyInvoiceHistoryRepository(session),
        build_authorizer(session),
        notification_service,
    )
    command = RecordPaymentCommandDTO(**request.model_dump())
    result = await use_case.execute(principal, invoice_id, command)

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "/{invoice_id}/generate-recurring",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def generate_recurring_invoice(
    invoice_id: str,
    run_date: Optional[date] = Query(default=None, description="Defaults to today"),
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    """Generate the next invoice of a recurring series"""
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    use_case = GenerateRecurringInvoice(
        SqlAlchemyUnitOfWork(session),
        invoice_repo,
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyInvoiceHistoryRepository(session),
        build_number_generator(session, invoice_repo),
        authorizer=build_authorizer(session),
    )
    result = await use_case.execute(invoice_id, today=run_date, principal=principal)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: {
            "description": "Invoice not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "NOT_FOUND",
                            "message": "Invoice not found"
                        }
                    }
                }
            }
        }
    }
)
async def download_invoice_pdf(
    invoice_id: str,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    """Download the invoice as a PDF file"""
    use_case = RenderInvoicePdf(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        ReportLabPdfService(),
        build_authorizer(session),
    )
    result = await use_case.execute(principal, invoice_id)
    if result.is_err():
        raise ClientError(result.error)

    return Response(
        content=result.value.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={result.value.filename}"
        }
    )
