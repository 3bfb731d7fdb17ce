"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs. Commands only
check shapes; business validation happens in the use cases so that the
caller sees the invoice rule that failed.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from src.domain.invoice import InvoiceStatus, RecurringFrequency


class LineItemInputDTO(BaseModel):
    """
    One line item as submitted by the caller

    amount defaults to quantity * unit_price when omitted.
    """

    description: str = ""
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = Decimal("0")
    amount: Optional[Decimal] = None


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice

    Used as input to CreateInvoice use case.
    """

    client_name: str = Field(default="", description="Billed client")
    client_email: Optional[str] = None
    client_address: Optional[Dict[str, Any]] = None

    line_items: List[LineItemInputDTO] = Field(default_factory=list)

    issue_date: date
    due_date: Optional[date] = None
    tax_rate: Decimal = Field(default=Decimal("0"), description="Percentage in [0, 100]")
    currency: str = "USD"

    notes: Optional[str] = None
    terms: Optional[str] = None

    project_id: Optional[str] = None
    company_id: Optional[str] = None
    opportunity_id: Optional[str] = None

    is_recurring: bool = False
    recurring_frequency: Optional[RecurringFrequency] = None
    recurring_end_date: Optional[date] = None

    prefix: Optional[str] = Field(
        default=None,
        description="Invoice number prefix (defaults to the organization's prefix)"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "client_name": "Acme Corp",
                "client_email": "billing@acme.test",
                "issue_date": "2024-01-01",
                "due_date": "2024-01-15",
                "tax_rate": "8",
                "line_items": [
                    {"description": "Consulting", "quantity": "1", "unit_price": "100.00"},
                    {"description": "Support", "quantity": "1", "unit_price": "25.00"},
                ],
            }
        }
    )


class UpdateInvoiceCommandDTO(BaseModel):
    """
    Partial update of a draft invoice

    Only fields explicitly present in the payload are applied
    (``model_fields_set``); an explicit null clears an optional field.
    """

    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_address: Optional[Dict[str, Any]] = None
    line_items: Optional[List[LineItemInputDTO]] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    tax_rate: Optional[Decimal] = None
    notes: Optional[str] = None
    terms: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurring_frequency: Optional[RecurringFrequency] = None
    recurring_end_date: Optional[date] = None


class ListInvoicesQueryDTO(BaseModel):
    status: Optional[InvoiceStatus] = None
    project_id: Optional[str] = None
    company_id: Optional[str] = None
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class SendInvoiceCommandDTO(BaseModel):
    email: Optional[str] = Field(
        default=None,
        description="Recipient (defaults to the invoice's client_email)"
    )


class RecordPaymentCommandDTO(BaseModel):
    """
    Command DTO for recording a payment against an invoice
    """

    amount: Decimal = Field(..., description="Amount received (must be > 0)")
    payment_date: Optional[date] = Field(default=None, description="Defaults to today")
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class InvoiceLineDTO(BaseModel):
    """Invoice line item for display"""

    id: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    amount: Decimal
    display_order: int

    model_config = ConfigDict(from_attributes=True)


class InvoicePaymentDTO(BaseModel):
    id: str
    amount: Decimal
    payment_date: date
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InvoiceHistoryDTO(BaseModel):
    id: str
    from_status: Optional[InvoiceStatus] = None
    to_status: InvoiceStatus
    changed_by: Optional[str] = None
    changed_at: datetime
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    line_items, payments and history are populated on single-invoice reads;
    history is newest first.
    """

    id: str
    organization_id: str
    invoice_number: str
    status: InvoiceStatus
    client_name: str
    client_email: Optional[str] = None
    client_address: Optional[Dict[str, Any]] = None
    issue_date: date
    due_date: Optional[date] = None
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    currency: str
    notes: Optional[str] = None
    terms: Optional[str] = None
    project_id: Optional[str] = None
    company_id: Optional[str] = None
    opportunity_id: Optional[str] = None
    is_recurring: bool
    recurring_frequency: Optional[RecurringFrequency] = None
    recurring_end_date: Optional[date] = None
    next_invoice_date: Optional[date] = None
    parent_invoice_id: Optional[str] = None
    sent_at: Optional[datetime] = None
    sent_to_email: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    line_items: List[InvoiceLineDTO] = Field(default_factory=list)
    payments: List[InvoicePaymentDTO] = Field(default_factory=list)
    history: List[InvoiceHistoryDTO] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class InvoiceListResponseDTO(BaseModel):
    invoices: List[InvoiceResponseDTO]
    total: int
    limit: int
    offset: int


class PaymentResultDTO(BaseModel):
    """Invoice after the payment plus the recorded payment"""

    invoice: InvoiceResponseDTO
    payment: InvoicePaymentDTO
    total_paid: Decimal


class RecurringRunResultDTO(BaseModel):
    """Outcome of one recurring-invoice worker pass"""

    run_date: date
    total_due: int
    generated: int
    failed: int
    invoice_ids: List[str] = Field(default_factory=list)


class InvoicePdfDTO(BaseModel):
    invoice_id: str
    invoice_number: str
    content: bytes

    @property
    def filename(self) -> str:
        return f"{self.invoice_number}.pdf"
