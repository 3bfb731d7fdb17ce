"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests. Shape checks live
here; invoice rules (quantities, tax range, draft-only edits) are enforced
by the use cases so the caller sees which rule failed.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from src.domain.invoice import RecurringFrequency


class LineItemRequestSchema(BaseModel):
    description: str = Field(default="", max_length=1000)
    quantity: Decimal = Field(default=Decimal("1"), description="Must be > 0")
    unit_price: Decimal = Field(default=Decimal("0"), description="Must be >= 0")
    amount: Optional[Decimal] = Field(
        default=None,
        description="Defaults to quantity * unit_price"
    )


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /ops/invoices endpoint.
    """

    client_name: str = Field(default="", max_length=255)
    client_email: Optional[str] = Field(default=None, max_length=255)
    client_address: Optional[Dict[str, Any]] = None
    line_items: List[LineItemRequestSchema] = Field(default_factory=list)
    issue_date: date
    due_date: Optional[date] = None
    tax_rate: Decimal = Field(default=Decimal("0"))
    currency: str = Field(default="USD", min_length=3, max_length=3)
    notes: Optional[str] = None
    terms: Optional[str] = None
    project_id: Optional[str] = None
    company_id: Optional[str] = None
    opportunity_id: Optional[str] = None
    is_recurring: bool = False
    recurring_frequency: Optional[RecurringFrequency] = None
    recurring_end_date: Optional[date] = None
    prefix: Optional[str] = Field(default=None, min_length=1, max_length=20)

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v):
        """ISO 4217 codes are stored upper-case"""
        if not v.isalpha():
            raise ValueError("Currency must be a 3-letter code")
        return v.upper()

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
                "is_recurring": True,
                "recurring_frequency": "monthly",
            }
        }
    )


class UpdateInvoiceRequestSchema(BaseModel):
    """
    Request schema for patching a draft invoice

    Used for PUT /ops/invoices/{invoice_id}. Omitted fields are left
    untouched; an explicit null clears an optional field.
    """

    client_name: Optional[str] = Field(default=None, max_length=255)
    client_email: Optional[str] = Field(default=None, max_length=255)
    client_address: Optional[Dict[str, Any]] = None
    line_items: Optional[List[LineItemRequestSchema]] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    tax_rate: Optional[Decimal] = None
    notes: Optional[str] = None
    terms: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurring_frequency: Optional[RecurringFrequency] = None
    recurring_end_date: Optional[date] = None

    model_config = ConfigDict(extra="forbid")


class SendInvoiceRequestSchema(BaseModel):
    email: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Recipient (defaults to the invoice's client_email)"
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if v is not None and "@" not in v:
            raise ValueError("Invalid email address")
        return v


class RecordPaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /ops/invoices/{invoice_id}/payments endpoint.
    """

    amount: Decimal = Field(..., description="Amount received (must be > 0)")
    payment_date: Optional[date] = None
    payment_method: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "amount": "120.00",
                "payment_date": "2024-01-20",
                "payment_method": "bank_transfer",
            }
        }
    )
