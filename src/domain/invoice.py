"""Invoice Domain Entity

Billing document belonging to one organization.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, Date, Numeric, String, Text
from src.domain.access import ResourceDescriptor
from src.domain.base import BaseModel, generate_uuid

INVOICE_RESOURCE = "invoice"


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class RecurringFrequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class Invoice(BaseModel, table=True):
    """
    Invoice - Billing document for a client of an organization

    Domain Rules:
    - invoice_number is unique (storage constraint; numbering retries on
      collision before insert)
    - Status transitions: draft -> sent -> paid, draft/sent -> cancelled,
      sent -> overdue (external time-based process)
    - subtotal = sum(line.amount), tax_amount = round2(subtotal * tax_rate / 100),
      total_amount = subtotal + tax_amount
    - Only draft invoices are editable
    - Recurring children carry parent_invoice_id
    - deleted_at marks a soft delete
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_organization_id', 'organization_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_next_invoice_date', 'next_invoice_date'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    organization_id: str = Field(description="Owning organization")

    project_id: Optional[str] = Field(default=None)
    company_id: Optional[str] = Field(default=None)
    opportunity_id: Optional[str] = Field(default=None)

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique invoice number (e.g., INV-2024-000001)"
    )

    status: InvoiceStatus = Field(default=InvoiceStatus.DRAFT)

    client_name: str = Field(max_length=255)
    client_email: Optional[str] = Field(default=None, max_length=255)
    client_address: Optional[Dict[str, Any]] = Field(
        default=None, sa_column=Column(JSON, nullable=True)
    )

    issue_date: date = Field(sa_column=Column(Date, nullable=False))
    due_date: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))

    subtotal: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))
    tax_rate: Decimal = Field(sa_column=Column(Numeric(5, 2), nullable=False, default=0))
    tax_amount: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))
    total_amount: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))

    currency: str = Field(
        default="USD",
        sa_column=Column(String(3), nullable=False, default="USD"),
    )

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    terms: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    is_recurring: bool = Field(default=False)
    recurring_frequency: Optional[RecurringFrequency] = Field(default=None)
    recurring_end_date: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))
    next_invoice_date: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))
    parent_invoice_id: Optional[str] = Field(default=None, index=True)

    sent_at: Optional[datetime] = Field(default=None)
    sent_to_email: Optional[str] = Field(default=None, max_length=255)

    created_by: Optional[str] = Field(default=None)
    updated_by: Optional[str] = Field(default=None)

    deleted_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def number_prefix(self) -> str:
        return self.invoice_number.rsplit("-", 2)[0]

    def descriptor(self) -> ResourceDescriptor:
        return ResourceDescriptor(
            resource_type=INVOICE_RESOURCE,
            resource_id=self.id,
            organization_id=self.organization_id,
            owner_id=self.created_by,
        )
