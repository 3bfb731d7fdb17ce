"""Invoice Payment Domain Entity

Append-only record of money received against an invoice.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid


class InvoicePayment(BaseModel, table=True):
    __tablename__ = "invoice_payments"
    __table_args__ = (
        Index('ix_invoice_payments_invoice_id', 'invoice_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False)
    )

    amount: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))
    payment_date: date = Field(sa_column=Column(Date, nullable=False))
    payment_method: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_by: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
