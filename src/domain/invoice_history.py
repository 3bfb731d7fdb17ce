"""Invoice History Domain Entity

Audit trail of changes made to an invoice.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, String, Text
from src.domain.base import BaseModel, generate_uuid
from src.domain.invoice import InvoiceStatus


class InvoiceHistory(BaseModel, table=True):
    """
    InvoiceHistory - One audited change of an invoice

    Domain Rules:
    - Append-only; written in the same transaction as the change it records
    - from_status is None for the creation entry
    - from_status == to_status for edits that keep the status
    """

    __tablename__ = "invoice_history"
    __table_args__ = (
        Index('ix_invoice_history_invoice_id', 'invoice_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False)
    )

    from_status: Optional[InvoiceStatus] = Field(default=None)
    to_status: InvoiceStatus
    changed_by: Optional[str] = Field(default=None)
    changed_at: datetime = Field(default_factory=datetime.utcnow)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
