"""Invoice Line Item Domain Entity"""

from datetime import datetime
from decimal import Decimal
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel, generate_uuid


class InvoiceLineItem(BaseModel, table=True):
    """
    Invoice Line Item

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - display_order is 0-based and preserves input order
    - Replaced wholesale when a draft's line items are edited
    """

    __tablename__ = "invoice_line_items"
    __table_args__ = (
        Index('ix_invoice_line_items_invoice_id', 'invoice_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False)
    )

    description: str = Field(sa_column=Column(String(500), nullable=False))
    quantity: Decimal = Field(sa_column=Column(Numeric(14, 4), nullable=False))
    unit_price: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))
    amount: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))
    display_order: int = Field(sa_column=Column(Integer, nullable=False, default=0))

    created_at: datetime = Field(default_factory=datetime.utcnow)
