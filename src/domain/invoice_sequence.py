"""Invoice Sequence Domain Entity

Per-prefix, per-year counter backing invoice number generation.
"""

from sqlmodel import Field, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid


class InvoiceSequence(BaseModel, table=True):
    __tablename__ = "invoice_sequences"
    __table_args__ = (
        UniqueConstraint('prefix', 'year', name='uq_invoice_sequence_prefix_year'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    prefix: str = Field(max_length=20)
    year: int
    last_value: int = Field(default=0)
