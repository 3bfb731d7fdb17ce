"""Organization Domain Entity

The tenant: unit of data isolation.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class Organization(BaseModel, table=True):
    __tablename__ = "organizations"

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    name: str = Field(max_length=255)

    slug: str = Field(
        sa_column=Column(String(100), nullable=False, unique=True)
    )

    invoice_prefix: Optional[str] = Field(
        default=None,
        max_length=20,
        description="Prefix for invoice numbers (None = default prefix)"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
