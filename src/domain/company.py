"""Company, Opportunity and Partner Commission Domain Entities (ops/CRM)"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, Text
from src.domain.base import BaseModel, generate_uuid


class Company(BaseModel, table=True):
    __tablename__ = "companies"
    __table_args__ = (
        Index('ix_companies_organization_id', 'organization_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    organization_id: str
    name: str = Field(max_length=255)
    is_partner: bool = Field(default=False)
    partner_commission_rate: Optional[Decimal] = Field(
        default=None, sa_column=Column(Numeric(5, 2), nullable=True)
    )
    referred_by_company_id: Optional[str] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class OpportunityStatus(str, Enum):
    NEW = "new"
    WORKING = "working"
    NEGOTIATION = "negotiation"
    PENDING = "pending"
    CONVERTED = "converted"
    LOST = "lost"


OPEN_OPPORTUNITY_STATUSES = frozenset({
    OpportunityStatus.NEW,
    OpportunityStatus.WORKING,
    OpportunityStatus.NEGOTIATION,
    OpportunityStatus.PENDING,
})


class Opportunity(BaseModel, table=True):
    __tablename__ = "opportunities"
    __table_args__ = (
        Index('ix_opportunities_organization_id', 'organization_id'),
        Index('ix_opportunities_referred_by', 'referred_by_company_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    organization_id: str
    company_id: Optional[str] = Field(default=None)
    referred_by_company_id: Optional[str] = Field(default=None)
    name: str = Field(max_length=255)
    value: Decimal = Field(default=Decimal("0"), sa_column=Column(Numeric(14, 2), nullable=False, default=0))
    status: OpportunityStatus = Field(default=OpportunityStatus.NEW)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class CommissionStatus(str, Enum):
    """Commission lifecycle"""
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"
    CANCELLED = "cancelled"


# Counted as money still owed to the partner
DUE_COMMISSION_STATUSES = frozenset({CommissionStatus.PENDING, CommissionStatus.APPROVED})


class PartnerCommission(BaseModel, table=True):
    """
    Partner Commission

    Domain Rules:
    - commission_amount = round2(base_amount * commission_rate / 100)
    - Created as pending
    """

    __tablename__ = "partner_commissions"
    __table_args__ = (
        Index('ix_partner_commissions_partner', 'organization_id', 'partner_company_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    organization_id: str
    partner_company_id: str
    opportunity_id: Optional[str] = Field(default=None)
    invoice_id: Optional[str] = Field(default=None)
    commission_rate: Decimal = Field(sa_column=Column(Numeric(5, 2), nullable=False))
    base_amount: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))
    commission_amount: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))
    status: CommissionStatus = Field(default=CommissionStatus.PENDING)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    paid_at: Optional[datetime] = Field(default=None)
