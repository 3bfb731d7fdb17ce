"""User Domain Entity

Application-level user record. Distinct from the auth provider identity,
which is linked through ``auth_id``.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, generate_uuid


class UserRole(str, Enum):
    """Roles controlling default capability inside an organization"""
    ADMIN = "admin"
    PM = "pm"
    ENGINEER = "engineer"
    MEMBER = "member"


class User(BaseModel, table=True):
    """
    User - member of at most one organization

    Domain Rules:
    - auth_id is unique (one application user per auth identity)
    - organization_id is None until the user is onboarded
    - is_super_admin only takes effect together with role=admin
    """

    __tablename__ = "users"
    __table_args__ = (
        Index('ix_users_organization_id', 'organization_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    auth_id: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True),
        description="External auth provider identity"
    )

    organization_id: Optional[str] = Field(
        default=None,
        description="Tenant the user belongs to"
    )

    email: Optional[str] = Field(default=None, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)

    role: UserRole = Field(default=UserRole.MEMBER)
    is_super_admin: bool = Field(default=False)
    is_active: bool = Field(default=True)

    max_hours_per_week: Decimal = Field(
        default=Decimal("40"),
        sa_column=Column(Numeric(6, 2), nullable=False, default=40),
        description="Weekly capacity used for workload utilization"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
