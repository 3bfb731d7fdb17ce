"""Project and Member Allocation Domain Entities"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, Numeric
from src.domain.access import ResourceDescriptor
from src.domain.base import BaseModel, generate_uuid

PROJECT_RESOURCE = "project"


class Project(BaseModel, table=True):
    __tablename__ = "projects"
    __table_args__ = (
        Index('ix_projects_organization_id', 'organization_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    organization_id: str
    owner_id: Optional[str] = Field(default=None)
    template_id: Optional[str] = Field(default=None, index=True)
    name: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def descriptor(self) -> ResourceDescriptor:
        return ResourceDescriptor(
            resource_type=PROJECT_RESOURCE,
            resource_id=self.id,
            organization_id=self.organization_id,
            owner_id=self.owner_id,
        )


class MemberAllocation(BaseModel, table=True):
    """
    Member Allocation - weekly hours a user is booked on a project

    Domain Rules:
    - allocated_hours_per_week >= 0
    - end_date None means open-ended
    """

    __tablename__ = "member_allocations"
    __table_args__ = (
        Index('ix_member_allocations_project_id', 'project_id'),
        Index('ix_member_allocations_user_id', 'user_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    project_id: str
    user_id: str

    allocated_hours_per_week: Decimal = Field(
        sa_column=Column(Numeric(6, 2), nullable=False)
    )

    start_date: date = Field(sa_column=Column(Date, nullable=False))
    end_date: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))

    created_at: datetime = Field(default_factory=datetime.utcnow)
