"""Resource Membership Domain Entity

Explicit membership of a user in a resource (project, workspace, ...).
"""

from datetime import datetime
from sqlmodel import Field, Index, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid


class ResourceMember(BaseModel, table=True):
    __tablename__ = "resource_members"
    __table_args__ = (
        UniqueConstraint('resource_type', 'resource_id', 'user_id', name='uq_resource_member'),
        Index('ix_resource_members_resource', 'resource_type', 'resource_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    resource_type: str = Field(max_length=50, description="e.g. 'project', 'workspace'")
    resource_id: str
    user_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
