"""Project Template Domain Entity"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Index
from src.domain.access import ResourceDescriptor
from src.domain.base import BaseModel, generate_uuid

TEMPLATE_RESOURCE = "template"


class ProjectTemplate(BaseModel, table=True):
    """
    Project Template

    Domain Rules:
    - organization_id None means a built-in (global) template
    - is_public: visible to the whole owning organization
    - is_publicly_available: visible to every organization, read-only for
      everyone except super-admins (others duplicate instead)
    """

    __tablename__ = "project_templates"
    __table_args__ = (
        Index('ix_project_templates_organization_id', 'organization_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    organization_id: Optional[str] = Field(default=None)
    created_by: Optional[str] = Field(default=None)
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    category: Optional[str] = Field(default=None, max_length=100)
    version: str = Field(default="1.0.0", max_length=20)
    is_public: bool = Field(default=False)
    is_publicly_available: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def descriptor(self) -> ResourceDescriptor:
        return ResourceDescriptor(
            resource_type=TEMPLATE_RESOURCE,
            resource_id=self.id,
            organization_id=self.organization_id,
            owner_id=self.created_by,
            is_publicly_available=self.is_publicly_available,
        )
