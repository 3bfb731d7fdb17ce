"""Data Transfer Objects for Template Use Cases"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CreateTemplateCommandDTO(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=100)
    is_public: bool = False
    is_publicly_available: bool = Field(
        default=False,
        description="Visible to every organization (super admins only)"
    )


class DuplicateTemplateCommandDTO(BaseModel):
    name: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Name of the copy (defaults to '<original> (Copy)')"
    )


class TemplateResponseDTO(BaseModel):
    id: str
    organization_id: Optional[str] = None
    created_by: Optional[str] = None
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    version: str
    is_public: bool
    is_publicly_available: bool
    created_at: datetime
    updated_at: datetime
    usage_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class TemplateListResponseDTO(BaseModel):
    templates: List[TemplateResponseDTO]
    total: int
    limit: int
    offset: int
