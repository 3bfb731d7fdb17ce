"""Data Transfer Objects for API Key Use Cases"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from src.domain.api_key import ApiKeyPermission, ApiKeyScope, ApiKeyStatus


class CreateApiKeyCommandDTO(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    scope: ApiKeyScope
    permissions: ApiKeyPermission = ApiKeyPermission.READ
    organization_id: Optional[str] = None
    expires_at: Optional[datetime] = None
    description: Optional[str] = None
    key_prefix: Optional[str] = Field(
        default=None,
        description="Custom prefix inserted after sk_live_ (sanitized, max 20 chars)"
    )


class ListApiKeysQueryDTO(BaseModel):
    status: Optional[ApiKeyStatus] = None
    scope: Optional[ApiKeyScope] = None
    organization_id: Optional[str] = None
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class ApiKeyResponseDTO(BaseModel):
    """Key metadata; key_id is masked, the secret never leaves the service"""

    id: str
    key_id: str
    name: str
    description: Optional[str] = None
    scope: ApiKeyScope
    permissions: ApiKeyPermission
    organization_id: Optional[str] = None
    status: ApiKeyStatus
    expires_at: Optional[datetime] = None
    last_used_at: Optional[datetime] = None
    created_by: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ApiKeyCreatedDTO(BaseModel):
    """Returned once at creation; api_key is not retrievable afterwards"""

    api_key: str
    key: ApiKeyResponseDTO


class ApiKeyListResponseDTO(BaseModel):
    keys: List[ApiKeyResponseDTO]
    total: int
    limit: int
    offset: int


class ApiKeyContextDTO(BaseModel):
    """What a validated key grants"""

    api_key_id: str
    key_id: str
    scope: ApiKeyScope
    permissions: ApiKeyPermission
    organization_id: Optional[str] = None
