"""API Key Domain Entity

Only key_id (lookup prefix), the SHA-256 hash of the secret and a Fernet
encrypted copy of the secret are stored. The full key is shown once.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String, Text
from src.domain.base import BaseModel, generate_uuid


class ApiKeyStatus(str, Enum):
    ACTIVE = "active"
    REVOKED = "revoked"


class ApiKeyScope(str, Enum):
    GLOBAL = "global"
    ORGANIZATION = "org"


class ApiKeyPermission(str, Enum):
    READ = "read"
    WRITE = "write"


class ApiKey(BaseModel, table=True):
    __tablename__ = "api_keys"

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    key_id: str = Field(
        sa_column=Column(String(64), nullable=False, unique=True),
        description="sk_live_[<prefix>_]<first 8 hex of secret>"
    )

    key_hash: str = Field(sa_column=Column(String(64), nullable=False))
    encrypted_secret: str = Field(sa_column=Column(Text, nullable=False))

    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    scope: ApiKeyScope = Field(default=ApiKeyScope.ORGANIZATION)
    organization_id: Optional[str] = Field(default=None, index=True)
    permissions: ApiKeyPermission = Field(default=ApiKeyPermission.READ)
    status: ApiKeyStatus = Field(default=ApiKeyStatus.ACTIVE)

    expires_at: Optional[datetime] = Field(default=None)
    last_used_at: Optional[datetime] = Field(default=None)
    created_by: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
