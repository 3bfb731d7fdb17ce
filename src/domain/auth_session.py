"""Auth Session Domain Entity

Opaque bearer sessions issued by the auth provider. Only the SHA-256 hash of
the token is stored.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class AuthSession(BaseModel, table=True):
    """
    Auth Session - maps a bearer token to an external identity

    Domain Rules:
    - token_hash is unique
    - organization_id is captured at issue time and may be stale
    - A session is valid while not revoked and not expired
    """

    __tablename__ = "auth_sessions"
    __table_args__ = (
        Index('ix_auth_sessions_auth_id', 'auth_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    token_hash: str = Field(
        sa_column=Column(String(64), nullable=False, unique=True)
    )

    auth_id: str = Field(description="External identity the token belongs to")

    organization_id: Optional[str] = Field(default=None)

    expires_at: datetime
    revoked_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def is_valid(self, now: datetime) -> bool:
        return self.revoked_at is None and self.expires_at > now
