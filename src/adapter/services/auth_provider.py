"""Session-table Auth Provider Implementation

Opaque bearer tokens: the client holds ``secrets.token_hex(32)``, the
database holds only its SHA-256 hash.
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.auth_provider import AuthProvider
from src.domain.access import AuthIdentity
from src.domain.auth_session import AuthSession

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SqlAlchemyAuthProvider(AuthProvider):

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = datetime.utcnow):
        self.session = session
        self.clock = clock

    async def get_identity(self, token: str) -> Optional[AuthIdentity]:
        if not token:
            return None

        statement = select(AuthSession).where(AuthSession.token_hash == hash_token(token))
        result = await self.session.execute(statement)
        auth_session = result.scalar_one_or_none()

        if auth_session is None or not auth_session.is_valid(self.clock()):
            return None

        return AuthIdentity(
            auth_id=auth_session.auth_id,
            organization_id=auth_session.organization_id,
        )

    async def issue_session(
        self,
        auth_id: str,
        organization_id: Optional[str] = None,
        ttl_hours: int = 24,
    ) -> str:
        """
        Create a session and return the raw token (only time it is visible)

        The caller commits.
        """
        token = secrets.token_hex(TOKEN_BYTES)
        self.session.add(
            AuthSession(
                token_hash=hash_token(token),
                auth_id=auth_id,
                organization_id=organization_id,
                expires_at=self.clock() + timedelta(hours=ttl_hours),
            )
        )
        await self.session.flush()
        logger.info(f"Issued session for auth_id={auth_id}")
        return token

    async def revoke_session(self, token: str) -> bool:
        statement = select(AuthSession).where(AuthSession.token_hash == hash_token(token))
        result = await self.session.execute(statement)
        auth_session = result.scalar_one_or_none()
        if auth_session is None or auth_session.revoked_at is not None:
            return False

        auth_session.revoked_at = self.clock()
        self.session.add(auth_session)
        await self.session.flush()
        return True
