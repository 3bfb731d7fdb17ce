"""ResolvePrincipal Use Case

Turns the auth provider identity into the application principal.
"""

import logging
from typing import Optional
from libs.result import Result, Return
from src.app import errors
from src.app.repositories.user_repository import UserRepository
from src.domain.access import AuthIdentity, Principal
from src.domain.user import User

logger = logging.getLogger(__name__)


class ResolvePrincipal:
    """
    Use Case: Resolve the caller of a request

    Business Rules:
    1. The user row is looked up by auth_id, never by the application id
    2. The scoped path is tried first, the privileged path second
    3. A failing scoped lookup counts as a miss
    4. Only when both paths miss is the caller unauthorized
    5. Read-only; the principal is rebuilt on every request
    """

    def __init__(self, scoped_user_repo: UserRepository, privileged_user_repo: UserRepository):
        self.scoped_user_repo = scoped_user_repo
        self.privileged_user_repo = privileged_user_repo

    async def execute(self, identity: Optional[AuthIdentity]) -> Result[Principal]:
        if identity is None:
            return Return.err(errors.unauthorized("No valid session"))

        # Step 1: Scoped lookup (row visibility limited to the session's tenant)
        user = await self._scoped_lookup(identity.auth_id)

        # Step 2: Privileged fallback (stale or missing tenant claim)
        if user is None:
            try:
                user = await self.privileged_user_repo.get_by_auth_id(identity.auth_id)
            except Exception as e:
                return Return.err(errors.internal_error("Failed to resolve user", e))

        if user is None:
            return Return.err(errors.unauthorized("User not found"))

        return Return.ok(
            Principal(
                user_id=user.id,
                organization_id=user.organization_id,
                role=user.role,
                is_super_admin=user.is_super_admin,
            )
        )

    async def _scoped_lookup(self, auth_id: str) -> Optional[User]:
        try:
            return await self.scoped_user_repo.get_by_auth_id(auth_id)
        except Exception as e:
            logger.warning(f"Scoped user lookup failed for auth_id={auth_id}, falling back: {e}")
            return None
