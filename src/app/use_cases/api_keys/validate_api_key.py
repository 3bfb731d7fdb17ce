"""ValidateApiKey Use Case"""

import logging
from datetime import datetime
from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.api_key_repository import ApiKeyRepository
from src.domain.api_key import ApiKeyStatus
from src.domain.api_key_rules import extract_key_id, secret_matches, split_api_key
from .dtos import ApiKeyContextDTO

logger = logging.getLogger(__name__)


class ValidateApiKey:
    """
    Use Case: Validate a presented API key

    Business Rules:
    1. Key must be well-formed
    2. Key must exist, be active and not expired
    3. Secret hash is compared in constant time
    4. last_used_at is touched on success (failure to touch is logged only)
    Every failure is UNAUTHORIZED without detail.
    """

    def __init__(self, uow: UnitOfWork, api_key_repo: ApiKeyRepository):
        self.uow = uow
        self.api_key_repo = api_key_repo

    async def execute(self, full_key: str) -> Result[ApiKeyContextDTO]:
        parts = split_api_key(full_key)
        if parts is None:
            logger.debug("[API Keys] Invalid key format")
            return Return.err(errors.unauthorized("Invalid API key"))
        _, secret = parts
        key_id = extract_key_id(full_key)

        try:
            api_key = await self.api_key_repo.get_by_key_id(key_id)
        except Exception as e:
            return Return.err(errors.internal_error("Failed to validate API key", e))

        if not api_key:
            logger.debug(f"[API Keys] Key not found: {key_id}")
            return Return.err(errors.unauthorized("Invalid API key"))

        now = datetime.utcnow()
        if api_key.status != ApiKeyStatus.ACTIVE:
            logger.debug(f"[API Keys] Key is not active: {api_key.status.value}")
            return Return.err(errors.unauthorized("Invalid API key"))

        if api_key.expires_at and api_key.expires_at < now:
            logger.debug("[API Keys] Key has expired")
            return Return.err(errors.unauthorized("Invalid API key"))

        if not secret_matches(secret, api_key.key_hash):
            logger.warning(f"[API Keys] Secret mismatch for key {key_id}")
            return Return.err(errors.unauthorized("Invalid API key"))

        try:
            api_key.last_used_at = now
            await self.api_key_repo.update(api_key)
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"[API Keys] Failed to update last_used_at for {key_id}: {e}")

        return Return.ok(
            ApiKeyContextDTO(
                api_key_id=api_key.id,
                key_id=api_key.key_id,
                scope=api_key.scope,
                permissions=api_key.permissions,
                organization_id=api_key.organization_id,
            )
        )
