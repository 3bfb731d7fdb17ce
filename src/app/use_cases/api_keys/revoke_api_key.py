"""RevokeApiKey Use Case"""

from datetime import datetime
from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.api_key_repository import ApiKeyRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal, SuperAdminOnly
from src.domain.api_key import ApiKeyStatus
from .common import to_api_key_dto
from .dtos import ApiKeyResponseDTO


class RevokeApiKey:
    """
    Use Case: Revoke an API key

    Super admins only. Revoking an already revoked key is a no-op.
    """

    def __init__(self, uow: UnitOfWork, api_key_repo: ApiKeyRepository, authorizer: AuthorizeAccess):
        self.uow = uow
        self.api_key_repo = api_key_repo
        self.authorizer = authorizer

    async def execute(self, principal: Principal, api_key_id: str) -> Result[ApiKeyResponseDTO]:
        access = await self.authorizer.execute(principal, SuperAdminOnly())
        if access.is_err():
            return Return.err(access.error)

        try:
            api_key = await self.api_key_repo.get_by_id(api_key_id)
            if not api_key:
                return Return.err(errors.not_found("API key"))

            if api_key.status != ApiKeyStatus.REVOKED:
                api_key.status = ApiKeyStatus.REVOKED
                api_key.updated_at = datetime.utcnow()
                api_key = await self.api_key_repo.update(api_key)
                await self.uow.commit()

            return Return.ok(to_api_key_dto(api_key))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to revoke API key", e))
