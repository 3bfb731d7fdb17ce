"""ListApiKeys Use Case"""

from libs.result import Result, Return
from src.app import errors
from src.app.repositories.api_key_repository import ApiKeyRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal, SuperAdminOnly
from .common import to_api_key_dto
from .dtos import ApiKeyListResponseDTO, ListApiKeysQueryDTO


class ListApiKeys:
    """Super-admin listing of API key metadata with masked key ids"""

    def __init__(self, api_key_repo: ApiKeyRepository, authorizer: AuthorizeAccess):
        self.api_key_repo = api_key_repo
        self.authorizer = authorizer

    async def execute(
        self, principal: Principal, query: ListApiKeysQueryDTO
    ) -> Result[ApiKeyListResponseDTO]:
        access = await self.authorizer.execute(principal, SuperAdminOnly())
        if access.is_err():
            return Return.err(access.error)

        try:
            keys, total = await self.api_key_repo.list(
                status=query.status,
                scope=query.scope,
                organization_id=query.organization_id,
                limit=query.limit,
                offset=query.offset,
            )
        except Exception as e:
            return Return.err(errors.internal_error("Failed to fetch API keys", e))

        return Return.ok(
            ApiKeyListResponseDTO(
                keys=[to_api_key_dto(key) for key in keys],
                total=total,
                limit=query.limit,
                offset=query.offset,
            )
        )
