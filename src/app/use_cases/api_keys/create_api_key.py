"""CreateApiKey Use Case"""

from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.secret_cipher import SecretCipher
from src.app.repositories.api_key_repository import ApiKeyRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal, SuperAdminOnly
from src.domain.api_key import ApiKey, ApiKeyScope, ApiKeyStatus
from src.domain.api_key_rules import extract_key_id, generate_api_key, hash_secret, split_api_key
from .common import to_api_key_dto
from .dtos import ApiKeyCreatedDTO, CreateApiKeyCommandDTO


class CreateApiKey:
    """
    Use Case: Issue an API key

    Business Rules:
    1. Super admins only
    2. Organization-scoped keys require organization_id; global keys must
       not carry one
    3. Only key_id, the SHA-256 hash and an encrypted copy of the secret
       are stored
    4. The full key is returned exactly once
    """

    def __init__(
        self,
        uow: UnitOfWork,
        api_key_repo: ApiKeyRepository,
        cipher: SecretCipher,
        authorizer: AuthorizeAccess,
    ):
        self.uow = uow
        self.api_key_repo = api_key_repo
        self.cipher = cipher
        self.authorizer = authorizer

    async def execute(
        self, principal: Principal, command: CreateApiKeyCommandDTO
    ) -> Result[ApiKeyCreatedDTO]:
        access = await self.authorizer.execute(principal, SuperAdminOnly())
        if access.is_err():
            return Return.err(access.error)

        if command.scope == ApiKeyScope.ORGANIZATION and not command.organization_id:
            return Return.err(errors.bad_request("organization_id is required for org-scoped keys"))
        if command.scope == ApiKeyScope.GLOBAL and command.organization_id:
            return Return.err(errors.bad_request("Global keys cannot have an organization_id"))

        try:
            full_key = generate_api_key(command.key_prefix)
            _, secret = split_api_key(full_key)

            api_key = await self.api_key_repo.create(
                ApiKey(
                    key_id=extract_key_id(full_key),
                    key_hash=hash_secret(secret),
                    encrypted_secret=self.cipher.encrypt(secret),
                    name=command.name.strip(),
                    description=command.description,
                    scope=command.scope,
                    permissions=command.permissions,
                    organization_id=command.organization_id,
                    status=ApiKeyStatus.ACTIVE,
                    expires_at=command.expires_at,
                    created_by=principal.user_id,
                )
            )
            await self.uow.commit()

            return Return.ok(ApiKeyCreatedDTO(api_key=full_key, key=to_api_key_dto(api_key)))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to create API key", e))
