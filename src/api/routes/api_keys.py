"""API Key Administration Routes

Super-admin management of API keys. The full key is returned once, on
creation; every other response carries the masked key id.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Header, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.api_key_repository import SqlAlchemyApiKeyRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.dependencies import build_authorizer, get_principal, get_secret_cipher
from src.api.error import ClientError
from src.app import errors
from src.app.services.secret_cipher import SecretCipher
from src.app.use_cases.api_keys import CreateApiKey, ListApiKeys, RevokeApiKey, ValidateApiKey
from src.app.use_cases.api_keys.dtos import (
    ApiKeyContextDTO,
    ApiKeyCreatedDTO,
    ApiKeyListResponseDTO,
    ApiKeyResponseDTO,
    CreateApiKeyCommandDTO,
    ListApiKeysQueryDTO,
)
from src.depends import get_session
from src.domain.access import Principal
from src.domain.api_key import ApiKeyScope, ApiKeyStatus

router = APIRouter(prefix="/admin/api-keys", tags=["API Keys"])


@router.get("", response_model=ApiKeyListResponseDTO)
async def list_api_keys(
    status_filter: Optional[ApiKeyStatus] = Query(default=None, alias="status"),
    scope: Optional[ApiKeyScope] = None,
    organization_id: Optional[str] = None,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    query = ListApiKeysQueryDTO(
        status=status_filter,
        scope=scope,
        organization_id=organization_id,
        limit=limit,
        offset=offset,
    )
    use_case = ListApiKeys(SqlAlchemyApiKeyRepository(session), build_authorizer(session))
    result = await use_case.execute(principal, query)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "",
    response_model=ApiKeyCreatedDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {
            "description": "Caller is not a super admin",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "FORBIDDEN",
                            "message": "You do not have access to this resource"
                        }
                    }
                }
            }
        }
    }
)
async def create_api_key(
    command: CreateApiKeyCommandDTO,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
    cipher: SecretCipher = Depends(get_secret_cipher),
):
    """
    Issue an API key.

    **Returns:**
    - 201: `api_key` holds the full key; it is not retrievable afterwards
    - 400: Scope and organization_id do not match
    - 403: Caller is not a super admin
    """
    use_case = CreateApiKey(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyApiKeyRepository(session),
        cipher,
        build_authorizer(session),
    )
    result = await use_case.execute(principal, command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/{api_key_id}/revoke", response_model=ApiKeyResponseDTO)
async def revoke_api_key(
    api_key_id: str,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    use_case = RevokeApiKey(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyApiKeyRepository(session),
        build_authorizer(session),
    )
    result = await use_case.execute(principal, api_key_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/verify", response_model=ApiKeyContextDTO)
async def verify_api_key(
    x_api_key: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_session),
):
    """Validate the key sent in `X-API-Key` and return what it grants"""
    if not x_api_key:
        raise ClientError(errors.unauthorized("Missing API key"))

    use_case = ValidateApiKey(SqlAlchemyUnitOfWork(session), SqlAlchemyApiKeyRepository(session))
    result = await use_case.execute(x_api_key)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
