"""API key use cases"""
from .create_api_key import CreateApiKey
from .list_api_keys import ListApiKeys
from .revoke_api_key import RevokeApiKey
from .validate_api_key import ValidateApiKey
from .dtos import (
    CreateApiKeyCommandDTO,
    ListApiKeysQueryDTO,
    ApiKeyResponseDTO,
    ApiKeyCreatedDTO,
    ApiKeyListResponseDTO,
    ApiKeyContextDTO,
)

__all__ = [
    "CreateApiKey",
    "ListApiKeys",
    "RevokeApiKey",
    "ValidateApiKey",
    "CreateApiKeyCommandDTO",
    "ListApiKeysQueryDTO",
    "ApiKeyResponseDTO",
    "ApiKeyCreatedDTO",
    "ApiKeyListResponseDTO",
    "ApiKeyContextDTO",
]
