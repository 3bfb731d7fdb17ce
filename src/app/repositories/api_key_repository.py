"""API Key Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain.api_key import ApiKey, ApiKeyScope, ApiKeyStatus


class ApiKeyRepository(ABC):

    @abstractmethod
    async def create(self, api_key: ApiKey) -> ApiKey:
        pass

    @abstractmethod
    async def get_by_id(self, api_key_id: str) -> Optional[ApiKey]:
        pass

    @abstractmethod
    async def get_by_key_id(self, key_id: str) -> Optional[ApiKey]:
        """
        Lookup by the public key_id part of a key

        Args:
            key_id: sk_live_[<prefix>_]<first 8 hex>

        Returns:
            ApiKey if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[ApiKeyStatus] = None,
        scope: Optional[ApiKeyScope] = None,
        organization_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[ApiKey], int]:
        """
        Retrieve keys, newest first

        Returns:
            Tuple of (page of keys, total count)
        """
        pass

    @abstractmethod
    async def update(self, api_key: ApiKey) -> ApiKey:
        pass
