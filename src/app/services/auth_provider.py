"""Auth Provider Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.access import AuthIdentity


class AuthProvider(ABC):
    """
    Validates bearer sessions issued by the auth provider

    Knows nothing about application users, roles or organizations beyond
    what was captured in the session.
    """

    @abstractmethod
    async def get_identity(self, token: str) -> Optional[AuthIdentity]:
        """
        Resolve a bearer token

        Args:
            token: Opaque session token

        Returns:
            AuthIdentity for a valid session, None for unknown, expired or
            revoked tokens
        """
        pass
