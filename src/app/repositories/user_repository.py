"""User Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from src.domain.user import User


class UserRepository(ABC):
    """
    Repository interface for User lookups

    Implementations are bound to a StorageScope at construction time.
    A scoped repository only sees rows of the organization it was bound to.
    """

    @abstractmethod
    async def get_by_auth_id(self, auth_id: str) -> Optional[User]:
        """
        Retrieve the application user linked to an auth identity

        Args:
            auth_id: External auth provider identity

        Returns:
            User if found and visible in this scope, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: Sequence[str]) -> List[User]:
        pass

    @abstractmethod
    async def count_by_organization(self, organization_id: str, active_only: bool = False) -> int:
        """
        Count users of an organization

        Args:
            organization_id: Organization identifier
            active_only: Only count users with is_active=True

        Returns:
            Number of users
        """
        pass
