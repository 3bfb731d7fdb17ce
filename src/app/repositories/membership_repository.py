"""Resource Membership Repository Interface"""

from abc import ABC, abstractmethod
from typing import List


class MembershipRepository(ABC):

    @abstractmethod
    async def is_member(self, resource_type: str, resource_id: str, user_id: str) -> bool:
        """
        Check for an explicit membership row

        Args:
            resource_type: e.g. 'project'
            resource_id: Resource identifier
            user_id: Application user id

        Returns:
            True if the user is a member of the resource
        """
        pass

    @abstractmethod
    async def list_user_ids(self, resource_type: str, resource_id: str) -> List[str]:
        pass
