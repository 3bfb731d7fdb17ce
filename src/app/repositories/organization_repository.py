"""Organization Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.organization import Organization


class OrganizationRepository(ABC):

    @abstractmethod
    async def get_by_id(self, organization_id: str) -> Optional[Organization]:
        pass
