"""Project Template Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain.template import ProjectTemplate


class TemplateRepository(ABC):
    """
    Repository interface for ProjectTemplate persistence
    """

    @abstractmethod
    async def get_by_id(self, template_id: str) -> Optional[ProjectTemplate]:
        pass

    @abstractmethod
    async def create(self, template: ProjectTemplate) -> ProjectTemplate:
        pass

    @abstractmethod
    async def delete(self, template: ProjectTemplate) -> None:
        pass

    @abstractmethod
    async def list_all(self, limit: int, offset: int) -> Tuple[List[ProjectTemplate], int]:
        """
        Retrieve every template, newest first

        Returns:
            Tuple of (page of templates, total count)
        """
        pass

    @abstractmethod
    async def list_visible_in_organization(
        self, organization_id: str, user_id: str
    ) -> List[ProjectTemplate]:
        """
        Templates of an organization that are public or created by the user
        """
        pass

    @abstractmethod
    async def list_publicly_available(self) -> List[ProjectTemplate]:
        pass

    @abstractmethod
    async def count_by_organization(self, organization_id: str) -> int:
        pass
