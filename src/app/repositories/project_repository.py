"""Project and Allocation Repository Interfaces"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, List, Optional, Sequence
from src.domain.project import Project, MemberAllocation


class ProjectRepository(ABC):

    @abstractmethod
    async def get_by_id(self, project_id: str) -> Optional[Project]:
        pass

    @abstractmethod
    async def count_by_organization(self, organization_id: str) -> int:
        pass

    @abstractmethod
    async def count_by_templates(self, template_ids: Sequence[str]) -> Dict[str, int]:
        """
        Number of projects created from each template

        Returns:
            Mapping template_id -> count (templates without projects are 0)
        """
        pass


class AllocationRepository(ABC):

    @abstractmethod
    async def list_by_project(self, project_id: str) -> List[MemberAllocation]:
        """
        Retrieve allocations of a project ordered by start date

        Args:
            project_id: Project identifier

        Returns:
            List of allocations
        """
        pass

    @abstractmethod
    async def list_by_users_in_range(
        self, user_ids: Sequence[str], start_date: date, end_date: date
    ) -> List[MemberAllocation]:
        """
        Retrieve allocations of the given users (any project) overlapping a date range

        Open-ended allocations (end_date None) overlap every range after
        their start.

        Args:
            user_ids: Application user ids
            start_date: Range start (inclusive)
            end_date: Range end (inclusive)

        Returns:
            List of allocations
        """
        pass
