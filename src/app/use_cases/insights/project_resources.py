"""GetProjectResources Use Case

Allocations and member workload of a project in one call.
"""

import asyncio
import logging
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional
from libs.result import Result, Return
from src.app import errors
from src.app.repositories.membership_repository import MembershipRepository
from src.app.repositories.project_repository import AllocationRepository, ProjectRepository
from src.app.repositories.user_repository import UserRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import Principal, ResourceAccess
from src.domain.metrics import percentage, sum_amounts
from src.domain.project import PROJECT_RESOURCE
from .dtos import AllocationDTO, ProjectResourcesResponseDTO, WorkloadDTO

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30


class GetProjectResources:
    """
    Get Project Resources Use Case

    Access: super admin, project owner, same organization, or explicit
    project member.

    The project's allocations and its member list load concurrently. Each
    member's workload is the sum of their weekly hours across every project
    overlapping the window, as a percentage of max_hours_per_week (one
    decimal); over 100 is over-allocated. A failed slice is logged and
    returned empty.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        allocation_repo: AllocationRepository,
        membership_repo: MembershipRepository,
        user_repo: UserRepository,
        authorizer: AuthorizeAccess,
    ):
        self.project_repo = project_repo
        self.allocation_repo = allocation_repo
        self.membership_repo = membership_repo
        self.user_repo = user_repo
        self.authorizer = authorizer

    async def execute(
        self,
        principal: Principal,
        project_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Result[ProjectResourcesResponseDTO]:
        start_date = start_date or date.today()
        end_date = end_date or start_date + timedelta(days=DEFAULT_WINDOW_DAYS)
        if end_date < start_date:
            return Return.err(errors.bad_request("end_date must not be before start_date"))

        # Step 1: Access
        try:
            project = await self.project_repo.get_by_id(project_id)
        except Exception as e:
            return Return.err(errors.internal_error("Failed to load project", e))
        if not project:
            return Return.err(errors.not_found("Project"))

        access = await self.authorizer.execute(principal, ResourceAccess(project.descriptor()))
        if access.is_err():
            return Return.err(access.error)

        # Step 2: Allocations and members, concurrently
        allocations, member_ids = await asyncio.gather(
            self.allocation_repo.list_by_project(project_id),
            self.membership_repo.list_user_ids(PROJECT_RESOURCE, project_id),
            return_exceptions=True,
        )
        if isinstance(allocations, Exception):
            logger.error(f"[Resources] Error loading allocations for project {project_id}: {allocations}")
            allocations = []
        if isinstance(member_ids, Exception):
            logger.error(f"[Resources] Error loading members for project {project_id}: {member_ids}")
            member_ids = []

        # Step 3: Workload per member
        workloads = await self._workloads(member_ids, start_date, end_date)

        return Return.ok(
            ProjectResourcesResponseDTO(
                project_id=project_id,
                start_date=start_date,
                end_date=end_date,
                allocations=[AllocationDTO.model_validate(a) for a in allocations],
                workloads=workloads,
            )
        )

    async def _workloads(self, member_ids: List[str], start_date: date, end_date: date) -> List[WorkloadDTO]:
        if not member_ids:
            return []

        users, allocations = await asyncio.gather(
            self.user_repo.get_by_ids(member_ids),
            self.allocation_repo.list_by_users_in_range(member_ids, start_date, end_date),
            return_exceptions=True,
        )
        if isinstance(users, Exception) or isinstance(allocations, Exception):
            failure = users if isinstance(users, Exception) else allocations
            logger.error(f"[Resources] Error loading workload: {failure}")
            return []

        by_user = defaultdict(list)
        for allocation in allocations:
            by_user[allocation.user_id].append(allocation)

        workloads = []
        for user in users:
            user_allocations = by_user.get(user.id, [])
            total_hours = sum_amounts(a.allocated_hours_per_week for a in user_allocations)
            capacity = user.max_hours_per_week or Decimal("0")
            utilization = percentage(total_hours, capacity, 1)
            workloads.append(
                WorkloadDTO(
                    user_id=user.id,
                    name=user.name,
                    max_hours_per_week=capacity,
                    total_allocated_hours=total_hours,
                    utilization=utilization,
                    is_over_allocated=utilization > 100,
                    allocations=[AllocationDTO.model_validate(a) for a in user_allocations],
                )
            )
        return workloads
