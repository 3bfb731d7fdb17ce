"""GetOrganizationUsage Use Case"""

import asyncio
import logging
from libs.result import Result, Return
from src.app import errors
from src.app.repositories.project_repository import ProjectRepository
from src.app.repositories.template_repository import TemplateRepository
from src.app.repositories.user_repository import UserRepository
from src.domain.access import Principal
from src.domain.metrics import percentage
from .dtos import OrganizationUsageResponseDTO

logger = logging.getLogger(__name__)


class GetOrganizationUsage:
    """
    Get Organization Usage Use Case

    Counts projects, users, active users and templates of the caller's
    organization concurrently. A count that fails is logged and reported
    as 0.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        active_user_repo: UserRepository,
        template_repo: TemplateRepository,
    ):
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.active_user_repo = active_user_repo
        self.template_repo = template_repo

    async def execute(self, principal: Principal) -> Result[OrganizationUsageResponseDTO]:
        organization_id = principal.organization_id
        if not organization_id:
            return Return.err(errors.bad_request(errors.NO_ORGANIZATION_MESSAGE))

        names = ("projects", "users", "active_users", "templates")
        results = await asyncio.gather(
            self.project_repo.count_by_organization(organization_id),
            self.user_repo.count_by_organization(organization_id),
            self.active_user_repo.count_by_organization(organization_id, active_only=True),
            self.template_repo.count_by_organization(organization_id),
            return_exceptions=True,
        )

        counts = {}
        for name, result in zip(names, results):
            if isinstance(result, Exception):
                logger.error(f"Failed to count {name} for organization {organization_id}: {result}")
                counts[name] = 0
            else:
                counts[name] = result or 0

        return Return.ok(
            OrganizationUsageResponseDTO(
                organization_id=organization_id,
                active_user_percentage=percentage(counts["active_users"], counts["users"], 1),
                **counts,
            )
        )
