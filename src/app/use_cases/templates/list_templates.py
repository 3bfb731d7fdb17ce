"""ListTemplates Use Case"""

import logging
from typing import Dict, List
from libs.result import Result, Return
from src.app import errors
from src.app.repositories.project_repository import ProjectRepository
from src.app.repositories.template_repository import TemplateRepository
from src.domain.access import Principal
from src.domain.template import ProjectTemplate
from .dtos import TemplateListResponseDTO, TemplateResponseDTO

logger = logging.getLogger(__name__)


class ListTemplates:
    """
    List Templates Use Case

    Visibility:
    - Super admins see every template
    - Everyone else sees their organization's templates that are public
      or created by them, plus every publicly available template
    Results are de-duplicated, newest first, paginated, and carry the
    number of projects created from each template (0 when the count fails).
    """

    def __init__(self, template_repo: TemplateRepository, project_repo: ProjectRepository):
        self.template_repo = template_repo
        self.project_repo = project_repo

    async def execute(
        self, principal: Principal, limit: int = 10, offset: int = 0
    ) -> Result[TemplateListResponseDTO]:
        try:
            if principal.has_super_admin_access:
                page, total = await self.template_repo.list_all(limit, offset)
            else:
                if not principal.organization_id:
                    return Return.err(errors.bad_request(errors.NO_ORGANIZATION_MESSAGE))
                page, total = await self._visible_page(principal, limit, offset)

            usage_counts = await self._usage_counts(page)
        except Exception as e:
            return Return.err(errors.internal_error("Failed to load templates", e))

        templates = [
            TemplateResponseDTO.model_validate(template).model_copy(update={"usage_count": count})
            for template, count in zip(page, usage_counts)
        ]
        return Return.ok(
            TemplateListResponseDTO(templates=templates, total=total, limit=limit, offset=offset)
        )

    async def _visible_page(self, principal: Principal, limit: int, offset: int):
        org_templates = await self.template_repo.list_visible_in_organization(
            principal.organization_id, principal.user_id
        )
        global_templates = await self.template_repo.list_publicly_available()

        seen = {template.id for template in org_templates}
        combined = list(org_templates)
        combined.extend(t for t in global_templates if t.id not in seen)
        combined.sort(key=lambda t: t.created_at, reverse=True)

        return combined[offset:offset + limit], len(combined)

    async def _usage_counts(self, templates: List[ProjectTemplate]) -> List[int]:
        if not templates:
            return []
        try:
            counts: Dict[str, int] = await self.project_repo.count_by_templates(
                [t.id for t in templates]
            )
        except Exception as e:
            logger.error(f"Failed to count template usage: {e}")
            counts = {}
        return [counts.get(t.id, 0) for t in templates]
