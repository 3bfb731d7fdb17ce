"""DuplicateTemplate Use Case"""

from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.template_repository import TemplateRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import ADMIN_OR_PM, Principal, ResourceAccess
from src.domain.template import ProjectTemplate
from .dtos import DuplicateTemplateCommandDTO, TemplateResponseDTO


class DuplicateTemplate:
    """
    Use Case: Copy a template into the caller's organization

    Business Rules:
    1. Admins and PMs only, and the caller must belong to an organization
    2. The source must be readable by the caller (publicly available
       templates are, which is how other organizations customize them)
    3. The copy is private, owned by the caller's organization and named
       "<original> (Copy)" unless a name is given
    """

    def __init__(self, uow: UnitOfWork, template_repo: TemplateRepository, authorizer: AuthorizeAccess):
        self.uow = uow
        self.template_repo = template_repo
        self.authorizer = authorizer

    async def execute(
        self, principal: Principal, template_id: str, command: DuplicateTemplateCommandDTO
    ) -> Result[TemplateResponseDTO]:
        access = await self.authorizer.execute(principal, ADMIN_OR_PM)
        if access.is_err():
            return Return.err(access.error)

        if not principal.organization_id:
            return Return.err(errors.bad_request(errors.NO_ORGANIZATION_MESSAGE))

        try:
            original = await self.template_repo.get_by_id(template_id)
            if not original:
                return Return.err(errors.not_found("Template"))

            access = await self.authorizer.execute(principal, ResourceAccess(original.descriptor()))
            if access.is_err():
                return Return.err(access.error)

            copy = await self.template_repo.create(
                ProjectTemplate(
                    organization_id=principal.organization_id,
                    created_by=principal.user_id,
                    name=(command.name or "").strip() or f"{original.name} (Copy)",
                    description=original.description,
                    category=original.category,
                    version=original.version or "1.0.0",
                    is_public=False,
                    is_publicly_available=False,
                )
            )
            await self.uow.commit()
            return Return.ok(TemplateResponseDTO.model_validate(copy))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to duplicate template", e))
