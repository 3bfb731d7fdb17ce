"""CreateTemplate Use Case"""

from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.template_repository import TemplateRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import ADMIN_OR_PM, Principal, SuperAdminOnly
from src.domain.template import ProjectTemplate
from .dtos import CreateTemplateCommandDTO, TemplateResponseDTO


class CreateTemplate:
    """
    Use Case: Create a project template

    Business Rules:
    1. Admins and PMs only
    2. Caller must belong to an organization; the template belongs to it
    3. Publicly available templates can only be created by super admins
    """

    def __init__(self, uow: UnitOfWork, template_repo: TemplateRepository, authorizer: AuthorizeAccess):
        self.uow = uow
        self.template_repo = template_repo
        self.authorizer = authorizer

    async def execute(
        self, principal: Principal, command: CreateTemplateCommandDTO
    ) -> Result[TemplateResponseDTO]:
        access = await self.authorizer.execute(principal, ADMIN_OR_PM)
        if access.is_err():
            return Return.err(access.error)

        if command.is_publicly_available:
            access = await self.authorizer.execute(principal, SuperAdminOnly())
            if access.is_err():
                return Return.err(access.error)

        if not principal.organization_id:
            return Return.err(errors.bad_request(errors.NO_ORGANIZATION_MESSAGE))

        try:
            template = await self.template_repo.create(
                ProjectTemplate(
                    organization_id=principal.organization_id,
                    created_by=principal.user_id,
                    name=command.name.strip(),
                    description=command.description,
                    category=command.category,
                    is_public=command.is_public,
                    is_publicly_available=command.is_publicly_available,
                )
            )
            await self.uow.commit()
            return Return.ok(TemplateResponseDTO.model_validate(template))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to create template", e))
