"""DeleteTemplate Use Case"""

from libs.result import Result, Return
from src.app import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.template_repository import TemplateRepository
from src.app.use_cases.access.authorize_access import AuthorizeAccess
from src.domain.access import ADMIN_OR_PM, Principal, ResourceAccess


class DeleteTemplate:
    """
    Use Case: Delete a template

    Admins and PMs with write access to the template. Publicly available
    templates can only be deleted by super admins.
    """

    def __init__(self, uow: UnitOfWork, template_repo: TemplateRepository, authorizer: AuthorizeAccess):
        self.uow = uow
        self.template_repo = template_repo
        self.authorizer = authorizer

    async def execute(self, principal: Principal, template_id: str) -> Result[None]:
        access = await self.authorizer.execute(principal, ADMIN_OR_PM)
        if access.is_err():
            return Return.err(access.error)

        try:
            template = await self.template_repo.get_by_id(template_id)
            if not template:
                return Return.err(errors.not_found("Template"))

            access = await self.authorizer.execute(
                principal, ResourceAccess(template.descriptor(), write=True)
            )
            if access.is_err():
                return Return.err(access.error)

            await self.template_repo.delete(template)
            await self.uow.commit()
            return Return.ok()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal_error("Failed to delete template", e))
