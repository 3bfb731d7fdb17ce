"""Organization API Routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import sessionmaker

from src.adapter.repositories.project_repository import SqlAlchemyProjectRepository
from src.adapter.repositories.template_repository import SqlAlchemyTemplateRepository
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.api.dependencies import get_principal
from src.api.error import ClientError
from src.app.use_cases.insights import GetOrganizationUsage
from src.app.use_cases.insights.dtos import OrganizationUsageResponseDTO
from src.depends import get_session_factory, open_sessions
from src.domain.access import Principal

router = APIRouter(prefix="/organization", tags=["Organization"])


@router.get("/usage", response_model=OrganizationUsageResponseDTO)
async def get_organization_usage(
    principal: Principal = Depends(get_principal),
    session_factory: sessionmaker = Depends(get_session_factory),
):
    """Project, user, active user and template counts of the caller's organization"""
    async with open_sessions(session_factory, 4) as sessions:
        project_session, user_session, active_user_session, template_session = sessions
        use_case = GetOrganizationUsage(
            SqlAlchemyProjectRepository(project_session),
            SqlAlchemyUserRepository(user_session),
            SqlAlchemyUserRepository(active_user_session),
            SqlAlchemyTemplateRepository(template_session),
        )
        result = await use_case.execute(principal)

    if result.is_err():
        raise ClientError(result.error)
    return result.value
