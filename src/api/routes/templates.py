"""Project Template API Routes"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.project_repository import SqlAlchemyProjectRepository
from src.adapter.repositories.template_repository import SqlAlchemyTemplateRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.dependencies import build_authorizer, get_principal
from src.api.error import ClientError
from src.app.use_cases.templates import (
    CreateTemplate,
    DeleteTemplate,
    DuplicateTemplate,
    ListTemplates,
)
from src.app.use_cases.templates.dtos import (
    CreateTemplateCommandDTO,
    DuplicateTemplateCommandDTO,
    TemplateListResponseDTO,
    TemplateResponseDTO,
)
from src.depends import get_session
from src.domain.access import Principal

router = APIRouter(prefix="/templates", tags=["Templates"])


@router.get("", response_model=TemplateListResponseDTO)
async def list_templates(
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    """
    Templates visible to the caller, newest first.

    Super admins see every template. Everyone else sees the public and own
    templates of their organization plus the globally available ones.
    """
    use_case = ListTemplates(SqlAlchemyTemplateRepository(session), SqlAlchemyProjectRepository(session))
    result = await use_case.execute(principal, limit=limit, offset=offset)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("", response_model=TemplateResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_template(
    command: CreateTemplateCommandDTO,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    use_case = CreateTemplate(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyTemplateRepository(session),
        build_authorizer(session),
    )
    result = await use_case.execute(principal, command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "/{template_id}/duplicate",
    response_model=TemplateResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_template(
    template_id: str,
    command: DuplicateTemplateCommandDTO,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    """Private copy of a readable template in the caller's organization"""
    use_case = DuplicateTemplate(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyTemplateRepository(session),
        build_authorizer(session),
    )
    result = await use_case.execute(principal, template_id, command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: str,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(get_session),
):
    use_case = DeleteTemplate(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyTemplateRepository(session),
        build_authorizer(session),
    )
    result = await use_case.execute(principal, template_id)
    if result.is_err():
        raise ClientError(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
