"""Project API Routes"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import sessionmaker

from src.adapter.repositories.membership_repository import SqlAlchemyMembershipRepository
from src.adapter.repositories.project_repository import (
    SqlAlchemyAllocationRepository,
    SqlAlchemyProjectRepository,
)
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.api.dependencies import build_authorizer, get_principal
from src.api.error import ClientError
from src.app.use_cases.insights import GetProjectResources
from src.app.use_cases.insights.dtos import ProjectResourcesResponseDTO
from src.depends import get_session_factory, open_sessions
from src.domain.access import Principal

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("/{project_id}/resources", response_model=ProjectResourcesResponseDTO)
async def get_project_resources(
    project_id: str,
    start_date: Optional[date] = Query(default=None, description="Defaults to today"),
    end_date: Optional[date] = Query(default=None, description="Defaults to start_date + 30 days"),
    principal: Principal = Depends(get_principal),
    session_factory: sessionmaker = Depends(get_session_factory),
):
    """
    Allocations and member workload of a project.

    Allocations and members load concurrently, each on its own session.
    A slice that fails to load comes back empty.
    """
    async with open_sessions(session_factory, 2) as (allocation_session, member_session):
        use_case = GetProjectResources(
            project_repo=SqlAlchemyProjectRepository(member_session),
            allocation_repo=SqlAlchemyAllocationRepository(allocation_session),
            membership_repo=SqlAlchemyMembershipRepository(member_session),
            user_repo=SqlAlchemyUserRepository(member_session),
            authorizer=build_authorizer(member_session),
        )
        result = await use_case.execute(principal, project_id, start_date, end_date)

    if result.is_err():
        raise ClientError(result.error)
    return result.value
