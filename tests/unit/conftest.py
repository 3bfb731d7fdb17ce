import pytest
from unittest.mock import AsyncMock, MagicMock
from libs.result import Return
from src.domain.access import Principal
from src.domain.user import UserRole


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def admin_principal():
    return Principal(user_id="user_admin", organization_id="org_1", role=UserRole.ADMIN)


@pytest.fixture
def member_principal():
    return Principal(user_id="user_member", organization_id="org_1", role=UserRole.MEMBER)


@pytest.fixture
def super_admin_principal():
    return Principal(
        user_id="user_root",
        organization_id="org_root",
        role=UserRole.ADMIN,
        is_super_admin=True,
    )


@pytest.fixture
def outsider_principal():
    return Principal(user_id="user_other", organization_id="org_2", role=UserRole.ADMIN)


@pytest.fixture
def allow_all_authorizer():
    authorizer = MagicMock()
    authorizer.execute = AsyncMock(return_value=Return.ok())
    return authorizer


@pytest.fixture
def mock_history_repo():
    """History repository that keeps what was written"""
    repo = MagicMock()
    repo.entries = []

    async def create(entry):
        repo.entries.append(entry)
        return entry

    repo.create = AsyncMock(side_effect=create)
    repo.get_by_invoice_id = AsyncMock(return_value=[])
    return repo
