"""Unit tests for ResolvePrincipal use case

Tests cover:
- Scoped hit
- Privileged fallback when the scoped path misses or fails
- Unauthorized when both miss or there is no session
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.access import ResolvePrincipal
from src.domain.access import AuthIdentity
from src.domain.user import User, UserRole


@pytest.fixture
def scoped_repo():
    return MagicMock()


@pytest.fixture
def privileged_repo():
    return MagicMock()


@pytest.fixture
def use_case(scoped_repo, privileged_repo):
    return ResolvePrincipal(scoped_user_repo=scoped_repo, privileged_user_repo=privileged_repo)


@pytest.fixture
def user():
    return User(
        id="user_1",
        auth_id="auth_1",
        organization_id="org_1",
        role=UserRole.PM,
        is_super_admin=False,
    )


@pytest.mark.asyncio
class TestResolvePrincipal:

    async def test_scoped_hit(self, use_case, scoped_repo, privileged_repo, user):
        """
        Given: The user is visible through the scoped path
        When: The principal is resolved
        Then: The privileged path is never used
        """
        scoped_repo.get_by_auth_id = AsyncMock(return_value=user)
        privileged_repo.get_by_auth_id = AsyncMock()

        result = await use_case.execute(AuthIdentity(auth_id="auth_1", organization_id="org_1"))

        assert result.is_ok()
        assert result.value.user_id == "user_1"
        assert result.value.organization_id == "org_1"
        assert result.value.role == UserRole.PM
        privileged_repo.get_by_auth_id.assert_not_called()

    async def test_falls_back_to_privileged_on_miss(self, use_case, scoped_repo, privileged_repo, user):
        """A stale tenant claim hides the row from the scoped path"""
        scoped_repo.get_by_auth_id = AsyncMock(return_value=None)
        privileged_repo.get_by_auth_id = AsyncMock(return_value=user)

        result = await use_case.execute(AuthIdentity(auth_id="auth_1", organization_id="org_old"))

        assert result.is_ok()
        assert result.value.user_id == "user_1"
        privileged_repo.get_by_auth_id.assert_awaited_once_with("auth_1")

    async def test_scoped_failure_counts_as_miss(self, use_case, scoped_repo, privileged_repo, user):
        scoped_repo.get_by_auth_id = AsyncMock(side_effect=Exception("policy error"))
        privileged_repo.get_by_auth_id = AsyncMock(return_value=user)

        result = await use_case.execute(AuthIdentity(auth_id="auth_1"))

        assert result.is_ok()
        assert result.value.user_id == "user_1"

    async def test_both_miss_is_unauthorized(self, use_case, scoped_repo, privileged_repo):
        scoped_repo.get_by_auth_id = AsyncMock(return_value=None)
        privileged_repo.get_by_auth_id = AsyncMock(return_value=None)

        result = await use_case.execute(AuthIdentity(auth_id="ghost"))

        assert result.is_err()
        assert result.error.code == "UNAUTHORIZED"
        assert result.error.reason == "User not found"

    async def test_no_identity_is_unauthorized(self, use_case):
        result = await use_case.execute(None)

        assert result.is_err()
        assert result.error.code == "UNAUTHORIZED"

    async def test_privileged_failure_is_internal_error(self, use_case, scoped_repo, privileged_repo):
        scoped_repo.get_by_auth_id = AsyncMock(return_value=None)
        privileged_repo.get_by_auth_id = AsyncMock(side_effect=Exception("db down"))

        result = await use_case.execute(AuthIdentity(auth_id="auth_1"))

        assert result.is_err()
        assert result.error.code == "INTERNAL_ERROR"

    async def test_super_admin_flag_carried(self, use_case, scoped_repo, privileged_repo):
        root = User(id="root", auth_id="auth_root", organization_id=None, role=UserRole.ADMIN, is_super_admin=True)
        scoped_repo.get_by_auth_id = AsyncMock(return_value=None)
        privileged_repo.get_by_auth_id = AsyncMock(return_value=root)

        result = await use_case.execute(AuthIdentity(auth_id="auth_root"))

        assert result.value.has_super_admin_access is True
        assert result.value.organization_id is None
