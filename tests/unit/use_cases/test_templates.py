"""Unit tests for the template use cases"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.access import AuthorizeAccess
from src.app.use_cases.templates import (
    CreateTemplate,
    CreateTemplateCommandDTO,
    DeleteTemplate,
    DuplicateTemplate,
    DuplicateTemplateCommandDTO,
    ListTemplates,
)
from src.domain.access import Principal
from src.domain.template import ProjectTemplate
from src.domain.user import UserRole


def make_template(template_id, created_at, **overrides):
    data = dict(
        id=template_id,
        organization_id="org_1",
        created_by="user_admin",
        name=f"Template {template_id}",
        created_at=created_at,
        updated_at=created_at,
    )
    data.update(overrides)
    return ProjectTemplate(**data)


@pytest.fixture
def authorizer():
    membership_repo = MagicMock()
    membership_repo.is_member = AsyncMock(return_value=False)
    return AuthorizeAccess(membership_repo)


@pytest.fixture
def global_template():
    return make_template(
        "tpl_global",
        datetime(2024, 1, 1),
        organization_id="org_root",
        created_by="user_root",
        name="Agency Onboarding",
        category="onboarding",
        is_publicly_available=True,
    )


@pytest.fixture
def mock_template_repo(global_template):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=global_template)
    repo.create = AsyncMock(side_effect=lambda template: template)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def mock_project_repo():
    repo = MagicMock()
    repo.count_by_templates = AsyncMock(return_value={"tpl_a": 3})
    return repo


@pytest.mark.asyncio
class TestListTemplates:

    async def test_merges_org_and_global_templates_newest_first(
        self, mock_template_repo, mock_project_repo, global_template, admin_principal
    ):
        """
        Given one org template and two publicly available templates, one of them also in the org list
        When the org admin lists templates
        Then each template appears once, newest first, with usage counts
        """
        org_template = make_template("tpl_a", datetime(2024, 3, 1))
        shared = make_template("tpl_b", datetime(2024, 2, 1), is_publicly_available=True)
        mock_template_repo.list_visible_in_organization = AsyncMock(return_value=[org_template, shared])
        mock_template_repo.list_publicly_available = AsyncMock(return_value=[shared, global_template])

        result = await ListTemplates(mock_template_repo, mock_project_repo).execute(admin_principal)

        assert result.is_ok()
        assert [t.id for t in result.value.templates] == ["tpl_a", "tpl_b", "tpl_global"]
        assert result.value.total == 3
        assert [t.usage_count for t in result.value.templates] == [3, 0, 0]

    async def test_pagination(self, mock_template_repo, mock_project_repo, admin_principal):
        templates = [make_template(f"tpl_{i}", datetime(2024, 1, i + 1)) for i in range(5)]
        mock_template_repo.list_visible_in_organization = AsyncMock(return_value=templates)
        mock_template_repo.list_publicly_available = AsyncMock(return_value=[])

        result = await ListTemplates(mock_template_repo, mock_project_repo).execute(
            admin_principal, limit=2, offset=1
        )

        assert [t.id for t in result.value.templates] == ["tpl_3", "tpl_2"]
        assert result.value.total == 5
        assert result.value.limit == 2
        assert result.value.offset == 1

    async def test_super_admin_sees_everything(
        self, mock_template_repo, mock_project_repo, super_admin_principal
    ):
        mock_template_repo.list_all = AsyncMock(
            return_value=([make_template("tpl_x", datetime(2024, 1, 1), organization_id="org_9")], 1)
        )

        result = await ListTemplates(mock_template_repo, mock_project_repo).execute(super_admin_principal)

        assert [t.id for t in result.value.templates] == ["tpl_x"]
        mock_template_repo.list_all.assert_awaited_once_with(10, 0)

    async def test_usage_count_failure_degrades_to_zero(
        self, mock_template_repo, mock_project_repo, admin_principal
    ):
        mock_template_repo.list_visible_in_organization = AsyncMock(
            return_value=[make_template("tpl_a", datetime(2024, 1, 1))]
        )
        mock_template_repo.list_publicly_available = AsyncMock(return_value=[])
        mock_project_repo.count_by_templates = AsyncMock(side_effect=Exception("timeout"))

        result = await ListTemplates(mock_template_repo, mock_project_repo).execute(admin_principal)

        assert result.is_ok()
        assert result.value.templates[0].usage_count == 0

    async def test_requires_organization(self, mock_template_repo, mock_project_repo):
        orphan = Principal(user_id="user_x", organization_id=None, role=UserRole.ADMIN)

        result = await ListTemplates(mock_template_repo, mock_project_repo).execute(orphan)

        assert result.error.code == "BAD_REQUEST"
        assert result.error.message == "User is not assigned to an organization"


@pytest.mark.asyncio
class TestCreateTemplate:

    async def test_pm_creates_org_template(self, mock_uow, mock_template_repo, authorizer):
        pm = Principal(user_id="user_pm", organization_id="org_1", role=UserRole.PM)
        command = CreateTemplateCommandDTO(name="  Website Build  ", category="web")

        result = await CreateTemplate(mock_uow, mock_template_repo, authorizer).execute(pm, command)

        assert result.is_ok()
        assert result.value.name == "Website Build"
        assert result.value.organization_id == "org_1"
        assert result.value.created_by == "user_pm"
        assert result.value.version == "1.0.0"
        mock_uow.commit.assert_awaited_once()

    async def test_member_cannot_create(self, mock_uow, mock_template_repo, authorizer, member_principal):
        result = await CreateTemplate(mock_uow, mock_template_repo, authorizer).execute(
            member_principal, CreateTemplateCommandDTO(name="Nope")
        )

        assert result.error.code == "FORBIDDEN"
        mock_template_repo.create.assert_not_called()

    async def test_publicly_available_needs_super_admin(
        self, mock_uow, mock_template_repo, authorizer, admin_principal, super_admin_principal
    ):
        command = CreateTemplateCommandDTO(name="Global", is_publicly_available=True)
        use_case = CreateTemplate(mock_uow, mock_template_repo, authorizer)

        denied = await use_case.execute(admin_principal, command)
        allowed = await use_case.execute(super_admin_principal, command)

        assert denied.error.code == "FORBIDDEN"
        assert allowed.is_ok()
        assert allowed.value.is_publicly_available is True


@pytest.mark.asyncio
class TestDuplicateTemplate:

    async def test_duplicate_global_template_into_org(
        self, mock_uow, mock_template_repo, authorizer, outsider_principal
    ):
        """
        Given a publicly available template owned by another organization
        When an org admin duplicates it
        Then a private copy named "<original> (Copy)" is owned by the caller's organization
        """
        result = await DuplicateTemplate(mock_uow, mock_template_repo, authorizer).execute(
            outsider_principal, "tpl_global", DuplicateTemplateCommandDTO()
        )

        assert result.is_ok()
        copy = result.value
        assert copy.name == "Agency Onboarding (Copy)"
        assert copy.organization_id == "org_2"
        assert copy.created_by == "user_other"
        assert copy.category == "onboarding"
        assert copy.is_public is False
        assert copy.is_publicly_available is False
        assert copy.id != "tpl_global"

    async def test_custom_name(self, mock_uow, mock_template_repo, authorizer, admin_principal):
        result = await DuplicateTemplate(mock_uow, mock_template_repo, authorizer).execute(
            admin_principal, "tpl_global", DuplicateTemplateCommandDTO(name="Our Onboarding")
        )

        assert result.value.name == "Our Onboarding"

    async def test_private_template_of_other_org_is_forbidden(
        self, mock_uow, mock_template_repo, authorizer, outsider_principal
    ):
        mock_template_repo.get_by_id = AsyncMock(return_value=make_template("tpl_a", datetime(2024, 1, 1)))

        result = await DuplicateTemplate(mock_uow, mock_template_repo, authorizer).execute(
            outsider_principal, "tpl_a", DuplicateTemplateCommandDTO()
        )

        assert result.error.code == "FORBIDDEN"
        mock_template_repo.create.assert_not_called()

    async def test_missing_template(self, mock_uow, mock_template_repo, authorizer, admin_principal):
        mock_template_repo.get_by_id = AsyncMock(return_value=None)

        result = await DuplicateTemplate(mock_uow, mock_template_repo, authorizer).execute(
            admin_principal, "nope", DuplicateTemplateCommandDTO()
        )

        assert result.error.message == "Template not found"


@pytest.mark.asyncio
class TestDeleteTemplate:

    async def test_publicly_available_template_is_read_only(
        self, mock_uow, mock_template_repo, authorizer, admin_principal
    ):
        result = await DeleteTemplate(mock_uow, mock_template_repo, authorizer).execute(
            admin_principal, "tpl_global"
        )

        assert result.error.code == "FORBIDDEN"
        mock_template_repo.delete.assert_not_called()

    async def test_super_admin_deletes_global_template(
        self, mock_uow, mock_template_repo, authorizer, super_admin_principal, global_template
    ):
        result = await DeleteTemplate(mock_uow, mock_template_repo, authorizer).execute(
            super_admin_principal, "tpl_global"
        )

        assert result.is_ok()
        mock_template_repo.delete.assert_awaited_once_with(global_template)
        mock_uow.commit.assert_awaited_once()

    async def test_org_admin_deletes_own_template(self, mock_uow, mock_template_repo, authorizer, admin_principal):
        mock_template_repo.get_by_id = AsyncMock(return_value=make_template("tpl_a", datetime(2024, 1, 1)))

        result = await DeleteTemplate(mock_uow, mock_template_repo, authorizer).execute(admin_principal, "tpl_a")

        assert result.is_ok()
