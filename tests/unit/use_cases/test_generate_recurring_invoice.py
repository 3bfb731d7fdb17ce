"""Unit tests for GenerateRecurringInvoice use case"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from libs.result import Return
from src.app import errors
from src.app.use_cases.invoices import GenerateRecurringInvoice
from src.domain.invoice import Invoice, InvoiceStatus, RecurringFrequency
from src.domain.invoice_line import InvoiceLineItem


def make_parent(**overrides):
    data = dict(
        id="parent_1",
        organization_id="org_1",
        invoice_number="ACME-2024-000001",
        status=InvoiceStatus.SENT,
        client_name="Acme Client",
        client_email="billing@acme.test",
        issue_date=date(2024, 1, 1),
        due_date=date(2024, 1, 15),
        subtotal=Decimal("100.00"),
        tax_rate=Decimal("10"),
        tax_amount=Decimal("10.00"),
        total_amount=Decimal("110.00"),
        notes="Monthly retainer",
        is_recurring=True,
        recurring_frequency=RecurringFrequency.MONTHLY,
        next_invoice_date=date(2024, 2, 1),
        created_by="user_admin",
    )
    data.update(overrides)
    return Invoice(**data)


@pytest.fixture
def parent():
    return make_parent()


@pytest.fixture
def mock_invoice_repo(parent):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=parent)
    repo.create = AsyncMock(side_effect=lambda inv: inv)
    repo.update = AsyncMock(side_effect=lambda inv: inv)
    return repo


@pytest.fixture
def mock_invoice_line_repo():
    repo = MagicMock()
    repo.get_by_invoice_id = AsyncMock(
        return_value=[
            InvoiceLineItem(invoice_id="parent_1", description="Retainer", quantity=Decimal("1"),
                            unit_price=Decimal("100"), amount=Decimal("100"), display_order=0),
        ]
    )
    repo.create_many = AsyncMock(side_effect=lambda lines: lines)
    return repo


@pytest.fixture
def mock_number_generator():
    generator = MagicMock()
    generator.generate = AsyncMock(return_value="ACME-2024-000002")
    return generator


@pytest.fixture
def use_case(
    mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_history_repo, mock_number_generator,
    allow_all_authorizer,
):
    return GenerateRecurringInvoice(
        mock_uow,
        mock_invoice_repo,
        mock_invoice_line_repo,
        mock_history_repo,
        mock_number_generator,
        allow_all_authorizer,
    )


@pytest.mark.asyncio
class TestGenerateRecurringInvoice:

    async def test_generates_next_child(self, use_case, parent, mock_uow, mock_number_generator):
        """
        Given a monthly parent issued 2024-01-01 and due 2024-01-15
        When the next invoice is generated on 2024-02-01
        Then the child is dated 2024-02-01, due 2024-02-15, and the parent moves to 2024-03-01
        """
        result = await use_case.execute("parent_1", today=date(2024, 2, 1))

        assert result.is_ok()
        child = result.value
        assert child.issue_date == date(2024, 2, 1)
        assert child.due_date == date(2024, 2, 15)
        assert child.status == InvoiceStatus.DRAFT
        assert child.parent_invoice_id == "parent_1"
        assert child.is_recurring is False
        assert child.invoice_number == "ACME-2024-000002"
        assert child.total_amount == Decimal("110.00")
        assert child.notes == "Monthly retainer"
        assert [line.description for line in child.line_items] == ["Retainer"]
        assert parent.next_invoice_date == date(2024, 3, 1)
        mock_number_generator.generate.assert_awaited_once_with("ACME")
        mock_uow.commit.assert_awaited_once()

    async def test_child_gets_creation_history(self, use_case, mock_history_repo):
        result = await use_case.execute("parent_1", today=date(2024, 2, 1))

        assert len(mock_history_repo.entries) == 1
        entry = mock_history_repo.entries[0]
        assert entry.invoice_id == result.value.id
        assert entry.from_status is None
        assert entry.to_status == InvoiceStatus.DRAFT
        assert entry.changed_by is None

    async def test_overdue_schedule_still_generates(self, use_case):
        result = await use_case.execute("parent_1", today=date(2024, 5, 10))

        assert result.is_ok()
        assert result.value.issue_date == date(2024, 2, 1)

    async def test_child_without_due_date(self, use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_parent(due_date=None))

        result = await use_case.execute("parent_1", today=date(2024, 2, 1))

        assert result.value.due_date is None

    async def test_principal_is_authorized_for_write(
        self, use_case, allow_all_authorizer, admin_principal
    ):
        await use_case.execute("parent_1", today=date(2024, 2, 1), principal=admin_principal)

        access = allow_all_authorizer.execute.call_args.args[1]
        assert access.write is True
        assert access.resource.resource_id == "parent_1"


@pytest.mark.asyncio
class TestGenerateRecurringInvoiceRejections:

    async def test_not_yet_due(self, use_case, mock_invoice_repo, mock_uow):
        result = await use_case.execute("parent_1", today=date(2024, 1, 31))

        assert result.is_err()
        assert result.error.message == "Next invoice date has not been reached"
        mock_invoice_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_series_ended(self, use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_parent(recurring_end_date=date(2024, 1, 31))
        )

        result = await use_case.execute("parent_1", today=date(2024, 2, 1))

        assert result.error.message == "Recurring invoice series has ended"

    async def test_not_recurring(self, use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_parent(is_recurring=False, recurring_frequency=None)
        )

        result = await use_case.execute("parent_1", today=date(2024, 2, 1))

        assert result.error.message == "Parent invoice is not a recurring invoice"

    async def test_next_date_missing(self, use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_parent(next_invoice_date=None))

        result = await use_case.execute("parent_1", today=date(2024, 2, 1))

        assert result.error.message == "Next invoice date is not set"

    async def test_parent_missing(self, use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute("nope", today=date(2024, 2, 1))

        assert result.error.code == "NOT_FOUND"
        assert result.error.message == "Parent invoice not found"

    async def test_access_denied(self, use_case, allow_all_authorizer, outsider_principal):
        allow_all_authorizer.execute = AsyncMock(return_value=Return.err(errors.forbidden()))

        result = await use_case.execute("parent_1", today=date(2024, 2, 1), principal=outsider_principal)

        assert result.error.code == "FORBIDDEN"

    async def test_failure_rolls_back_and_keeps_schedule(
        self, use_case, parent, mock_invoice_line_repo, mock_uow
    ):
        mock_invoice_line_repo.create_many = AsyncMock(side_effect=Exception("db down"))

        result = await use_case.execute("parent_1", today=date(2024, 2, 1))

        assert result.error.code == "INTERNAL_ERROR"
        assert parent.next_invoice_date == date(2024, 2, 1)
        mock_uow.rollback.assert_awaited_once()
