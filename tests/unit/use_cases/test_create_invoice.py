"""Unit tests for CreateInvoice use case

Tests cover:
- Totals and line amounts
- Number prefix resolution
- Recurring setup
- Validation failures
- Rollback on storage failure
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices import CreateInvoice
from src.app.use_cases.invoices.dtos import CreateInvoiceCommandDTO, LineItemInputDTO
from src.domain.access import Principal
from src.domain.invoice import InvoiceStatus, RecurringFrequency
from src.domain.organization import Organization
from src.domain.user import UserRole


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda invoice: invoice)
    return repo


@pytest.fixture
def mock_invoice_line_repo():
    repo = MagicMock()
    repo.create_many = AsyncMock(side_effect=lambda lines: lines)
    return repo


@pytest.fixture
def mock_organization_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(
        return_value=Organization(id="org_1", name="Acme", slug="acme", invoice_prefix="ACME")
    )
    return repo


@pytest.fixture
def mock_number_generator():
    generator = MagicMock()
    generator.generate = AsyncMock(return_value="ACME-2024-000001")
    return generator


@pytest.fixture
def create_invoice_use_case(
    mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_history_repo,
    mock_organization_repo, mock_number_generator
):
    return CreateInvoice(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        invoice_line_repo=mock_invoice_line_repo,
        history_repo=mock_history_repo,
        organization_repo=mock_organization_repo,
        number_generator=mock_number_generator,
    )


@pytest.fixture
def sample_command():
    return CreateInvoiceCommandDTO(
        client_name="Acme Client",
        client_email="billing@client.test",
        issue_date=date(2024, 1, 1),
        due_date=date(2024, 1, 15),
        tax_rate=Decimal("8"),
        line_items=[
            LineItemInputDTO(description="Consulting", quantity=Decimal("1"), unit_price=Decimal("100")),
            LineItemInputDTO(description="Support", quantity=Decimal("1"), unit_price=Decimal("25")),
        ],
    )


@pytest.mark.asyncio
class TestCreateInvoiceSuccess:

    async def test_computes_totals(
        self, create_invoice_use_case, mock_uow, admin_principal, sample_command
    ):
        """
        Given: Lines of 100 and 25 at 8% tax
        When: The invoice is created
        Then: subtotal 125.00, tax 10.00, total 135.00
        """
        result = await create_invoice_use_case.execute(admin_principal, sample_command)

        assert result.is_ok()
        invoice = result.value
        assert invoice.subtotal == Decimal("125.00")
        assert invoice.tax_amount == Decimal("10.00")
        assert invoice.total_amount == Decimal("135.00")
        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.organization_id == "org_1"
        assert invoice.invoice_number == "ACME-2024-000001"
        mock_uow.commit.assert_awaited_once()

    async def test_line_items_keep_input_order(
        self, create_invoice_use_case, mock_invoice_line_repo, admin_principal, sample_command
    ):
        result = await create_invoice_use_case.execute(admin_principal, sample_command)

        lines = result.value.line_items
        assert [line.description for line in lines] == ["Consulting", "Support"]
        assert [line.display_order for line in lines] == [0, 1]
        assert lines[0].amount == Decimal("100.00")
        created = mock_invoice_line_repo.create_many.call_args.args[0]
        assert all(line.invoice_id == result.value.id for line in created)

    async def test_explicit_amount_is_kept(
        self, create_invoice_use_case, admin_principal, sample_command
    ):
        sample_command.line_items = [
            LineItemInputDTO(description="Fixed fee", quantity=Decimal("3"), unit_price=Decimal("10"), amount=Decimal("25"))
        ]

        result = await create_invoice_use_case.execute(admin_principal, sample_command)

        assert result.value.subtotal == Decimal("25.00")

    async def test_uses_organization_prefix(
        self, create_invoice_use_case, mock_number_generator, admin_principal, sample_command
    ):
        await create_invoice_use_case.execute(admin_principal, sample_command)

        mock_number_generator.generate.assert_awaited_once_with("ACME")

    async def test_command_prefix_wins(
        self, create_invoice_use_case, mock_number_generator, mock_organization_repo, admin_principal, sample_command
    ):
        sample_command.prefix = "EU"

        await create_invoice_use_case.execute(admin_principal, sample_command)

        mock_number_generator.generate.assert_awaited_once_with("EU")
        mock_organization_repo.get_by_id.assert_not_called()

    async def test_recurring_sets_next_invoice_date(
        self, create_invoice_use_case, admin_principal, sample_command
    ):
        sample_command.is_recurring = True
        sample_command.recurring_frequency = RecurringFrequency.MONTHLY

        result = await create_invoice_use_case.execute(admin_principal, sample_command)

        assert result.value.is_recurring is True
        assert result.value.next_invoice_date == date(2024, 2, 1)

    async def test_stamps_creator(
        self, create_invoice_use_case, mock_invoice_repo, admin_principal, sample_command
    ):
        await create_invoice_use_case.execute(admin_principal, sample_command)

        invoice = mock_invoice_repo.create.call_args.args[0]
        assert invoice.created_by == admin_principal.user_id

    async def test_records_creation_history(
        self, create_invoice_use_case, mock_history_repo, admin_principal, sample_command
    ):
        """
        Given: A valid draft
        When: The invoice is created
        Then: One history entry (none -> draft) is written before the commit
        """
        result = await create_invoice_use_case.execute(admin_principal, sample_command)

        assert len(mock_history_repo.entries) == 1
        entry = mock_history_repo.entries[0]
        assert entry.invoice_id == result.value.id
        assert entry.from_status is None
        assert entry.to_status == InvoiceStatus.DRAFT
        assert entry.changed_by == admin_principal.user_id
        assert [h.to_status for h in result.value.history] == [InvoiceStatus.DRAFT]


@pytest.mark.asyncio
class TestCreateInvoiceValidation:

    async def test_requires_organization(self, create_invoice_use_case, sample_command):
        principal = Principal(user_id="u", organization_id=None, role=UserRole.ADMIN)

        result = await create_invoice_use_case.execute(principal, sample_command)

        assert result.is_err()
        assert result.error.code == "BAD_REQUEST"

    async def test_rejects_zero_quantity(
        self, create_invoice_use_case, mock_invoice_repo, admin_principal, sample_command
    ):
        sample_command.line_items[0].quantity = Decimal("0")

        result = await create_invoice_use_case.execute(admin_principal, sample_command)

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.message == "Line item quantity must be greater than 0"
        mock_invoice_repo.create.assert_not_called()

    async def test_rejects_tax_rate_out_of_range(self, create_invoice_use_case, admin_principal, sample_command):
        sample_command.tax_rate = Decimal("101")

        result = await create_invoice_use_case.execute(admin_principal, sample_command)

        assert result.error.message == "Tax rate must be between 0 and 100"

    async def test_rejects_recurring_without_frequency(self, create_invoice_use_case, admin_principal, sample_command):
        sample_command.is_recurring = True

        result = await create_invoice_use_case.execute(admin_principal, sample_command)

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"

    async def test_rejects_missing_client(self, create_invoice_use_case, admin_principal, sample_command):
        sample_command.client_name = "  "

        result = await create_invoice_use_case.execute(admin_principal, sample_command)

        assert result.error.message == "Client name is required"


@pytest.mark.asyncio
class TestCreateInvoiceFailure:

    async def test_line_insert_failure_rolls_back(
        self, create_invoice_use_case, mock_invoice_line_repo, mock_uow, admin_principal, sample_command
    ):
        """Header and lines share one transaction"""
        mock_invoice_line_repo.create_many = AsyncMock(side_effect=Exception("insert failed"))

        result = await create_invoice_use_case.execute(admin_principal, sample_command)

        assert result.is_err()
        assert result.error.code == "INTERNAL_ERROR"
        mock_uow.rollback.assert_awaited_once()
        mock_uow.commit.assert_not_called()
