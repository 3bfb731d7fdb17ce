"""Unit tests for InvoiceNumberGenerator"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices import InvoiceNumberGenerator

FIXED_NOW = datetime(2024, 3, 5, 12, 0, 0)


@pytest.fixture
def mock_sequence():
    sequence = MagicMock()
    sequence.next_number = AsyncMock(side_effect=lambda prefix, year: f"{prefix}-{year}-000001")
    return sequence


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.exists_by_number = AsyncMock(return_value=False)
    return repo


@pytest.fixture
def mock_sleep():
    return AsyncMock()


@pytest.fixture
def generator(mock_invoice_repo, mock_sequence, mock_sleep):
    return InvoiceNumberGenerator(
        mock_invoice_repo,
        mock_sequence,
        max_attempts=5,
        backoff_ms=100,
        sleep=mock_sleep,
        clock=lambda: FIXED_NOW,
    )


@pytest.mark.asyncio
class TestInvoiceNumberGenerator:

    async def test_first_candidate_free(self, generator, mock_sequence, mock_sleep):
        number = await generator.generate("ACME")

        assert number == "ACME-2024-000001"
        mock_sequence.next_number.assert_awaited_once_with("ACME", 2024)
        mock_sleep.assert_not_called()

    async def test_default_prefix(self, generator):
        assert await generator.generate() == "INV-2024-000001"

    async def test_retries_after_collisions_with_backoff(
        self, generator, mock_invoice_repo, mock_sequence, mock_sleep
    ):
        """
        Given the first two candidates already exist
        When a number is generated
        Then the third candidate is returned after waiting 0.2s and 0.4s
        """
        mock_sequence.next_number = AsyncMock(
            side_effect=["ACME-2024-000001", "ACME-2024-000002", "ACME-2024-000003"]
        )
        mock_invoice_repo.exists_by_number = AsyncMock(side_effect=[True, True, False])

        number = await generator.generate("ACME")

        assert number == "ACME-2024-000003"
        assert mock_invoice_repo.exists_by_number.await_count == 3
        assert [c.args[0] for c in mock_sleep.await_args_list] == [0.2, 0.4]

    async def test_sequence_errors_count_as_attempts(self, generator, mock_sequence):
        mock_sequence.next_number = AsyncMock(
            side_effect=[Exception("sequence unavailable"), "ACME-2024-000007"]
        )

        assert await generator.generate("ACME") == "ACME-2024-000007"

    async def test_fallback_after_exhausting_attempts(
        self, generator, mock_invoice_repo, mock_sleep
    ):
        mock_invoice_repo.exists_by_number = AsyncMock(return_value=True)

        number = await generator.generate("ACME")

        epoch_ms = str(int(FIXED_NOW.timestamp() * 1000))
        assert number == f"ACME-2024-{epoch_ms[-6:]}"
        assert mock_invoice_repo.exists_by_number.await_count == 5
        # no wait after the last attempt
        assert mock_sleep.await_count == 4
