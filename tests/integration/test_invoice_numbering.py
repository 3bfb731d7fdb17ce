"""Integration tests for invoice numbering under contention

A second client creating the same (prefix, year) counter row between our
read and our insert must not break invoice creation.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import create_engine, event
from sqlmodel import Session, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.invoice_history_repository import SqlAlchemyInvoiceHistoryRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.organization_repository import SqlAlchemyOrganizationRepository
from src.adapter.services.invoice_number_sequence import SqlAlchemyInvoiceNumberSequence
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices import CreateInvoice, InvoiceNumberGenerator
from src.app.use_cases.invoices.dtos import CreateInvoiceCommandDTO, LineItemInputDTO
from src.domain.access import Principal
from src.domain.invoice_history import InvoiceHistory
from src.domain.invoice_sequence import InvoiceSequence
from src.domain.user import UserRole


def build_use_case(session: AsyncSession) -> CreateInvoice:
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    return CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        invoice_repo,
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyInvoiceHistoryRepository(session),
        SqlAlchemyOrganizationRepository(session),
        InvoiceNumberGenerator(invoice_repo, SqlAlchemyInvoiceNumberSequence(session), backoff_ms=0),
    )


def command() -> CreateInvoiceCommandDTO:
    return CreateInvoiceCommandDTO(
        client_name="Acme Client",
        issue_date=date(2024, 1, 1),
        line_items=[LineItemInputDTO(description="Consulting", quantity=Decimal("1"), unit_price=Decimal("100"))],
    )


@pytest.fixture
def principal(organization):
    return Principal(user_id="user_admin", organization_id=organization.id, role=UserRole.ADMIN)


@pytest.mark.asyncio
class TestInvoiceNumberContention:

    async def test_lost_counter_race_still_creates_invoice(self, engine, db_session, principal):
        """
        Given another client commits the ACME counter row between our read and our insert
        When an invoice is created
        Then the failed counter insert is retried and the invoice gets the next number
        """
        year = datetime.now().year
        competitor = create_engine(f"sqlite:///{engine.url.database}")
        raced = []

        def commit_competing_counter(session, flush_context, instances):
            if raced or not any(isinstance(obj, InvoiceSequence) for obj in session.new):
                return
            raced.append(True)
            with Session(competitor) as other:
                other.add(InvoiceSequence(prefix="ACME", year=year, last_value=1))
                other.commit()

        event.listen(db_session.sync_session, "before_flush", commit_competing_counter)
        try:
            result = await build_use_case(db_session).execute(principal, command())
        finally:
            event.remove(db_session.sync_session, "before_flush", commit_competing_counter)
            competitor.dispose()

        assert raced == [True]
        assert result.is_ok(), result.error
        assert result.value.invoice_number == f"ACME-{year}-000002"

        sequences = (await db_session.execute(select(InvoiceSequence))).scalars().all()
        assert [(s.prefix, s.year, s.last_value) for s in sequences] == [("ACME", year, 2)]

        history = (
            await db_session.execute(
                select(InvoiceHistory).where(InvoiceHistory.invoice_id == result.value.id)
            )
        ).scalars().all()
        assert len(history) == 1

    async def test_sequential_numbers_without_contention(self, db_session, principal):
        year = datetime.now().year
        use_case = build_use_case(db_session)

        first = await use_case.execute(principal, command())
        second = await use_case.execute(principal, command())

        assert first.value.invoice_number == f"ACME-{year}-000001"
        assert second.value.invoice_number == f"ACME-{year}-000002"
