"""Recurring Invoice Background Worker

Generates the next invoice of every recurring series that is due.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
import time
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.invoice_history_repository import SqlAlchemyInvoiceHistoryRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.invoice_number_sequence import SqlAlchemyInvoiceNumberSequence
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices import (
    GenerateRecurringInvoice,
    InvoiceNumberGenerator,
    RecurringRunResultDTO,
)

logger = logging.getLogger(__name__)


class RecurringInvoiceWorker:
    """
    Background worker for recurring invoices

    Features:
    - Finds recurring parents whose next_invoice_date has been reached
    - Generates each child in its own session so one failure never
      blocks the rest of the run
    - Safe to re-run: a parent's next date advances with each child, so a
      period is generated once
    - Can run once or continuously

    Usage:
        worker = RecurringInvoiceWorker()
        result = await worker.run_once(date(2024, 2, 1))

        worker = RecurringInvoiceWorker()
        await worker.run_forever()
    """

    def __init__(self, db_uri: Optional[str] = None):
        self.db_uri = db_uri or ApplicationConfig.DB_URI

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("RecurringInvoiceWorker initialized")

    def _build_use_case(self, session: AsyncSession) -> GenerateRecurringInvoice:
        invoice_repo = SqlAlchemyInvoiceRepository(session)
        number_generator = InvoiceNumberGenerator(
            invoice_repo,
            SqlAlchemyInvoiceNumberSequence(session),
            max_attempts=ApplicationConfig.INVOICE_NUMBER_MAX_ATTEMPTS,
            backoff_ms=ApplicationConfig.INVOICE_NUMBER_BACKOFF_MS,
            default_prefix=ApplicationConfig.DEFAULT_INVOICE_PREFIX,
        )
        return GenerateRecurringInvoice(
            uow=SqlAlchemyUnitOfWork(session),
            invoice_repo=invoice_repo,
            invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
            history_repo=SqlAlchemyInvoiceHistoryRepository(session),
            number_generator=number_generator,
        )

    async def run_once(self, run_date: Optional[date] = None) -> RecurringRunResultDTO:
        """
        Generate every recurring invoice due on ``run_date`` (default today)

        Returns:
            RecurringRunResultDTO with counts and the generated invoice ids
        """
        run_date = run_date or date.today()
        start_time = time.time()
        logger.info(f"Starting recurring invoice run for {run_date.isoformat()}")

        async with self.async_session_factory() as session:
            due = await SqlAlchemyInvoiceRepository(session).list_due_recurring(run_date)
            parent_ids = [invoice.id for invoice in due]

        logger.info(f"Found {len(parent_ids)} recurring invoices due")

        generated_ids = []
        failed = 0
        for parent_id in parent_ids:
            try:
                async with self.async_session_factory() as session:
                    result = await self._build_use_case(session).execute(parent_id, today=run_date)

                if result.is_err():
                    logger.error(
                        f"Failed to generate recurring invoice from {parent_id}: {result.error.message}"
                    )
                    failed += 1
                    continue

                generated_ids.append(result.value.id)
                logger.info(
                    f"Generated invoice {result.value.invoice_number} from recurring parent {parent_id}"
                )
            except Exception as e:
                logger.error(f"Unexpected error generating recurring invoice from {parent_id}: {e}")
                failed += 1

        execution_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Recurring invoice run complete: {len(generated_ids)}/{len(parent_ids)} generated, "
            f"{failed} failed, {execution_time_ms}ms"
        )

        return RecurringRunResultDTO(
            run_date=run_date,
            total_due=len(parent_ids),
            generated=len(generated_ids),
            failed=failed,
            invoice_ids=generated_ids,
        )

    async def run_forever(self, interval_seconds: Optional[int] = None):
        """Run continuously, one pass every ``interval_seconds``"""
        interval_seconds = interval_seconds or ApplicationConfig.RECURRING_INVOICES_INTERVAL_SECONDS
        logger.info(f"Starting continuous recurring invoice generation with {interval_seconds}s interval")

        while True:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Recurring invoice cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("RecurringInvoiceWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Generate everything due today
        python -m src.worker.recurring_invoices

        # Generate as of a given date
        python -m src.worker.recurring_invoices --date 2024-02-01

        # Run continuously
        python -m src.worker.recurring_invoices --continuous
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Recurring Invoice Worker")
    parser.add_argument("--date", type=date.fromisoformat, help="Run date (YYYY-MM-DD)")
    parser.add_argument("--continuous", action="store_true", help="Run continuously")
    parser.add_argument("--interval", type=int, help="Seconds between passes in continuous mode")
    args = parser.parse_args()

    if not ApplicationConfig.RECURRING_INVOICES_ENABLED:
        logger.info("Recurring invoices are disabled (RECURRING_INVOICES_ENABLED=0)")
        return

    worker = RecurringInvoiceWorker()

    try:
        if args.continuous:
            await worker.run_forever(args.interval)
        else:
            result = await worker.run_once(args.date)
            print("Recurring invoice run complete:")
            print(f"  Due: {result.total_due}")
            print(f"  Generated: {result.generated}")
            print(f"  Failed: {result.failed}")
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
