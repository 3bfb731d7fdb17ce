"""SQLAlchemy Invoice Number Sequence Implementation"""

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.invoice_number_sequence import InvoiceNumberSequence
from src.domain.invoice_sequence import InvoiceSequence


class SqlAlchemyInvoiceNumberSequence(InvoiceNumberSequence):
    """
    Counter row per (prefix, year), incremented under SELECT FOR UPDATE

    Produces {prefix}-{year}-{value:06d}. Each increment runs in a savepoint:
    losing the race to create the counter row rolls back only that attempt
    and leaves the caller's transaction usable, so the next attempt picks
    up the row the competitor committed.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def next_number(self, prefix: str, year: int) -> str:
        statement = (
            select(InvoiceSequence)
            .where(InvoiceSequence.prefix == prefix)
            .where(InvoiceSequence.year == year)
            .with_for_update()
        )
        result = await self.session.execute(statement)
        sequence = result.scalar_one_or_none()

        async with self.session.begin_nested():
            if sequence is None:
                sequence = InvoiceSequence(prefix=prefix, year=year, last_value=0)

            sequence.last_value += 1
            self.session.add(sequence)
            await self.session.flush()

        return f"{prefix}-{year}-{sequence.last_value:06d}"
