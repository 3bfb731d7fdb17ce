"""SQLAlchemy Invoice History Repository Implementation"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_history_repository import InvoiceHistoryRepository
from src.domain.invoice_history import InvoiceHistory


class SqlAlchemyInvoiceHistoryRepository(InvoiceHistoryRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: InvoiceHistory) -> InvoiceHistory:
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceHistory]:
        statement = (
            select(InvoiceHistory)
            .where(InvoiceHistory.invoice_id == invoice_id)
            .order_by(InvoiceHistory.changed_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
