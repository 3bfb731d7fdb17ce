"""SQLAlchemy Invoice Line Repository Implementation"""

from typing import List
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice_line import InvoiceLineItem


class SqlAlchemyInvoiceLineRepository(InvoiceLineRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceLineItem]:
        statement = (
            select(InvoiceLineItem)
            .where(InvoiceLineItem.invoice_id == invoice_id)
            .order_by(InvoiceLineItem.display_order)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create_many(self, line_items: List[InvoiceLineItem]) -> List[InvoiceLineItem]:
        if not line_items:
            return []
        self.session.add_all(line_items)
        await self.session.flush()
        for line_item in line_items:
            await self.session.refresh(line_item)
        return line_items

    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        statement = delete(InvoiceLineItem).where(InvoiceLineItem.invoice_id == invoice_id)
        result = await self.session.execute(statement)
        await self.session.flush()
        return result.rowcount or 0
