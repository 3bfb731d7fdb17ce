"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Tuple
from datetime import date, datetime
from sqlalchemy import or_
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Every read filters out soft-deleted rows except exists_by_number,
    which guards the unique invoice_number column.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.id == invoice_id)
            .where(Invoice.deleted_at.is_(None))
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_by_organization(
        self,
        organization_id: str,
        status: Optional[InvoiceStatus] = None,
        project_id: Optional[str] = None,
        company_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        conditions = [
            Invoice.organization_id == organization_id,
            Invoice.deleted_at.is_(None),
        ]
        if status:
            conditions.append(Invoice.status == status)
        if project_id:
            conditions.append(Invoice.project_id == project_id)
        if company_id:
            conditions.append(Invoice.company_id == company_id)

        count_statement = select(func.count()).select_from(Invoice).where(*conditions)
        total = (await self.session.execute(count_statement)).scalar_one()

        statement = (
            select(Invoice)
            .where(*conditions)
            .order_by(Invoice.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def update(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def exists_by_number(self, invoice_number: str) -> bool:
        statement = (
            select(func.count())
            .select_from(Invoice)
            .where(Invoice.invoice_number == invoice_number)
        )
        result = await self.session.execute(statement)
        return result.scalar_one() > 0

    async def list_due_recurring(self, today: date) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.is_recurring.is_(True))
            .where(Invoice.deleted_at.is_(None))
            .where(Invoice.next_invoice_date.is_not(None))
            .where(Invoice.next_invoice_date <= today)
            .where(or_(Invoice.recurring_end_date.is_(None), Invoice.recurring_end_date >= today))
            .order_by(Invoice.next_invoice_date)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
