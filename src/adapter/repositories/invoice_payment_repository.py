"""SQLAlchemy Invoice Payment Repository Implementation"""

from decimal import Decimal
from typing import List
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_payment_repository import InvoicePaymentRepository
from src.domain.invoice_payment import InvoicePayment


class SqlAlchemyInvoicePaymentRepository(InvoicePaymentRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: InvoicePayment) -> InvoicePayment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoicePayment]:
        statement = (
            select(InvoicePayment)
            .where(InvoicePayment.invoice_id == invoice_id)
            .order_by(InvoicePayment.payment_date.desc(), InvoicePayment.created_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def total_paid(self, invoice_id: str) -> Decimal:
        statement = (
            select(func.sum(InvoicePayment.amount))
            .where(InvoicePayment.invoice_id == invoice_id)
        )
        result = await self.session.execute(statement)
        total = result.scalar_one_or_none()
        return Decimal(str(total)) if total is not None else Decimal("0")
