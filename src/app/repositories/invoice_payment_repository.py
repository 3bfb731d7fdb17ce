"""Invoice Payment Repository Interface"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List
from src.domain.invoice_payment import InvoicePayment


class InvoicePaymentRepository(ABC):

    @abstractmethod
    async def create(self, payment: InvoicePayment) -> InvoicePayment:
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoicePayment]:
        """Payments of an invoice, most recent payment_date first"""
        pass

    @abstractmethod
    async def total_paid(self, invoice_id: str) -> Decimal:
        """Sum of every payment recorded for the invoice (0 when none)"""
        pass
