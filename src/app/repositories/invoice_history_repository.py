"""Invoice History Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_history import InvoiceHistory


class InvoiceHistoryRepository(ABC):

    @abstractmethod
    async def create(self, entry: InvoiceHistory) -> InvoiceHistory:
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceHistory]:
        """History of an invoice, most recent change first"""
        pass
