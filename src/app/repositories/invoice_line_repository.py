"""Invoice Line Item Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_line import InvoiceLineItem


class InvoiceLineRepository(ABC):
    """
    Repository interface for InvoiceLineItem persistence
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceLineItem]:
        """
        Retrieve all line items for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceLineItem ordered by display_order
        """
        pass

    @abstractmethod
    async def create_many(self, line_items: List[InvoiceLineItem]) -> List[InvoiceLineItem]:
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        """
        Delete every line item of an invoice

        Returns:
            Number of deleted rows
        """
        pass
