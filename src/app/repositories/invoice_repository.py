"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, List, Tuple
from src.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Soft-deleted invoices are invisible to every read method.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice if found and not deleted, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_organization(
        self,
        organization_id: str,
        status: Optional[InvoiceStatus] = None,
        project_id: Optional[str] = None,
        company_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        """
        Retrieve invoices of an organization, newest first

        Args:
            organization_id: Organization identifier
            status: Optional filter by status
            project_id: Optional filter by project
            company_id: Optional filter by company
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            Tuple of (page of invoices, total matching count)
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def exists_by_number(self, invoice_number: str) -> bool:
        """
        Check whether any invoice (deleted ones included) uses this number

        Args:
            invoice_number: Candidate invoice number

        Returns:
            True if the number is taken
        """
        pass

    @abstractmethod
    async def list_due_recurring(self, today: date) -> List[Invoice]:
        """
        Retrieve recurring invoices whose next_invoice_date <= today

        Args:
            today: Reference date

        Returns:
            List of recurring parent invoices
        """
        pass
