"""PDF Generation Service Interface

Defines the contract for PDF generation operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLineItem


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides PDF rendering of invoices.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        line_items: List[InvoiceLineItem],
        company_name: str = "Tenant Ops",
    ) -> bytes:
        """
        Render an invoice PDF

        Args:
            invoice: Invoice entity with billing details
            line_items: Line items in display order
            company_name: Issuer name printed in the header

        Returns:
            PDF document as bytes
        """
        pass
