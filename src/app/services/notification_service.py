"""Notification Service Interface

Defines the contract for fire-and-forget invoice notifications.
"""

from abc import ABC, abstractmethod
from enum import Enum
from src.domain.invoice import Invoice


class InvoiceEvent(str, Enum):
    SENT = "invoice_sent"
    PAID = "invoice_paid"
    RECURRING_GENERATED = "recurring_invoice_generated"


class NotificationService(ABC):
    """
    Abstract notification service for invoice events

    Implementations can send notifications via:
    - Logging
    - Chat webhook (HTTP POST)
    - Composite of the above

    Callers treat notifications as best effort: a failure is logged and
    never fails the operation that triggered it.
    """

    @abstractmethod
    async def send_invoice_event(self, invoice: Invoice, event: InvoiceEvent) -> bool:
        """
        Send a notification about an invoice event

        Args:
            invoice: Invoice the event is about
            event: What happened

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
