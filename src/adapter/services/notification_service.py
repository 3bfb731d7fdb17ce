"""Notification Service Implementations

Provides concrete implementations for invoice event notifications.
"""

import logging
from typing import List, Optional
import httpx
from src.app.services.notification_service import InvoiceEvent, NotificationService
from src.domain.invoice import Invoice

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that logs invoice events

    Useful for development and testing, or as a fallback.
    """

    async def send_invoice_event(self, invoice: Invoice, event: InvoiceEvent) -> bool:
        logger.info(
            f"[INVOICE EVENT] {event.value}: {invoice.invoice_number} "
            f"(organization={invoice.organization_id}, status={invoice.status.value}, "
            f"total={invoice.currency} {invoice.total_amount})"
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    Notification service that posts invoice events to a chat webhook

    Sends a JSON payload to the configured URL.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_invoice_event(self, invoice: Invoice, event: InvoiceEvent) -> bool:
        """
        Post invoice event via webhook

        Returns:
            True if webhook call succeeded, False otherwise
        """
        payload = {
            "type": event.value,
            "invoice_id": invoice.id,
            "invoice_number": invoice.invoice_number,
            "organization_id": invoice.organization_id,
            "status": invoice.status.value,
            "client_name": invoice.client_name,
            "total_amount": str(invoice.total_amount),
            "currency": invoice.currency,
            "sent_to_email": invoice.sent_to_email,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
                logger.info(
                    f"Webhook notification {event.value} sent for invoice {invoice.id}"
                )
                return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to send webhook notification for invoice {invoice.id}: {e}")
            return False


class CompositeNotificationService(NotificationService):
    """
    Notification service that delegates to multiple services

    Succeeds if at least one delegate succeeds.
    """

    def __init__(self, services: List[NotificationService]):
        self.services = services

    async def send_invoice_event(self, invoice: Invoice, event: InvoiceEvent) -> bool:
        success = False
        for service in self.services:
            try:
                if await service.send_invoice_event(invoice, event):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        webhook_url: Optional webhook URL. If provided, creates composite
            service with logging + webhook. Otherwise, logging only.

    Returns:
        Configured NotificationService instance
    """
    logging_service = LoggingNotificationService()

    if webhook_url:
        return CompositeNotificationService([
            logging_service,
            WebhookNotificationService(webhook_url),
        ])

    return logging_service
