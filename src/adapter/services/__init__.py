from .unit_of_work import SqlAlchemyUnitOfWork
from .auth_provider import SqlAlchemyAuthProvider, hash_token
from .invoice_number_sequence import SqlAlchemyInvoiceNumberSequence
from .secret_cipher import FernetSecretCipher
from .pdf_service import ReportLabPdfService
from .notification_service import (
    LoggingNotificationService,
    WebhookNotificationService,
    CompositeNotificationService,
    create_notification_service,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyAuthProvider",
    "hash_token",
    "SqlAlchemyInvoiceNumberSequence",
    "FernetSecretCipher",
    "ReportLabPdfService",
    "LoggingNotificationService",
    "WebhookNotificationService",
    "CompositeNotificationService",
    "create_notification_service",
]
