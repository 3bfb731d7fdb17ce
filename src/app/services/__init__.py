from .unit_of_work import UnitOfWork
from .notification_service import NotificationService, InvoiceEvent
from .pdf_service import PdfService
from .auth_provider import AuthProvider
from .invoice_number_sequence import InvoiceNumberSequence
from .secret_cipher import SecretCipher

__all__ = [
    "UnitOfWork",
    "NotificationService",
    "InvoiceEvent",
    "PdfService",
    "AuthProvider",
    "InvoiceNumberSequence",
    "SecretCipher",
]
