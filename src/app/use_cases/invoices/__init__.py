"""Invoice engine use cases"""
from .numbering import InvoiceNumberGenerator
from .create_invoice import CreateInvoice
from .update_invoice import UpdateInvoice
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .send_invoice import SendInvoice
from .mark_invoice_paid import MarkInvoicePaid
from .delete_invoice import DeleteInvoice
from .generate_recurring_invoice import GenerateRecurringInvoice
from .render_invoice_pdf import RenderInvoicePdf
from .dtos import (
    LineItemInputDTO,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    ListInvoicesQueryDTO,
    SendInvoiceCommandDTO,
    RecordPaymentCommandDTO,
    InvoiceLineDTO,
    InvoicePaymentDTO,
    InvoiceResponseDTO,
    InvoiceListResponseDTO,
    PaymentResultDTO,
    RecurringRunResultDTO,
    InvoicePdfDTO,
)

__all__ = [
    "InvoiceNumberGenerator",
    "CreateInvoice",
    "UpdateInvoice",
    "GetInvoice",
    "ListInvoices",
    "SendInvoice",
    "MarkInvoicePaid",
    "DeleteInvoice",
    "GenerateRecurringInvoice",
    "RenderInvoicePdf",
    "LineItemInputDTO",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "ListInvoicesQueryDTO",
    "SendInvoiceCommandDTO",
    "RecordPaymentCommandDTO",
    "InvoiceLineDTO",
    "InvoicePaymentDTO",
    "InvoiceResponseDTO",
    "InvoiceListResponseDTO",
    "PaymentResultDTO",
    "RecurringRunResultDTO",
    "InvoicePdfDTO",
]
