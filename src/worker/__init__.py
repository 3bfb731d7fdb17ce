"""Background workers for the ops service"""
from .recurring_invoices import RecurringInvoiceWorker

__all__ = ["RecurringInvoiceWorker"]
