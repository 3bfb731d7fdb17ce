from .storage_scope import StorageScope
from .user_repository import UserRepository
from .membership_repository import MembershipRepository
from .project_repository import ProjectRepository, AllocationRepository
from .template_repository import TemplateRepository
from .invoice_repository import InvoiceRepository
from .invoice_line_repository import InvoiceLineRepository
from .invoice_payment_repository import InvoicePaymentRepository
from .invoice_history_repository import InvoiceHistoryRepository
from .company_repository import CompanyRepository
from .api_key_repository import ApiKeyRepository
from .organization_repository import OrganizationRepository

__all__ = [
    "StorageScope",
    "UserRepository",
    "MembershipRepository",
    "ProjectRepository",
    "AllocationRepository",
    "TemplateRepository",
    "InvoiceRepository",
    "InvoiceLineRepository",
    "InvoicePaymentRepository",
    "InvoiceHistoryRepository",
    "CompanyRepository",
    "ApiKeyRepository",
    "OrganizationRepository",
]
