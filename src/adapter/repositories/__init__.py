from .user_repository import SqlAlchemyUserRepository
from .membership_repository import SqlAlchemyMembershipRepository
from .organization_repository import SqlAlchemyOrganizationRepository
from .project_repository import SqlAlchemyProjectRepository, SqlAlchemyAllocationRepository
from .template_repository import SqlAlchemyTemplateRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_line_repository import SqlAlchemyInvoiceLineRepository
from .invoice_payment_repository import SqlAlchemyInvoicePaymentRepository
from .invoice_history_repository import SqlAlchemyInvoiceHistoryRepository
from .company_repository import SqlAlchemyCompanyRepository
from .api_key_repository import SqlAlchemyApiKeyRepository

__all__ = [
    "SqlAlchemyUserRepository",
    "SqlAlchemyMembershipRepository",
    "SqlAlchemyOrganizationRepository",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyAllocationRepository",
    "SqlAlchemyTemplateRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceLineRepository",
    "SqlAlchemyInvoicePaymentRepository",
    "SqlAlchemyInvoiceHistoryRepository",
    "SqlAlchemyCompanyRepository",
    "SqlAlchemyApiKeyRepository",
]
