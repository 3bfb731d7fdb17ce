from .base import BaseModel, generate_uuid
from .user import User, UserRole
from .organization import Organization
from .auth_session import AuthSession
from .access import (
    AuthIdentity,
    Principal,
    ResourceDescriptor,
    RoleRequirement,
    SuperAdminOnly,
    ResourceAccess,
)
from .membership import ResourceMember
from .project import Project, MemberAllocation
from .template import ProjectTemplate
from .invoice import Invoice, InvoiceStatus, RecurringFrequency
from .invoice_line import InvoiceLineItem
from .invoice_payment import InvoicePayment
from .invoice_history import InvoiceHistory
from .invoice_sequence import InvoiceSequence
from .company import Company, Opportunity, OpportunityStatus, PartnerCommission, CommissionStatus
from .api_key import ApiKey, ApiKeyStatus, ApiKeyScope, ApiKeyPermission

__all__ = [
    "BaseModel",
    "generate_uuid",
    "User",
    "UserRole",
    "Organization",
    "AuthSession",
    "AuthIdentity",
    "Principal",
    "ResourceDescriptor",
    "RoleRequirement",
    "SuperAdminOnly",
    "ResourceAccess",
    "ResourceMember",
    "Project",
    "MemberAllocation",
    "ProjectTemplate",
    "Invoice",
    "InvoiceStatus",
    "RecurringFrequency",
    "InvoiceLineItem",
    "InvoicePayment",
    "InvoiceHistory",
    "InvoiceSequence",
    "Company",
    "Opportunity",
    "OpportunityStatus",
    "PartnerCommission",
    "CommissionStatus",
    "ApiKey",
    "ApiKeyStatus",
    "ApiKeyScope",
    "ApiKeyPermission",
]
