"""Read models built on the percentage helpers"""
from .partner_stats import GetPartnerStats
from .create_partner_commission import CreatePartnerCommission
from .project_resources import GetProjectResources
from .organization_usage import GetOrganizationUsage
from .dtos import (
    PartnerDTO,
    CommissionDTO,
    PartnerSummaryDTO,
    PartnerStatsResponseDTO,
    CreateCommissionCommandDTO,
    AllocationDTO,
    WorkloadDTO,
    ProjectResourcesResponseDTO,
    OrganizationUsageResponseDTO,
)

__all__ = [
    "GetPartnerStats",
    "CreatePartnerCommission",
    "GetProjectResources",
    "GetOrganizationUsage",
    "PartnerDTO",
    "CommissionDTO",
    "PartnerSummaryDTO",
    "PartnerStatsResponseDTO",
    "CreateCommissionCommandDTO",
    "AllocationDTO",
    "WorkloadDTO",
    "ProjectResourcesResponseDTO",
    "OrganizationUsageResponseDTO",
]
