"""Data Transfer Objects for read models (partners, projects, organization)"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from src.domain.company import CommissionStatus


class PartnerDTO(BaseModel):
    id: str
    name: str
    commission_rate: Optional[Decimal] = None


class CommissionDTO(BaseModel):
    id: str
    opportunity_id: Optional[str] = None
    invoice_id: Optional[str] = None
    commission_rate: Decimal
    base_amount: Decimal
    commission_amount: Decimal
    status: CommissionStatus
    notes: Optional[str] = None
    created_at: datetime
    paid_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PartnerSummaryDTO(BaseModel):
    referred_opportunities_count: int
    converted_opportunities_count: int
    conversion_rate: Decimal = Field(description="Converted / referred, in percent")
    total_revenue: Decimal = Field(description="Value of converted opportunities")
    pipeline_value: Decimal = Field(description="Value of open opportunities")
    pending_commission: Decimal = Field(description="Pending + approved commissions")
    paid_commission: Decimal
    total_commission: Decimal
    paid_commission_percentage: Decimal


class PartnerStatsResponseDTO(BaseModel):
    partner: PartnerDTO
    summary: PartnerSummaryDTO
    commissions: List[CommissionDTO]


class CreateCommissionCommandDTO(BaseModel):
    base_amount: Decimal
    commission_rate: Optional[Decimal] = Field(
        default=None,
        description="Percentage (defaults to the partner's rate)"
    )
    opportunity_id: Optional[str] = None
    invoice_id: Optional[str] = None
    notes: Optional[str] = None


class AllocationDTO(BaseModel):
    id: str
    project_id: str
    user_id: str
    allocated_hours_per_week: Decimal
    start_date: date
    end_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class WorkloadDTO(BaseModel):
    """Weekly load of one project member across all their projects"""

    user_id: str
    name: Optional[str] = None
    max_hours_per_week: Decimal
    total_allocated_hours: Decimal
    utilization: Decimal = Field(description="Percent of capacity, one decimal")
    is_over_allocated: bool
    allocations: List[AllocationDTO] = Field(default_factory=list)


class ProjectResourcesResponseDTO(BaseModel):
    project_id: str
    start_date: date
    end_date: date
    allocations: List[AllocationDTO]
    workloads: List[WorkloadDTO]


class OrganizationUsageResponseDTO(BaseModel):
    organization_id: str
    projects: int
    users: int
    active_users: int
    templates: int
    active_user_percentage: Decimal
