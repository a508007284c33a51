"""Insight report schemas."""
from decimal import Decimal

from pydantic import BaseModel


class PersonLoadResponse(BaseModel):
    name: str
    total_pct: Decimal


class ProjectVarianceResponse(BaseModel):
    name: str
    department: str
    allocated_hours: Decimal
    estimated_hours: Decimal
    variance: Decimal


class AllocationInsightsResponse(BaseModel):
    month: str
    available_hours: int
    total_allocated_hours: Decimal
    total_estimated_hours: Decimal
    variance_hours: Decimal
    over_allocated: list[PersonLoadResponse]
    under_utilized: list[PersonLoadResponse]
    variances: list[ProjectVarianceResponse]
    analysis: str


class PortfolioInsightsResponse(BaseModel):
    total_projects: int
    by_status: dict[str, int]
    by_department: dict[str, int]
    without_pm: int
    without_target_date: int
    overdue: int
    risk_projects: int
    analysis: str
