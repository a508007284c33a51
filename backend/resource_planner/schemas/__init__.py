"""Pydantic schemas."""
from resource_planner.schemas.allocation import (
    AllocationBatch,
    AllocationMonthCreate,
    AllocationMonthResponse,
    AllocationMonthUpdate,
    AllocationResponse,
    AllocationSummary,
    AllocationUpsert,
    AllocationUpsertResult,
    HolidayCreate,
    HolidayResponse,
)
from resource_planner.schemas.estimate import (
    EstimateCreate,
    EstimateItemResponse,
    EstimateItemUpsert,
    EstimateResponse,
    EstimateUpdate,
    UserStoryCreate,
    UserStoryReorder,
    UserStoryResponse,
)
from resource_planner.schemas.insights import AllocationInsightsResponse, PortfolioInsightsResponse
from resource_planner.schemas.people import (
    ExpertiseCreate,
    ExpertiseResponse,
    ExpertiseUpdate,
    PersonCreate,
    PersonDetailResponse,
    PersonResponse,
    PersonUpdate,
)
from resource_planner.schemas.project import (
    DepartmentCreate,
    DepartmentResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from resource_planner.schemas.weekly_report import WeeklyReportResponse, WeeklyReportUpsert

__all__ = [
    "AllocationBatch",
    "AllocationMonthCreate",
    "AllocationMonthResponse",
    "AllocationMonthUpdate",
    "AllocationResponse",
    "AllocationSummary",
    "AllocationUpsert",
    "AllocationUpsertResult",
    "HolidayCreate",
    "HolidayResponse",
    "EstimateCreate",
    "EstimateItemResponse",
    "EstimateItemUpsert",
    "EstimateResponse",
    "EstimateUpdate",
    "UserStoryCreate",
    "UserStoryReorder",
    "UserStoryResponse",
    "AllocationInsightsResponse",
    "PortfolioInsightsResponse",
    "ExpertiseCreate",
    "ExpertiseResponse",
    "ExpertiseUpdate",
    "PersonCreate",
    "PersonDetailResponse",
    "PersonResponse",
    "PersonUpdate",
    "DepartmentCreate",
    "DepartmentResponse",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    "WeeklyReportResponse",
    "WeeklyReportUpsert",
]
