"""Allocation month, holiday, allocation and summary schemas."""
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class AllocationMonthCreate(BaseModel):
    month: date
    name: str | None = Field(None, max_length=50)
    is_active: bool = True

    @field_validator("month")
    @classmethod
    def first_of_month(cls, v: date) -> date:
        return v.replace(day=1)


class AllocationMonthUpdate(BaseModel):
    is_active: bool


class AllocationMonthResponse(BaseModel):
    id: int
    name: str
    month: date
    is_active: bool

    class Config:
        from_attributes = True


class HolidayCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    date: date


class HolidayResponse(BaseModel):
    id: int
    name: str
    date: date

    class Config:
        from_attributes = True


class AllocationUpsert(BaseModel):
    person_id: int
    project_id: int
    allocation_month_id: int
    percentage: Decimal = Field(..., ge=0, le=100, decimal_places=3)


class AllocationBatch(BaseModel):
    items: list[AllocationUpsert] = Field(..., min_length=1)


class AllocationResponse(BaseModel):
    id: int
    person_id: int
    project_id: int
    allocation_month_id: int
    percentage: Decimal

    class Config:
        from_attributes = True


class AllocationUpsertResult(BaseModel):
    action: str
    allocation: AllocationResponse | None = None


class PersonAllocationSummary(BaseModel):
    person_id: int
    name: str
    expertise_name: str | None
    total_pct: Decimal
    allocated_hours: Decimal
    status: str


class ProjectAllocationSummary(BaseModel):
    project_id: int
    name: str
    total_pct: Decimal
    total_hours: Decimal
    estimated_hours: Decimal | None
    project_manager_name: str | None


class DepartmentAllocationSummary(BaseModel):
    department_id: int
    name: str
    projects: list[ProjectAllocationSummary]


class AllocationSummary(BaseModel):
    allocation_month_id: int
    month_name: str
    available_hours_per_person: int
    headcount: int
    available_hours_team: int
    people: list[PersonAllocationSummary]
    departments: list[DepartmentAllocationSummary]
