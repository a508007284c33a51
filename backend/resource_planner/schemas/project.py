"""Department and project schemas."""
from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, model_validator

ProjectStatusLiteral = Literal["Green", "Yellow", "Red", "Complete", "Business Hold"]


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    sort_order: int = 0


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    department_id: int
    description: str | None = None
    status: ProjectStatusLiteral = "Green"
    sort_order: int = 0
    start_date: date | None = None
    target_date: date | None = None
    actual_completion_date: date | None = None
    project_manager_id: int | None = None
    expertise_ids: list[int] = []


class ProjectUpdate(BaseModel):
    """Partial update. Explicit nulls clear dates and the project manager."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status: ProjectStatusLiteral | None = None
    sort_order: int | None = None
    start_date: date | None = None
    target_date: date | None = None
    actual_completion_date: date | None = None
    board_id: str | None = None
    project_manager_id: int | None = None
    expertise_ids: list[int] | None = None

    @model_validator(mode="after")
    def check_name(self):
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name cannot be null")
        return self


class EstimateSummary(BaseModel):
    id: int
    blended_rate: Decimal
    total_hours: Decimal


class ProjectResponse(BaseModel):
    id: int
    name: str
    department_id: int
    department_name: str | None = None
    description: str | None
    status: str
    sort_order: int
    start_date: date | None
    target_date: date | None
    actual_completion_date: date | None
    board_id: str | None
    project_manager_id: int | None
    project_manager_name: str | None = None
    expertise_ids: list[int] = []
    estimate: EstimateSummary | None = None


class DepartmentResponse(BaseModel):
    id: int
    name: str
    sort_order: int
    projects: list[ProjectResponse] = []
