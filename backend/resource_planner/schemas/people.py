"""Expertise and person schemas."""
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field, field_validator


class ExpertiseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    sort_order: int = 0

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip() if v else v


class ExpertiseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    sort_order: int | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return v.strip() if v else v


class PersonCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    expertise_id: int | None = None


class PersonUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    expertise_id: int | None = None


class PersonResponse(BaseModel):
    id: int
    name: str
    email: str | None
    expertise_id: int | None
    expertise_name: str | None = None


class ExpertiseResponse(BaseModel):
    id: int
    name: str
    sort_order: int
    people: list[PersonResponse] = []


class PersonAllocationEntry(BaseModel):
    allocation_id: int
    project_id: int
    project_name: str
    department_name: str
    allocation_month_id: int
    month_name: str
    percentage: Decimal


class PersonDetailResponse(PersonResponse):
    allocations: list[PersonAllocationEntry] = []
