"""Estimate schemas."""
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class EstimateCreate(BaseModel):
    project_id: int
    blended_rate: Decimal = Field(default=0, ge=0)


class EstimateUpdate(BaseModel):
    blended_rate: Decimal = Field(..., ge=0)


class UserStoryCreate(BaseModel):
    estimate_id: int
    name: str = Field(..., min_length=1, max_length=500)


class StoryOrder(BaseModel):
    id: int
    sort_order: int


class UserStoryReorder(BaseModel):
    stories: list[StoryOrder]


class EstimateItemUpsert(BaseModel):
    user_story_id: int
    discipline: str = Field(..., min_length=1, max_length=100)
    hours: Decimal = Field(..., ge=0)

    @field_validator("discipline")
    @classmethod
    def strip_discipline(cls, v: str) -> str:
        return v.strip() if v else v


class EstimateItemResponse(BaseModel):
    id: int
    user_story_id: int
    discipline: str
    hours: Decimal

    class Config:
        from_attributes = True


class UserStoryResponse(BaseModel):
    id: int
    estimate_id: int
    name: str
    sort_order: int
    total_hours: Decimal
    estimate_items: list[EstimateItemResponse] = []


class EstimateResponse(BaseModel):
    id: int
    project_id: int
    blended_rate: Decimal
    total_hours: Decimal
    total_cost: Decimal
    hours_by_discipline: dict[str, Decimal]
    user_stories: list[UserStoryResponse] = []
