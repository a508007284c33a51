"""Weekly report schemas."""
from datetime import date

from pydantic import BaseModel


class WeeklyReportUpsert(BaseModel):
    project_id: int
    week_starting: date
    accomplishments: str | None = None
    challenges: str | None = None
    goals: str | None = None


class WeeklyReportResponse(BaseModel):
    id: int
    project_id: int
    week_starting: date
    accomplishments: str | None
    challenges: str | None
    goals: str | None

    class Config:
        from_attributes = True
