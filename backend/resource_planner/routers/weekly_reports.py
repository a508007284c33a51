"""Weekly report API routes."""
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_planner.database import get_db
from resource_planner.models.project import Project
from resource_planner.models.weekly_report import WeeklyReport
from resource_planner.schemas.weekly_report import WeeklyReportResponse, WeeklyReportUpsert

router = APIRouter(prefix="/weekly-reports", tags=["weekly-reports"])


@router.get("", response_model=list[WeeklyReportResponse])
async def list_weekly_reports(
    db: Annotated[AsyncSession, Depends(get_db)],
    project_id: int | None = Query(None),
):
    if project_id is None:
        return []
    result = await db.execute(
        select(WeeklyReport)
        .where(WeeklyReport.project_id == project_id)
        .order_by(WeeklyReport.week_starting.desc())
    )
    return [WeeklyReportResponse.model_validate(r) for r in result.scalars().all()]


@router.post("", response_model=WeeklyReportResponse)
async def save_weekly_report(
    data: WeeklyReportUpsert,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Upsert keyed by project and the Monday of the given week."""
    if not await db.get(Project, data.project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    week_starting = data.week_starting - timedelta(days=data.week_starting.weekday())
    result = await db.execute(
        select(WeeklyReport).where(
            WeeklyReport.project_id == data.project_id,
            WeeklyReport.week_starting == week_starting,
        )
    )
    report = result.scalar_one_or_none()
    if not report:
        report = WeeklyReport(project_id=data.project_id, week_starting=week_starting)
        db.add(report)
    report.accomplishments = data.accomplishments
    report.challenges = data.challenges
    report.goals = data.goals
    await db.flush()
    return WeeklyReportResponse.model_validate(report)
