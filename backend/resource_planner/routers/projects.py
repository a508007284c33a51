"""Project API routes."""
import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from resource_planner.database import get_db
from resource_planner.engine.insights import analyze_portfolio, render_portfolio_report
from resource_planner.models.people import Expertise, Person
from resource_planner.models.project import Department, Project, ProjectExpertise
from resource_planner.schemas.insights import PortfolioInsightsResponse
from resource_planner.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from resource_planner.services.project_service import PROJECT_LOAD_OPTIONS, get_project, project_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


async def _check_manager(db: AsyncSession, person_id: int | None) -> None:
    if person_id is not None and not await db.get(Person, person_id):
        raise HTTPException(status_code=404, detail="Project manager not found")


async def _set_expertises(db: AsyncSession, project_id: int, expertise_ids: list[int]) -> None:
    ids = list(dict.fromkeys(expertise_ids))
    if ids:
        result = await db.execute(select(Expertise.id).where(Expertise.id.in_(ids)))
        found = set(result.scalars().all())
        if len(found) != len(ids):
            raise HTTPException(status_code=404, detail="Expertise not found")
    await db.execute(delete(ProjectExpertise).where(ProjectExpertise.project_id == project_id))
    for expertise_id in ids:
        db.add(ProjectExpertise(project_id=project_id, expertise_id=expertise_id))
    await db.flush()


@router.get("", response_model=list[ProjectResponse])
async def list_projects(db: Annotated[AsyncSession, Depends(get_db)]):
    result = await db.execute(select(Project).order_by(Project.name).options(*PROJECT_LOAD_OPTIONS))
    return [project_to_response(p) for p in result.scalars().all()]


@router.post("", response_model=ProjectResponse)
async def create_project(
    data: ProjectCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    if not await db.get(Department, data.department_id):
        raise HTTPException(status_code=404, detail="Department not found")
    await _check_manager(db, data.project_manager_id)
    project = Project(
        name=data.name,
        department_id=data.department_id,
        description=data.description,
        status=data.status,
        sort_order=data.sort_order,
        start_date=data.start_date,
        target_date=data.target_date,
        actual_completion_date=data.actual_completion_date,
        project_manager_id=data.project_manager_id,
    )
    db.add(project)
    await db.flush()
    if data.expertise_ids:
        await _set_expertises(db, project.id, data.expertise_ids)
    logger.info("Created project %s (%s)", project.id, project.name)
    return project_to_response(await get_project(db, project.id))


@router.get("/insights", response_model=PortfolioInsightsResponse)
async def get_portfolio_insights(db: Annotated[AsyncSession, Depends(get_db)]):
    result = await db.execute(select(Project).options(selectinload(Project.department)))
    insights = analyze_portfolio(result.scalars().all(), today=date.today())
    return PortfolioInsightsResponse(
        total_projects=insights.total_projects,
        by_status=insights.by_status,
        by_department=insights.by_department,
        without_pm=insights.without_pm,
        without_target_date=insights.without_target_date,
        overdue=insights.overdue,
        risk_projects=insights.risk_projects,
        analysis=render_portfolio_report(insights),
    )


@router.get("/{project_id}", response_model=ProjectResponse)
async def read_project(
    project_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    project = await get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project_to_response(project)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    data: ProjectUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    project = await db.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    updates = data.model_dump(exclude_unset=True)
    expertise_ids = updates.pop("expertise_ids", None)
    for required in ("status", "sort_order"):
        if required in updates and updates[required] is None:
            updates.pop(required)
    if "project_manager_id" in updates:
        await _check_manager(db, updates["project_manager_id"])
    for k, v in updates.items():
        setattr(project, k, v)
    await db.flush()
    if expertise_ids is not None:
        await _set_expertises(db, project_id, expertise_ids)
    return project_to_response(await get_project(db, project_id))
