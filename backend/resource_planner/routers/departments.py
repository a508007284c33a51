"""Department API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from resource_planner.database import get_db
from resource_planner.models.estimate import Estimate, UserStory
from resource_planner.models.project import Department, Project
from resource_planner.schemas.project import DepartmentCreate, DepartmentResponse
from resource_planner.services.project_service import project_to_response

router = APIRouter(prefix="/departments", tags=["departments"])


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(db: Annotated[AsyncSession, Depends(get_db)]):
    """Departments by sort order, each with its projects (PM and estimate summary included)."""
    result = await db.execute(
        select(Department)
        .order_by(Department.sort_order, Department.id)
        .options(
            selectinload(Department.projects).selectinload(Project.department),
            selectinload(Department.projects).selectinload(Project.project_manager),
            selectinload(Department.projects).selectinload(Project.expertise_links),
            selectinload(Department.projects).selectinload(Project.estimate)
            .selectinload(Estimate.user_stories)
            .selectinload(UserStory.estimate_items),
        )
    )
    return [
        DepartmentResponse(
            id=d.id,
            name=d.name,
            sort_order=d.sort_order,
            projects=[project_to_response(p) for p in d.projects],
        )
        for d in result.scalars().all()
    ]


@router.post("", response_model=DepartmentResponse)
async def create_department(
    data: DepartmentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    existing = await db.execute(select(Department).where(Department.name == data.name))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="Department already exists")
    department = Department(name=data.name, sort_order=data.sort_order)
    db.add(department)
    await db.flush()
    return DepartmentResponse(id=department.id, name=department.name, sort_order=department.sort_order)
