"""People API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from resource_planner.database import get_db
from resource_planner.models.allocation import Allocation
from resource_planner.models.people import Expertise, Person
from resource_planner.models.project import Project
from resource_planner.schemas.people import PersonCreate, PersonDetailResponse, PersonResponse, PersonUpdate
from resource_planner.services.people_service import person_to_detail, person_to_response

router = APIRouter(prefix="/people", tags=["people"])


async def _load_person(db: AsyncSession, person_id: int) -> Person | None:
    result = await db.execute(
        select(Person)
        .where(Person.id == person_id)
        .options(selectinload(Person.expertise))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _check_expertise(db: AsyncSession, expertise_id: int | None) -> None:
    if expertise_id is not None and not await db.get(Expertise, expertise_id):
        raise HTTPException(status_code=404, detail="Expertise not found")


async def _check_email_free(db: AsyncSession, email: str | None, person_id: int | None = None) -> None:
    if not email:
        return
    result = await db.execute(select(Person).where(Person.email == email))
    other = result.scalar_one_or_none()
    if other and other.id != person_id:
        raise HTTPException(status_code=400, detail="Email already registered")


@router.get("", response_model=list[PersonResponse])
async def list_people(
    db: Annotated[AsyncSession, Depends(get_db)],
    expertise: str | None = Query(None, description="Filter by expertise name"),
):
    q = select(Person).order_by(Person.name).options(selectinload(Person.expertise))
    if expertise:
        q = q.join(Person.expertise).where(Expertise.name == expertise)
    result = await db.execute(q)
    return [person_to_response(p) for p in result.scalars().all()]


@router.post("", response_model=PersonResponse)
async def create_person(
    data: PersonCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await _check_expertise(db, data.expertise_id)
    await _check_email_free(db, data.email)
    person = Person(name=data.name, email=data.email, expertise_id=data.expertise_id)
    db.add(person)
    await db.flush()
    return person_to_response(await _load_person(db, person.id))


@router.get("/{person_id}", response_model=PersonDetailResponse)
async def get_person(
    person_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    result = await db.execute(
        select(Person)
        .where(Person.id == person_id)
        .options(
            selectinload(Person.expertise),
            selectinload(Person.allocations).selectinload(Allocation.project).selectinload(Project.department),
            selectinload(Person.allocations).selectinload(Allocation.allocation_month),
        )
    )
    person = result.scalar_one_or_none()
    if not person:
        raise HTTPException(status_code=404, detail="Person not found")
    return person_to_detail(person)


@router.patch("/{person_id}", response_model=PersonResponse)
async def update_person(
    person_id: int,
    data: PersonUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    person = await db.get(Person, person_id)
    if not person:
        raise HTTPException(status_code=404, detail="Person not found")
    updates = data.model_dump(exclude_unset=True)
    if "expertise_id" in updates:
        await _check_expertise(db, updates["expertise_id"])
    if updates.get("email"):
        await _check_email_free(db, updates["email"], person_id)
    if "name" in updates and updates["name"] is None:
        raise HTTPException(status_code=400, detail="Name cannot be empty")
    for k, v in updates.items():
        setattr(person, k, v)
    await db.flush()
    return person_to_response(await _load_person(db, person_id))
