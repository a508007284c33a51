"""Expertise API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from resource_planner.database import get_db
from resource_planner.models.people import Expertise, Person
from resource_planner.schemas.people import ExpertiseCreate, ExpertiseResponse, ExpertiseUpdate
from resource_planner.services.people_service import person_to_response

router = APIRouter(prefix="/expertises", tags=["expertises"])


def _to_response(expertise: Expertise, with_people: bool = True) -> ExpertiseResponse:
    return ExpertiseResponse(
        id=expertise.id,
        name=expertise.name,
        sort_order=expertise.sort_order,
        people=[person_to_response(p) for p in expertise.people] if with_people else [],
    )


@router.get("", response_model=list[ExpertiseResponse])
async def list_expertises(db: Annotated[AsyncSession, Depends(get_db)]):
    result = await db.execute(
        select(Expertise)
        .order_by(Expertise.sort_order, Expertise.name)
        .options(selectinload(Expertise.people).selectinload(Person.expertise))
    )
    return [_to_response(e) for e in result.scalars().all()]


@router.post("", response_model=ExpertiseResponse)
async def create_expertise(
    data: ExpertiseCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    existing = await db.execute(select(Expertise).where(Expertise.name == data.name))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="Expertise already exists")
    expertise = Expertise(name=data.name, sort_order=data.sort_order)
    db.add(expertise)
    await db.flush()
    return _to_response(expertise, with_people=False)


@router.patch("/{expertise_id}", response_model=ExpertiseResponse)
async def update_expertise(
    expertise_id: int,
    data: ExpertiseUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    expertise = await db.get(Expertise, expertise_id)
    if not expertise:
        raise HTTPException(status_code=404, detail="Expertise not found")
    if data.name and data.name != expertise.name:
        existing = await db.execute(select(Expertise).where(Expertise.name == data.name))
        if existing.scalar_one_or_none():
            raise HTTPException(status_code=400, detail="Expertise already exists")
    for k, v in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(expertise, k, v)
    await db.flush()
    return _to_response(expertise, with_people=False)


@router.delete("/{expertise_id}")
async def delete_expertise(
    expertise_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    expertise = await db.get(Expertise, expertise_id)
    if not expertise:
        raise HTTPException(status_code=404, detail="Expertise not found")
    await db.execute(update(Person).where(Person.expertise_id == expertise_id).values(expertise_id=None))
    await db.execute(delete(Expertise).where(Expertise.id == expertise_id))
    return {"success": True}
