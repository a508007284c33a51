"""Allocation month API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_planner.database import get_db
from resource_planner.models.allocation import AllocationMonth
from resource_planner.schemas.allocation import (
    AllocationMonthCreate,
    AllocationMonthResponse,
    AllocationMonthUpdate,
)

router = APIRouter(prefix="/allocation-months", tags=["allocation-months"])


@router.get("", response_model=list[AllocationMonthResponse])
async def list_allocation_months(
    db: Annotated[AsyncSession, Depends(get_db)],
    include_inactive: bool = Query(False),
):
    q = select(AllocationMonth).order_by(AllocationMonth.month)
    if not include_inactive:
        q = q.where(AllocationMonth.is_active.is_(True))
    result = await db.execute(q)
    return [AllocationMonthResponse.model_validate(m) for m in result.scalars().all()]


@router.post("", response_model=AllocationMonthResponse)
async def create_allocation_month(
    data: AllocationMonthCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    existing = await db.execute(select(AllocationMonth).where(AllocationMonth.month == data.month))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="Allocation month already exists")
    month = AllocationMonth(
        name=data.name or data.month.strftime("%B %Y"),
        month=data.month,
        is_active=data.is_active,
    )
    db.add(month)
    await db.flush()
    return AllocationMonthResponse.model_validate(month)


@router.patch("/{month_id}", response_model=AllocationMonthResponse)
async def set_allocation_month_active(
    month_id: int,
    data: AllocationMonthUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Only the active flag is mutable once a month exists."""
    month = await db.get(AllocationMonth, month_id)
    if not month:
        raise HTTPException(status_code=404, detail="Allocation month not found")
    month.is_active = data.is_active
    await db.flush()
    return AllocationMonthResponse.model_validate(month)
