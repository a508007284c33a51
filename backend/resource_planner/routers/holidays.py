"""Holiday API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_planner.database import get_db
from resource_planner.models.allocation import Holiday
from resource_planner.schemas.allocation import HolidayCreate, HolidayResponse

router = APIRouter(prefix="/holidays", tags=["holidays"])


@router.get("", response_model=list[HolidayResponse])
async def list_holidays(db: Annotated[AsyncSession, Depends(get_db)]):
    result = await db.execute(select(Holiday).order_by(Holiday.date))
    return [HolidayResponse.model_validate(h) for h in result.scalars().all()]


@router.post("", response_model=HolidayResponse)
async def create_holiday(
    data: HolidayCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    holiday = Holiday(name=data.name, date=data.date)
    db.add(holiday)
    await db.flush()
    return HolidayResponse.model_validate(holiday)


@router.delete("/{holiday_id}")
async def delete_holiday(
    holiday_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    holiday = await db.get(Holiday, holiday_id)
    if not holiday:
        raise HTTPException(status_code=404, detail="Holiday not found")
    await db.delete(holiday)
    return {"success": True}
