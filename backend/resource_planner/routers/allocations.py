"""Allocation API routes: month listing, upsert, summary and insights."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_planner.database import get_db
from resource_planner.engine.allocation import default_month
from resource_planner.engine.insights import analyze_allocations, render_allocation_report
from resource_planner.models.allocation import AllocationMonth
from resource_planner.schemas.allocation import (
    AllocationBatch,
    AllocationResponse,
    AllocationSummary,
    AllocationUpsert,
    AllocationUpsertResult,
)
from resource_planner.schemas.insights import (
    AllocationInsightsResponse,
    PersonLoadResponse,
    ProjectVarianceResponse,
)
from resource_planner.services.allocation_service import (
    build_summary,
    insight_inputs,
    list_month_allocations,
    load_month_data,
    missing_references,
    upsert_allocation,
)

router = APIRouter(prefix="/allocations", tags=["allocations"])


async def _resolve_month(db: AsyncSession, month_id: int | None) -> AllocationMonth:
    """Explicit month, or the active month covering today (falling back to the earliest active one)."""
    if month_id is not None:
        month = await db.get(AllocationMonth, month_id)
        if not month:
            raise HTTPException(status_code=404, detail="Allocation month not found")
        return month
    result = await db.execute(
        select(AllocationMonth).where(AllocationMonth.is_active.is_(True)).order_by(AllocationMonth.month)
    )
    month = default_month(result.scalars().all())
    if not month:
        raise HTTPException(status_code=404, detail="No active allocation months")
    return month


async def _apply(db: AsyncSession, data: AllocationUpsert) -> AllocationUpsertResult:
    missing = await missing_references(db, data)
    if missing:
        raise HTTPException(status_code=404, detail=f"Not found: {', '.join(missing)}")
    try:
        action, allocation = await upsert_allocation(db, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return AllocationUpsertResult(
        action=action.value,
        allocation=AllocationResponse.model_validate(allocation) if allocation else None,
    )


@router.get("", response_model=list[AllocationResponse])
async def list_allocations(
    db: Annotated[AsyncSession, Depends(get_db)],
    month_id: int | None = Query(None),
):
    if month_id is None:
        raise HTTPException(status_code=400, detail="month_id is required")
    allocations = await list_month_allocations(db, month_id)
    return [AllocationResponse.model_validate(a) for a in allocations]


@router.post("", response_model=AllocationUpsertResult)
async def save_allocation(
    data: AllocationUpsert,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Upsert keyed by (person, project, month). A percentage of 0 deletes the record."""
    return await _apply(db, data)


@router.post("/batch", response_model=list[AllocationUpsertResult])
async def save_allocations(
    data: AllocationBatch,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Apply items in order, committing each. A failing item leaves earlier ones applied."""
    results = []
    for item in data.items:
        results.append(await _apply(db, item))
        await db.commit()
    return results


@router.get("/summary", response_model=AllocationSummary)
async def get_allocation_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    month_id: int | None = Query(None),
):
    month = await _resolve_month(db, month_id)
    return build_summary(await load_month_data(db, month))


@router.get("/insights", response_model=AllocationInsightsResponse)
async def get_allocation_insights(
    db: Annotated[AsyncSession, Depends(get_db)],
    month_id: int | None = Query(None),
):
    month = await _resolve_month(db, month_id)
    data = await load_month_data(db, month)
    people, projects = insight_inputs(data)
    insights = analyze_allocations(month.name, data.available_hours, people, projects)
    return AllocationInsightsResponse(
        month=insights.month,
        available_hours=insights.available_hours,
        total_allocated_hours=insights.total_allocated_hours,
        total_estimated_hours=insights.total_estimated_hours,
        variance_hours=insights.variance_hours,
        over_allocated=[PersonLoadResponse(name=p.name, total_pct=p.total_pct) for p in insights.over_allocated],
        under_utilized=[PersonLoadResponse(name=p.name, total_pct=p.total_pct) for p in insights.under_utilized],
        variances=[
            ProjectVarianceResponse(
                name=p.name,
                department=p.department,
                allocated_hours=p.allocated_hours,
                estimated_hours=p.estimated_hours,
                variance=p.variance,
            )
            for p in insights.variances
        ],
        analysis=render_allocation_report(insights),
    )
