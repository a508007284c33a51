"""Estimate, user story and estimate item API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_planner.database import get_db
from resource_planner.models.estimate import Estimate, EstimateItem, UserStory
from resource_planner.models.project import Project
from resource_planner.schemas.estimate import (
    EstimateCreate,
    EstimateItemResponse,
    EstimateItemUpsert,
    EstimateResponse,
    EstimateUpdate,
    UserStoryCreate,
    UserStoryReorder,
    UserStoryResponse,
)
from resource_planner.services.estimate_service import estimate_to_response, get_estimate

router = APIRouter(tags=["estimates"])


@router.post("/estimates", response_model=EstimateResponse)
async def create_estimate(
    data: EstimateCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create the project's estimate, or return the existing one unchanged."""
    if not await db.get(Project, data.project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    estimate = await get_estimate(db, project_id=data.project_id)
    if estimate:
        return estimate_to_response(estimate)
    db.add(Estimate(project_id=data.project_id, blended_rate=data.blended_rate))
    await db.flush()
    return estimate_to_response(await get_estimate(db, project_id=data.project_id))


@router.get("/estimates/{project_id}", response_model=EstimateResponse)
async def read_estimate(
    project_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Estimate looked up by its project id."""
    estimate = await get_estimate(db, project_id=project_id)
    if not estimate:
        raise HTTPException(status_code=404, detail="Estimate not found")
    return estimate_to_response(estimate)


@router.patch("/estimates/{estimate_id}", response_model=EstimateResponse)
async def update_estimate(
    estimate_id: int,
    data: EstimateUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    estimate = await db.get(Estimate, estimate_id)
    if not estimate:
        raise HTTPException(status_code=404, detail="Estimate not found")
    estimate.blended_rate = data.blended_rate
    await db.flush()
    return estimate_to_response(await get_estimate(db, estimate_id=estimate_id))


@router.post("/user-stories", response_model=UserStoryResponse)
async def create_user_story(
    data: UserStoryCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    if not await db.get(Estimate, data.estimate_id):
        raise HTTPException(status_code=404, detail="Estimate not found")
    count = await db.scalar(select(func.count(UserStory.id)).where(UserStory.estimate_id == data.estimate_id))
    story = UserStory(estimate_id=data.estimate_id, name=data.name, sort_order=count or 0)
    db.add(story)
    await db.flush()
    return UserStoryResponse(
        id=story.id,
        estimate_id=story.estimate_id,
        name=story.name,
        sort_order=story.sort_order,
        total_hours=0,
        estimate_items=[],
    )


@router.put("/user-stories/reorder")
async def reorder_user_stories(
    data: UserStoryReorder,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    for entry in data.stories:
        story = await db.get(UserStory, entry.id)
        if not story:
            raise HTTPException(status_code=404, detail=f"User story {entry.id} not found")
        story.sort_order = entry.sort_order
    await db.flush()
    return {"success": True}


@router.delete("/user-stories/{story_id}")
async def delete_user_story(
    story_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    if not await db.get(UserStory, story_id):
        raise HTTPException(status_code=404, detail="User story not found")
    await db.execute(delete(EstimateItem).where(EstimateItem.user_story_id == story_id))
    await db.execute(delete(UserStory).where(UserStory.id == story_id))
    return {"success": True}


@router.post("/estimate-items", response_model=EstimateItemResponse)
async def save_estimate_item(
    data: EstimateItemUpsert,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Upsert hours keyed by (user story, discipline)."""
    if not await db.get(UserStory, data.user_story_id):
        raise HTTPException(status_code=404, detail="User story not found")
    result = await db.execute(
        select(EstimateItem).where(
            EstimateItem.user_story_id == data.user_story_id,
            EstimateItem.discipline == data.discipline,
        )
    )
    item = result.scalar_one_or_none()
    if item:
        item.hours = data.hours
    else:
        item = EstimateItem(user_story_id=data.user_story_id, discipline=data.discipline, hours=data.hours)
        db.add(item)
    await db.flush()
    return EstimateItemResponse.model_validate(item)
