"""Estimate loading and response building."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from resource_planner.engine import estimate as estimate_engine
from resource_planner.models.estimate import Estimate, UserStory
from resource_planner.schemas.estimate import EstimateItemResponse, EstimateResponse, UserStoryResponse

_ESTIMATE_TREE = selectinload(Estimate.user_stories).selectinload(UserStory.estimate_items)


async def get_estimate(
    db: AsyncSession,
    *,
    project_id: int | None = None,
    estimate_id: int | None = None,
) -> Estimate | None:
    """Estimate with stories and items eagerly loaded, by project or by id."""
    q = select(Estimate).options(_ESTIMATE_TREE).execution_options(populate_existing=True)
    if project_id is not None:
        q = q.where(Estimate.project_id == project_id)
    elif estimate_id is not None:
        q = q.where(Estimate.id == estimate_id)
    else:
        raise ValueError("project_id or estimate_id is required")
    result = await db.execute(q)
    return result.scalar_one_or_none()


def estimate_to_response(estimate: Estimate) -> EstimateResponse:
    stories = sorted(estimate.user_stories, key=lambda s: (s.sort_order, s.id))
    return EstimateResponse(
        id=estimate.id,
        project_id=estimate.project_id,
        blended_rate=estimate.blended_rate,
        total_hours=estimate_engine.total_hours(estimate),
        total_cost=estimate_engine.total_cost(estimate),
        hours_by_discipline=estimate_engine.hours_by_discipline(estimate),
        user_stories=[
            UserStoryResponse(
                id=s.id,
                estimate_id=s.estimate_id,
                name=s.name,
                sort_order=s.sort_order,
                total_hours=estimate_engine.story_hours(s),
                estimate_items=[EstimateItemResponse.model_validate(i) for i in s.estimate_items],
            )
            for s in stories
        ],
    )
