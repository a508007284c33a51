"""Project loading and response building."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from resource_planner.engine import estimate as estimate_engine
from resource_planner.models.estimate import Estimate, UserStory
from resource_planner.models.project import Project
from resource_planner.schemas.project import EstimateSummary, ProjectResponse

PROJECT_LOAD_OPTIONS = (
    selectinload(Project.department),
    selectinload(Project.project_manager),
    selectinload(Project.expertise_links),
    selectinload(Project.estimate).selectinload(Estimate.user_stories).selectinload(UserStory.estimate_items),
)


async def get_project(db: AsyncSession, project_id: int) -> Project | None:
    result = await db.execute(
        select(Project)
        .where(Project.id == project_id)
        .options(*PROJECT_LOAD_OPTIONS)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


def project_to_response(project: Project) -> ProjectResponse:
    """Requires PROJECT_LOAD_OPTIONS relationships to be loaded."""
    estimate = project.estimate
    return ProjectResponse(
        id=project.id,
        name=project.name,
        department_id=project.department_id,
        department_name=project.department.name if project.department else None,
        description=project.description,
        status=project.status.value if hasattr(project.status, "value") else project.status,
        sort_order=project.sort_order,
        start_date=project.start_date,
        target_date=project.target_date,
        actual_completion_date=project.actual_completion_date,
        board_id=project.board_id,
        project_manager_id=project.project_manager_id,
        project_manager_name=project.project_manager.name if project.project_manager else None,
        expertise_ids=sorted(link.expertise_id for link in project.expertise_links),
        estimate=EstimateSummary(
            id=estimate.id,
            blended_rate=estimate.blended_rate,
            total_hours=estimate_engine.total_hours(estimate),
        ) if estimate else None,
    )
