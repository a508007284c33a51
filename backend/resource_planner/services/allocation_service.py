"""Allocation persistence and monthly snapshot assembly."""
import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from resource_planner.engine import allocation as allocation_engine
from resource_planner.engine import estimate as estimate_engine
from resource_planner.engine.allocation import AllocationAction, AllocationSnapshot
from resource_planner.engine.insights import PersonLoad, ProjectLoad
from resource_planner.models.allocation import Allocation, AllocationMonth, Holiday
from resource_planner.models.estimate import Estimate, UserStory
from resource_planner.models.people import Person
from resource_planner.models.project import Department, Project
from resource_planner.schemas.allocation import (
    AllocationSummary,
    AllocationUpsert,
    DepartmentAllocationSummary,
    PersonAllocationSummary,
    ProjectAllocationSummary,
)

logger = logging.getLogger(__name__)


async def missing_references(db: AsyncSession, data: AllocationUpsert) -> list[str]:
    """Names of the referenced entities that do not exist."""
    missing = []
    if not await db.get(Person, data.person_id):
        missing.append("person")
    if not await db.get(Project, data.project_id):
        missing.append("project")
    if not await db.get(AllocationMonth, data.allocation_month_id):
        missing.append("allocation month")
    return missing


async def upsert_allocation(db: AsyncSession, data: AllocationUpsert) -> tuple[AllocationAction, Allocation | None]:
    """Create, overwrite or delete the record for (person, project, month). Last write wins."""
    result = await db.execute(
        select(Allocation).where(
            Allocation.person_id == data.person_id,
            Allocation.project_id == data.project_id,
            Allocation.allocation_month_id == data.allocation_month_id,
        )
    )
    existing = result.scalar_one_or_none()
    action = allocation_engine.plan_allocation_change(existing, data.percentage)

    if action == AllocationAction.DELETE:
        await db.delete(existing)
        await db.flush()
        existing = None
    elif action == AllocationAction.CREATE:
        existing = Allocation(
            person_id=data.person_id,
            project_id=data.project_id,
            allocation_month_id=data.allocation_month_id,
            percentage=data.percentage,
        )
        db.add(existing)
        await db.flush()
    elif action == AllocationAction.UPDATE:
        existing.percentage = data.percentage
        await db.flush()

    logger.info(
        "Allocation %s: person=%s project=%s month=%s pct=%s",
        action.value,
        data.person_id,
        data.project_id,
        data.allocation_month_id,
        data.percentage,
    )
    return action, existing


async def list_month_allocations(db: AsyncSession, month_id: int) -> list[Allocation]:
    result = await db.execute(
        select(Allocation)
        .where(Allocation.allocation_month_id == month_id)
        .order_by(Allocation.person_id, Allocation.project_id)
    )
    return list(result.scalars().all())


@dataclass
class MonthData:
    """Everything the engine needs for one month, loaded in one go."""

    month: AllocationMonth
    holidays: list[Holiday]
    departments: list[Department]
    people: list[Person]
    allocations: list[Allocation]

    @property
    def available_hours(self) -> int:
        return allocation_engine.available_hours(self.month, self.holidays)

    @property
    def snapshot(self) -> AllocationSnapshot:
        return AllocationSnapshot(self.allocations)

    def active_projects(self, department: Department) -> list[Project]:
        return allocation_engine.filter_active_projects(department.projects, self.month)


async def load_month_data(db: AsyncSession, month: AllocationMonth) -> MonthData:
    holidays = (await db.execute(select(Holiday).order_by(Holiday.date))).scalars().all()
    departments = (
        await db.execute(
            select(Department)
            .order_by(Department.sort_order, Department.id)
            .options(
                selectinload(Department.projects).selectinload(Project.project_manager),
                selectinload(Department.projects)
                .selectinload(Project.estimate)
                .selectinload(Estimate.user_stories)
                .selectinload(UserStory.estimate_items),
            )
        )
    ).scalars().all()
    people = (
        await db.execute(select(Person).order_by(Person.name).options(selectinload(Person.expertise)))
    ).scalars().all()
    allocations = await list_month_allocations(db, month.id)
    return MonthData(
        month=month,
        holidays=list(holidays),
        departments=list(departments),
        people=list(people),
        allocations=allocations,
    )


def build_summary(data: MonthData) -> AllocationSummary:
    hours = data.available_hours
    snapshot = data.snapshot
    people = []
    for person in data.people:
        total = snapshot.person_total(person.id, hours)
        people.append(PersonAllocationSummary(
            person_id=person.id,
            name=person.name,
            expertise_name=person.expertise.name if person.expertise else None,
            total_pct=total.total_pct,
            allocated_hours=total.allocated_hours,
            status=total.status.value,
        ))
    departments = []
    for dept in data.departments:
        projects = [
            ProjectAllocationSummary(
                project_id=p.id,
                name=p.name,
                total_pct=snapshot.project_total_pct(p.id),
                total_hours=snapshot.total_hours_for(p.id, hours),
                estimated_hours=estimate_engine.total_hours(p.estimate) if p.estimate else None,
                project_manager_name=p.project_manager.name if p.project_manager else None,
            )
            for p in data.active_projects(dept)
        ]
        departments.append(DepartmentAllocationSummary(department_id=dept.id, name=dept.name, projects=projects))
    return AllocationSummary(
        allocation_month_id=data.month.id,
        month_name=data.month.name,
        available_hours_per_person=hours,
        headcount=len(data.people),
        available_hours_team=allocation_engine.team_available_hours(hours, len(data.people)),
        people=people,
        departments=departments,
    )


def insight_inputs(data: MonthData) -> tuple[list[PersonLoad], list[ProjectLoad]]:
    """Per-person loads and per-active-project allocated vs estimated hours."""
    hours = data.available_hours
    snapshot = data.snapshot
    people = [PersonLoad(name=p.name, total_pct=snapshot.total_for(p.id)) for p in data.people]
    projects = [
        ProjectLoad(
            name=p.name,
            department=dept.name,
            allocated_hours=snapshot.total_hours_for(p.id, hours),
            estimated_hours=estimate_engine.total_hours(p.estimate) if p.estimate else Decimal(0),
        )
        for dept in data.departments
        for p in data.active_projects(dept)
    ]
    return people, projects
