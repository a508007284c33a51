"""Seed expertises, departments, people, projects, holidays and allocation months.

Run: python -m scripts.seed_data (from backend/)
"""
import asyncio
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_planner.database import async_session_maker, init_db
from resource_planner.models.allocation import Allocation, AllocationMonth, Holiday
from resource_planner.models.people import Expertise, Person
from resource_planner.models.project import Department, Project


EXPERTISES = ["QA", "Software", "Data", "Automation", "Project Management"]

DEPARTMENTS = {
    "Corporate": ["Overhead", "PTO", "Info-capture", "Employee Historical DB", "Training"],
    "SISCO": ["Verification Phase II", "Bank Reconciliation Phase II"],
    "Captives": ["Data Report Power BI vs C#"],
    "Transportation": ["Independent Contractor Score Card", "Producer Top 10", "Client Iris"],
    "Benefits": ["Account Team Changes"],
    "CBCS": ["Escrow Invoices", "Data Submission Page"],
    "Wellness": ["Summary Sheet Automation & Efficiencies", "Engage360"],
}

PEOPLE = [
    ("Kim Smith", "kim.smith@example.com", "QA"),
    ("David Johnson", "david.johnson@example.com", "Software"),
    ("George Williams", "george.williams@example.com", "Software"),
    ("Steve Brown", "steve.brown@example.com", "Software"),
    ("Jillian Anderson", "jillian.anderson@example.com", "Automation"),
    ("Jeff Jackson", "jeff.jackson@example.com", "Data"),
    ("Travis Lee", "travis.lee@example.com", "Project Management"),
]

HOLIDAYS = [
    ("Thanksgiving", date(2025, 11, 27)),
    ("Thanksgiving", date(2025, 11, 28)),
    ("Christmas", date(2025, 12, 25)),
]


async def _get_or_create(db: AsyncSession, model, lookup: dict, **extra):
    result = await db.execute(select(model).filter_by(**lookup))
    obj = result.scalar_one_or_none()
    if obj:
        return obj
    obj = model(**lookup, **extra)
    db.add(obj)
    await db.flush()
    return obj


async def seed():
    await init_db()
    async with async_session_maker() as db:
        expertises = {}
        for i, name in enumerate(EXPERTISES, start=1):
            expertises[name] = await _get_or_create(db, Expertise, {"name": name}, sort_order=i)

        projects = {}
        for i, (dept_name, project_names) in enumerate(DEPARTMENTS.items(), start=1):
            dept = await _get_or_create(db, Department, {"name": dept_name}, sort_order=i)
            for j, name in enumerate(project_names):
                projects[name] = await _get_or_create(
                    db,
                    Project,
                    {"name": name, "department_id": dept.id},
                    sort_order=j,
                    start_date=date(2025, 1, 1),
                )

        people = {}
        for name, email, expertise in PEOPLE:
            people[name] = await _get_or_create(
                db, Person, {"email": email}, name=name, expertise_id=expertises[expertise].id
            )

        for name, day in HOLIDAYS:
            await _get_or_create(db, Holiday, {"name": name, "date": day})

        months = []
        for m in range(1, 13):
            first = date(2025, m, 1)
            months.append(await _get_or_create(
                db, AllocationMonth, {"month": first}, name=first.strftime("%B %Y"), is_active=True
            ))

        october = months[9]
        kim = people["Kim Smith"]
        for project_name in ("Client Iris", "Data Submission Page"):
            await _get_or_create(
                db,
                Allocation,
                {
                    "person_id": kim.id,
                    "project_id": projects[project_name].id,
                    "allocation_month_id": october.id,
                },
                percentage=15,
            )
        await db.commit()
    print("Seeded expertises, departments, projects, people, holidays and 2025 allocation months")


if __name__ == "__main__":
    asyncio.run(seed())
