"""Person response building."""
from resource_planner.models.people import Person
from resource_planner.schemas.people import PersonAllocationEntry, PersonDetailResponse, PersonResponse


def person_to_response(person: Person) -> PersonResponse:
    """Requires `expertise` to be loaded."""
    return PersonResponse(
        id=person.id,
        name=person.name,
        email=person.email,
        expertise_id=person.expertise_id,
        expertise_name=person.expertise.name if person.expertise else None,
    )


def person_to_detail(person: Person) -> PersonDetailResponse:
    """Requires expertise and allocations (with project.department and allocation_month) loaded."""
    entries = [
        PersonAllocationEntry(
            allocation_id=a.id,
            project_id=a.project_id,
            project_name=a.project.name,
            department_name=a.project.department.name,
            allocation_month_id=a.allocation_month_id,
            month_name=a.allocation_month.name,
            percentage=a.percentage,
        )
        for a in sorted(person.allocations, key=lambda a: (a.allocation_month.month, a.project_id))
    ]
    return PersonDetailResponse(**person_to_response(person).model_dump(), allocations=entries)
