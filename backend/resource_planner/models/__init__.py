"""SQLAlchemy models."""
from resource_planner.models.allocation import Allocation, AllocationMonth, Holiday
from resource_planner.models.estimate import Estimate, EstimateItem, UserStory
from resource_planner.models.people import Expertise, Person
from resource_planner.models.project import Department, Project, ProjectExpertise, ProjectStatus
from resource_planner.models.weekly_report import WeeklyReport

__all__ = [
    "Allocation",
    "AllocationMonth",
    "Holiday",
    "Estimate",
    "EstimateItem",
    "UserStory",
    "Expertise",
    "Person",
    "Department",
    "Project",
    "ProjectExpertise",
    "ProjectStatus",
    "WeeklyReport",
]
