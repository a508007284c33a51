"""Department and project models."""
from datetime import date, datetime
from enum import Enum as PyEnum

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resource_planner.database import Base


class ProjectStatus(str, PyEnum):
    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"
    COMPLETE = "Complete"
    BUSINESS_HOLD = "Business Hold"


class Department(Base):
    """Department owning an ordered collection of projects."""

    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    projects: Mapped[list["Project"]] = relationship(
        "Project",
        back_populates="department",
        order_by="Project.sort_order",
    )


class Project(Base):
    """Project entity. Dates are date-only."""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    department_id: Mapped[int] = mapped_column(ForeignKey("departments.id"), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=ProjectStatus.GREEN.value)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    target_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    actual_completion_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    # External board reference, stored only
    board_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    project_manager_id: Mapped[int | None] = mapped_column(
        ForeignKey("people.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    department: Mapped["Department"] = relationship("Department", back_populates="projects")
    project_manager: Mapped["Person | None"] = relationship("Person")
    estimate: Mapped["Estimate | None"] = relationship(
        "Estimate",
        back_populates="project",
        uselist=False,
        cascade="all, delete-orphan",
    )
    expertise_links: Mapped[list["ProjectExpertise"]] = relationship(
        "ProjectExpertise",
        back_populates="project",
        cascade="all, delete-orphan",
    )
    allocations: Mapped[list["Allocation"]] = relationship("Allocation", back_populates="project")


class ProjectExpertise(Base):
    """Expertises a project draws on (many-to-many)."""

    __tablename__ = "project_expertises"
    __table_args__ = (UniqueConstraint("project_id", "expertise_id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    expertise_id: Mapped[int] = mapped_column(ForeignKey("expertises.id", ondelete="CASCADE"), nullable=False)

    project: Mapped["Project"] = relationship("Project", back_populates="expertise_links")
    expertise: Mapped["Expertise"] = relationship("Expertise")
