"""Weekly status report model."""
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from resource_planner.database import Base


class WeeklyReport(Base):
    """One report per project per week (week_starting is a Monday)."""

    __tablename__ = "weekly_reports"
    __table_args__ = (UniqueConstraint("project_id", "week_starting", name="uq_weekly_report_week"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    week_starting: Mapped[date] = mapped_column(Date, nullable=False)
    accomplishments: Mapped[str | None] = mapped_column(Text, nullable=True)
    challenges: Mapped[str | None] = mapped_column(Text, nullable=True)
    goals: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
