"""Allocation month, holiday and allocation models."""
import datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Numeric, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resource_planner.database import Base


class AllocationMonth(Base):
    """Planning period. `month` is always the first day of the calendar month."""

    __tablename__ = "allocation_months"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    month: Mapped[datetime.date] = mapped_column(Date, unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    allocations: Mapped[list["Allocation"]] = relationship("Allocation", back_populates="allocation_month")


class Holiday(Base):
    """Non-working date excluded from working-day counts."""

    __tablename__ = "holidays"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)


class Allocation(Base):
    """Percentage of one person's time on one project in one month."""

    __tablename__ = "allocations"
    __table_args__ = (
        UniqueConstraint("person_id", "project_id", "allocation_month_id", name="uq_allocation_key"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    person_id: Mapped[int] = mapped_column(ForeignKey("people.id", ondelete="CASCADE"), nullable=False)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    allocation_month_id: Mapped[int] = mapped_column(
        ForeignKey("allocation_months.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    percentage: Mapped[Decimal] = mapped_column(Numeric(6, 3), nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    person: Mapped["Person"] = relationship("Person", back_populates="allocations")
    project: Mapped["Project"] = relationship("Project", back_populates="allocations")
    allocation_month: Mapped["AllocationMonth"] = relationship("AllocationMonth", back_populates="allocations")
