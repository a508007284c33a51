"""Expertise and person models."""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resource_planner.database import Base


class Expertise(Base):
    """Single-valued skill/role classification attached to a person."""

    __tablename__ = "expertises"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    people: Mapped[list["Person"]] = relationship(
        "Person",
        back_populates="expertise",
        order_by="Person.name",
    )


class Person(Base):
    """Staff member whose time is allocated to projects."""

    __tablename__ = "people"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    expertise_id: Mapped[int | None] = mapped_column(
        ForeignKey("expertises.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    expertise: Mapped["Expertise | None"] = relationship("Expertise", back_populates="people")
    allocations: Mapped[list["Allocation"]] = relationship("Allocation", back_populates="person")
