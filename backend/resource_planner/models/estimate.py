"""Estimate, user story and estimate item models."""
from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resource_planner.database import Base


class Estimate(Base):
    """Hours projection for a project, priced at a blended hourly rate."""

    __tablename__ = "estimates"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    blended_rate: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)

    project: Mapped["Project"] = relationship("Project", back_populates="estimate")
    user_stories: Mapped[list["UserStory"]] = relationship(
        "UserStory",
        back_populates="estimate",
        order_by="UserStory.sort_order",
        cascade="all, delete-orphan",
    )


class UserStory(Base):
    __tablename__ = "user_stories"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    estimate_id: Mapped[int] = mapped_column(ForeignKey("estimates.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    estimate: Mapped["Estimate"] = relationship("Estimate", back_populates="user_stories")
    estimate_items: Mapped[list["EstimateItem"]] = relationship(
        "EstimateItem",
        back_populates="user_story",
        cascade="all, delete-orphan",
    )


class EstimateItem(Base):
    """Hours for one discipline on one user story (upsert key: story + discipline)."""

    __tablename__ = "estimate_items"
    __table_args__ = (UniqueConstraint("user_story_id", "discipline", name="uq_estimate_item_discipline"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_story_id: Mapped[int] = mapped_column(ForeignKey("user_stories.id", ondelete="CASCADE"), nullable=False)
    discipline: Mapped[str] = mapped_column(String(100), nullable=False)
    hours: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)

    user_story: Mapped["UserStory"] = relationship("UserStory", back_populates="estimate_items")
