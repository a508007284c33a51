"""Rule-based allocation and portfolio analysis (no external model calls)."""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from resource_planner.config import get_settings
from resource_planner.engine.allocation import to_date
from resource_planner.models.project import ProjectStatus


@dataclass(frozen=True)
class PersonLoad:
    name: str
    total_pct: Decimal


@dataclass(frozen=True)
class ProjectLoad:
    name: str
    department: str
    allocated_hours: Decimal
    estimated_hours: Decimal

    @property
    def variance(self) -> Decimal:
        return self.allocated_hours - self.estimated_hours


@dataclass
class AllocationInsights:
    month: str
    available_hours: int
    total_allocated_hours: Decimal
    total_estimated_hours: Decimal
    over_allocated: list[PersonLoad] = field(default_factory=list)
    under_utilized: list[PersonLoad] = field(default_factory=list)
    variances: list[ProjectLoad] = field(default_factory=list)

    @property
    def variance_hours(self) -> Decimal:
        return self.total_allocated_hours - self.total_estimated_hours


@dataclass
class PortfolioInsights:
    total_projects: int
    by_status: dict[str, int]
    by_department: dict[str, int]
    without_pm: int
    without_target_date: int
    overdue: int

    @property
    def risk_projects(self) -> int:
        return self.without_pm + self.without_target_date + self.overdue

    @property
    def risk_pct(self) -> Decimal:
        if self.total_projects == 0:
            return Decimal(0)
        return Decimal(self.risk_projects) / Decimal(self.total_projects) * Decimal(100)


def _fmt(value: Decimal) -> str:
    return f"{float(value):.1f}"


def analyze_allocations(
    month_name: str,
    hours_available: int,
    people: Iterable[PersonLoad],
    projects: Iterable[ProjectLoad],
    top_n: int = 3,
) -> AllocationInsights:
    settings = get_settings()
    under_threshold = Decimal(str(settings.under_utilization_threshold_pct))
    variance_threshold = Decimal(str(settings.variance_threshold_hours))
    people = list(people)
    projects = list(projects)

    variances = [p for p in projects if abs(p.variance) > variance_threshold]
    variances.sort(key=lambda p: abs(p.variance), reverse=True)

    return AllocationInsights(
        month=month_name,
        available_hours=hours_available,
        total_allocated_hours=sum((p.allocated_hours for p in projects), Decimal(0)),
        total_estimated_hours=sum((p.estimated_hours for p in projects), Decimal(0)),
        over_allocated=[p for p in people if p.total_pct > 100],
        under_utilized=[p for p in people if p.total_pct < under_threshold],
        variances=variances[:top_n],
    )


def analyze_portfolio(projects: Iterable[Any], today: date | None = None) -> PortfolioInsights:
    """Counts over Project rows (needs `department` and `project_manager_id` loaded)."""
    today = today or date.today()
    by_status: dict[str, int] = {}
    by_department: dict[str, int] = {}
    without_pm = without_target = overdue = 0
    total = 0
    for p in projects:
        total += 1
        status = p.status.value if hasattr(p.status, "value") else str(p.status)
        by_status[status] = by_status.get(status, 0) + 1
        dept = p.department.name if p.department else "Unassigned"
        by_department[dept] = by_department.get(dept, 0) + 1
        if p.project_manager_id is None:
            without_pm += 1
        target = to_date(p.target_date)
        if target is None:
            without_target += 1
        elif (
            target < today
            and not to_date(p.actual_completion_date)
            and status != ProjectStatus.COMPLETE.value
        ):
            overdue += 1
    return PortfolioInsights(
        total_projects=total,
        by_status=by_status,
        by_department=by_department,
        without_pm=without_pm,
        without_target_date=without_target,
        overdue=overdue,
    )


def render_allocation_report(insights: AllocationInsights) -> str:
    lines = [
        f"RESOURCE ALLOCATION ANALYSIS - {insights.month}",
        "",
        "OVERVIEW:",
        f"- Available Hours: {insights.available_hours}",
        f"- Total Allocated: {_fmt(insights.total_allocated_hours)}h",
        f"- Total Estimated: {_fmt(insights.total_estimated_hours)}h",
        f"- Variance: {_fmt(insights.variance_hours)}h",
        "",
        "ALLOCATION ISSUES:",
        f"- Over-allocated: {len(insights.over_allocated)} team members",
        f"- Under-utilized: {len(insights.under_utilized)} team members",
    ]
    if insights.over_allocated:
        critical = ", ".join(f"{p.name} ({p.total_pct.normalize():f}%)" for p in insights.over_allocated)
        lines.append(f"- Critical: {critical}")
    lines += ["", "PROJECT INSIGHTS:"]
    for p in insights.variances:
        direction = "Over" if p.variance > 0 else "Under"
        lines.append(f"- {p.name}: {direction} by {_fmt(abs(p.variance))}h")
    lines += ["", "RECOMMENDATIONS:"]
    if insights.over_allocated:
        lines.append("- Redistribute workload from over-allocated resources")
    if insights.under_utilized:
        lines.append("- Utilize under-allocated team members")
    lines.append("- Review project estimates vs actual allocations")
    lines.append("- Consider timeline adjustments for over-allocated projects")
    return "\n".join(lines)


def render_portfolio_report(insights: PortfolioInsights) -> str:
    lines = [
        "PROJECT PORTFOLIO ANALYSIS",
        "",
        "OVERVIEW:",
        f"- Total Projects: {insights.total_projects}",
        f"- Risk Projects: {insights.risk_projects} ({_fmt(insights.risk_pct)}%)",
        "",
        "STATUS BREAKDOWN:",
    ]
    lines += [f"- {status}: {count}" for status, count in insights.by_status.items()]
    lines += ["", "DEPARTMENT DISTRIBUTION:"]
    lines += [f"- {dept}: {count}" for dept, count in insights.by_department.items()]
    lines += ["", "RISK FACTORS:"]
    if insights.without_pm:
        lines.append(f"- {insights.without_pm} projects without Project Manager")
    if insights.without_target_date:
        lines.append(f"- {insights.without_target_date} projects without target dates")
    if insights.overdue:
        lines.append(f"- {insights.overdue} overdue projects")
    lines += [
        "",
        "RECOMMENDATIONS:",
        "- Assign PMs to unmanaged projects",
        "- Set target dates for planning",
        "- Review overdue project priorities",
        "- Balance workload across departments",
    ]
    return "\n".join(lines)
