"""Monthly allocation engine - pure functions over loaded records, Decimal only.

Inputs are any objects exposing the model attribute names (ORM rows, pydantic
schemas, test doubles); nothing here touches the database.
"""
import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable

from resource_planner.config import get_settings

logger = logging.getLogger(__name__)

WORKING_WEEKDAYS = range(1, 6)  # ISO Monday..Friday


class AllocationStatus(str, Enum):
    OVER = "over_allocated"
    EXACT = "fully_allocated"
    UNDER = "under_allocated"


class AllocationAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    NOOP = "noop"


def to_date(value: Any) -> date | None:
    """Normalize a date, datetime or ISO string to a date. Unparseable input gives None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return None
    return None


def month_value(month: Any) -> Any:
    """The date behind an AllocationMonth-like object. Dates and strings pass through."""
    if isinstance(month, (date, str)):
        return month
    return getattr(month, "month", None)


def month_start(value: Any) -> date | None:
    d = to_date(value)
    return d.replace(day=1) if d else None


def count_workdays(year: int, month: int) -> int:
    """Days in the month falling Monday through Friday."""
    days_in_month = calendar.monthrange(year, month)[1]
    return sum(
        1
        for day in range(1, days_in_month + 1)
        if date(year, month, day).isoweekday() in WORKING_WEEKDAYS
    )


def count_month_holidays(holidays: Iterable[Any], year: int, month: int) -> int:
    """Holidays dated inside the given year/month. Undated rows are skipped."""
    count = 0
    for holiday in holidays:
        d = to_date(getattr(holiday, "date", None))
        if d and d.year == year and d.month == month:
            count += 1
    return count


def available_hours(month: Any, holidays: Iterable[Any], hours_per_day: int | None = None) -> int:
    """Working hours one full-time person has in the month: (weekdays - holidays) x hours/day.

    `month` is an AllocationMonth (uses its `.month` date) or a bare date. Missing or
    malformed dates yield 0 so callers can render zero instead of failing.
    """
    if hours_per_day is None:
        hours_per_day = get_settings().hours_per_day
    raw = month_value(month)
    d = to_date(raw)
    if d is None:
        logger.warning("No usable month date (%r); available hours = 0", raw)
        return 0
    workdays = count_workdays(d.year, d.month)
    holiday_count = count_month_holidays(holidays, d.year, d.month)
    days = workdays - holiday_count
    if days < 0:
        logger.warning(
            "%s-%02d has %d holidays but only %d workdays; clamping to 0",
            d.year,
            d.month,
            holiday_count,
            workdays,
        )
        days = 0
    return days * hours_per_day


def team_available_hours(per_person_hours: int, headcount: int) -> int:
    return per_person_hours * max(headcount, 0)


def is_project_active(project: Any, selected_month_start: date) -> bool:
    """Month-scope rule. Finished projects are out; otherwise target date wins over start date."""
    if to_date(getattr(project, "actual_completion_date", None)):
        return False
    target = to_date(getattr(project, "target_date", None))
    if target:
        return target >= selected_month_start
    start = to_date(getattr(project, "start_date", None))
    if start:
        return start <= selected_month_start
    return False


def filter_active_projects(projects: Iterable[Any], month: Any) -> list[Any]:
    """Projects in scope for the selected month, original order kept.

    With no month selected (or an undated one) the full list is returned.
    """
    projects = list(projects)
    if month is None:
        return projects
    start = month_start(month_value(month))
    if start is None:
        return projects
    return [p for p in projects if is_project_active(p, start)]


def classify_total(total: Decimal | float | int) -> AllocationStatus:
    """> 100 over, == 100 exact, < 100 under."""
    value = Decimal(str(total))
    if value > 100:
        return AllocationStatus.OVER
    if value == 100:
        return AllocationStatus.EXACT
    return AllocationStatus.UNDER


def validate_percentage(percentage: Decimal | float | int) -> Decimal:
    value = Decimal(str(percentage))
    max_pct = Decimal(str(get_settings().allocation_max_pct))
    if value < 0 or value > max_pct:
        raise ValueError(f"Allocation percentage must be between 0 and {max_pct}, got {value}")
    return value


def plan_allocation_change(existing: Any | None, percentage: Decimal | float | int) -> AllocationAction:
    """Decide what an upsert of `percentage` does to the record currently stored for the key.

    Zero means absence: delete if present, nothing otherwise. Non-zero creates or overwrites.
    """
    value = validate_percentage(percentage)
    if value == 0:
        return AllocationAction.DELETE if existing is not None else AllocationAction.NOOP
    if existing is None:
        return AllocationAction.CREATE
    return AllocationAction.UPDATE


def default_month(months: Iterable[Any], today: date | None = None) -> Any | None:
    """Month matching today's calendar month, else the first one."""
    months = list(months)
    if not months:
        return None
    today = today or date.today()
    for m in months:
        d = to_date(getattr(m, "month", None))
        if d and d.year == today.year and d.month == today.month:
            return m
    return months[0]


@dataclass(frozen=True)
class PersonTotal:
    person_id: int
    total_pct: Decimal
    allocated_hours: Decimal
    status: AllocationStatus


class AllocationSnapshot:
    """Read-only aggregation over the allocations of one month.

    Duplicate (person, project) rows are not expected; if present the last one wins,
    matching the store's upsert key.
    """

    def __init__(self, allocations: Iterable[Any]) -> None:
        self._by_pair: dict[tuple[int, int], Decimal] = {}
        for a in allocations:
            self._by_pair[(a.person_id, a.project_id)] = Decimal(str(a.percentage))
        self._by_person: dict[int, Decimal] = defaultdict(Decimal)
        self._by_project: dict[int, Decimal] = defaultdict(Decimal)
        for (person_id, project_id), pct in self._by_pair.items():
            self._by_person[person_id] += pct
            self._by_project[project_id] += pct

    def __len__(self) -> int:
        return len(self._by_pair)

    @property
    def person_ids(self) -> list[int]:
        return list(self._by_person)

    @property
    def project_ids(self) -> list[int]:
        return list(self._by_project)

    def allocation_for(self, person_id: int, project_id: int) -> Decimal:
        return self._by_pair.get((person_id, project_id), Decimal(0))

    def total_for(self, person_id: int) -> Decimal:
        return self._by_person.get(person_id, Decimal(0))

    def project_total_pct(self, project_id: int) -> Decimal:
        return self._by_project.get(project_id, Decimal(0))

    def total_hours_for(self, project_id: int, hours_available: int | Decimal) -> Decimal:
        """(sum of percentages / 100) x one person's available hours."""
        return self.project_total_pct(project_id) / Decimal(100) * Decimal(hours_available)

    def status_for(self, person_id: int) -> AllocationStatus:
        return classify_total(self.total_for(person_id))

    def person_total(self, person_id: int, hours_available: int | Decimal) -> PersonTotal:
        total = self.total_for(person_id)
        return PersonTotal(
            person_id=person_id,
            total_pct=total,
            allocated_hours=total * Decimal(hours_available) / Decimal(100),
            status=classify_total(total),
        )
