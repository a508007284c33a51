"""Estimate rollups - hours by story and discipline, cost at the blended rate."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any


def _round(value: Decimal, places: int = 2) -> Decimal:
    quantize = Decimal(10) ** -places
    return value.quantize(quantize, rounding=ROUND_HALF_UP)


def story_hours(story: Any) -> Decimal:
    """Sum of a user story's discipline hours."""
    return sum((Decimal(str(item.hours)) for item in story.estimate_items), Decimal(0))


def hours_by_discipline(estimate: Any) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = {}
    for story in estimate.user_stories:
        for item in story.estimate_items:
            totals[item.discipline] = totals.get(item.discipline, Decimal(0)) + Decimal(str(item.hours))
    return dict(sorted(totals.items()))


def total_hours(estimate: Any | None) -> Decimal:
    if estimate is None:
        return Decimal(0)
    return sum((story_hours(s) for s in estimate.user_stories), Decimal(0))


def total_cost(estimate: Any | None) -> Decimal:
    """Total hours x blended hourly rate."""
    if estimate is None:
        return Decimal(0)
    rate = Decimal(str(estimate.blended_rate or 0))
    return _round(total_hours(estimate) * rate)
