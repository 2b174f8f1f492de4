from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from .models import BillPeriod, MonthTotals, PeriodOutput, ResidentCost, RoommateTotal

logger = logging.getLogger(__name__)


def sum_by_name(costs: Iterable[Tuple[str, float]]) -> Dict[str, List[float]]:
    """
    Group costs by resident name, keeping first-seen order.
    Names are compared exactly: "Ann" and "ann " are different residents.
    """
    parts: Dict[str, List[float]] = {}
    for name, cost in costs:
        parts.setdefault(name, []).append(cost)
    return parts


def month_totals(periods: Iterable[PeriodOutput]) -> MonthTotals:
    periods = list(periods)
    logger.debug("Calculating monthly totals across %d periods", len(periods))

    parts = sum_by_name(
        (r.resident_name, r.cost)
        for p in periods
        for r in p.resident_adjusted_totals
    )
    residents = tuple(ResidentCost(name, sum(costs)) for name, costs in parts.items())
    for r in residents:
        logger.debug("%s: %s", r.resident_name, r.cost)
    return MonthTotals(residents)


def roommate_totals(periods: Iterable[BillPeriod]) -> Tuple[RoommateTotal, ...]:
    parts = sum_by_name(
        (roommate, p.amount_per_person)
        for p in periods
        for roommate in p.roommates
    )
    return tuple(
        RoommateTotal(roommate=name, total=sum(costs), period_components=tuple(costs))
        for name, costs in parts.items()
    )
