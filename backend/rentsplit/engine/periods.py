from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import CrossReferenceError, InputShapeError, PeriodCoverageError, PeriodSpansMonthsError
from .models import Bill, Month, PeriodInput


def as_day(value: date) -> date:
    """
    Calendar day of a date or datetime. Datetimes are rounded to the nearest
    midnight, so a DST-shifted 23:00 still lands on the intended day.
    """
    if isinstance(value, datetime):
        return (value + timedelta(hours=12)).date()
    return value


def days_between(first: date, last: date) -> int:
    """Number of days in the inclusive range [first, last]."""
    return (as_day(last) - as_day(first)).days + 1


def days_in_month(d: date) -> int:
    return calendar.monthrange(d.year, d.month)[1]


def last_day_of_month(d: date) -> date:
    return date(d.year, d.month, days_in_month(d))


def same_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)


# ----------------------------
# Month-aligned segmentation (rent)
# ----------------------------

def month_aligned_ranges(start_days: Sequence[date]) -> List[Tuple[date, date]]:
    """
    Turn chronological period start days within one month into inclusive
    (first_day, last_day) ranges. A period ends the day before the next one
    starts; the last one ends on the last day of the month.
    """
    starts = [as_day(d) for d in start_days]
    if not starts:
        return []

    month_first = starts[0]
    if month_first.day != 1:
        raise InputShapeError(
            f"First period must start on the first day of the month, not {month_first.isoformat()}"
        )
    for prev, cur in zip(starts, starts[1:]):
        if cur <= prev:
            raise InputShapeError(
                f"Period start dates must be increasing: {cur.isoformat()} follows {prev.isoformat()}"
            )
    for d in starts:
        if not same_month(d, month_first):
            raise InputShapeError(
                f"Period start {d.isoformat()} is not in the month of {month_first.isoformat()}"
            )

    out: List[Tuple[date, date]] = []
    for i, first in enumerate(starts):
        if i + 1 < len(starts):
            last = starts[i + 1] - timedelta(days=1)
        else:
            last = last_day_of_month(first)
        out.append((first, last))
    return out


def check_month_coverage(periods: Sequence[PeriodInput], month: Optional[Month] = None) -> None:
    """
    Periods must run back to back from the first to the last day of one
    month (of `month`, when given). Anything else breaks month conservation.
    """
    if not periods:
        raise PeriodCoverageError("At least one period is required to cover the month")

    first_day = periods[0].first_day
    expected_month = month or Month.from_date(first_day)
    expected = expected_month.first_day
    for period in periods:
        if not same_month(period.first_day, period.last_day):
            raise PeriodSpansMonthsError(
                "All days in period must be in the same month: "
                f"{period.first_day.isoformat()} - {period.last_day.isoformat()}"
            )
        if period.last_day < period.first_day:
            raise InputShapeError(
                f"Period ends before it starts: {period.first_day.isoformat()} - {period.last_day.isoformat()}"
            )
        if period.first_day != expected:
            kind = "gap" if period.first_day > expected else "overlap"
            raise PeriodCoverageError(
                f"Periods of {expected_month.yyyy_mm()} must be contiguous: expected a period starting "
                f"{expected.isoformat()}, found {period.first_day.isoformat()} ({kind})"
            )
        expected = period.last_day + timedelta(days=1)

    if expected != expected_month.last_day + timedelta(days=1):
        raise PeriodCoverageError(
            f"Periods of {expected_month.yyyy_mm()} end on {(expected - timedelta(days=1)).isoformat()}; "
            f"they must run to {expected_month.last_day.isoformat()}"
        )


# ----------------------------
# Range-aligned segmentation (bills)
# ----------------------------

def iter_months(first: Month, last: Month) -> Iterator[Month]:
    if last < first:
        raise CrossReferenceError("Last month is before first month")
    month = first
    while month <= last:
        yield month
        month = month.next_month()


def bill_months(bill: Bill) -> List[Month]:
    return list(iter_months(Month.from_date(bill.first_day), Month.from_date(bill.last_day)))


def intersect_periods(
    bill: Bill,
    periods: Sequence[PeriodInput],
) -> List[Tuple[date, date, PeriodInput]]:
    """
    Intersect the bill's date range with the rent periods of one month.
    Returns (first_day, last_day, period) for each non-empty overlap.
    """
    out: List[Tuple[date, date, PeriodInput]] = []
    for period in periods:
        if period.last_day < bill.first_day:
            continue
        if period.first_day > bill.last_day:
            break
        first = max(bill.first_day, period.first_day)
        last = min(bill.last_day, period.last_day)
        out.append((first, last, period))
    return out
