from __future__ import annotations

from datetime import date, datetime

import pytest

from rentsplit.engine.errors import (
    CrossReferenceError,
    InputShapeError,
    PeriodCoverageError,
    PeriodSpansMonthsError,
)
from rentsplit.engine.models import Bill, Month, PeriodInput
from rentsplit.engine.periods import (
    as_day,
    bill_months,
    check_month_coverage,
    days_between,
    days_in_month,
    intersect_periods,
    iter_months,
    month_aligned_ranges,
)


class TestDays:
    def test_leap_february(self):
        assert days_in_month(date(2024, 2, 10)) == 29
        assert days_between(date(2024, 2, 1), date(2024, 2, 29)) == 29
        assert days_in_month(date(2023, 2, 10)) == 28

    def test_single_day_counts_once(self):
        assert days_between(date(2024, 3, 5), date(2024, 3, 5)) == 1

    def test_datetime_rounds_to_nearest_day(self):
        assert as_day(datetime(2024, 3, 9, 23, 0)) == date(2024, 3, 10)
        assert as_day(datetime(2024, 3, 10, 1, 0)) == date(2024, 3, 10)
        assert as_day(date(2024, 3, 10)) == date(2024, 3, 10)


class TestMonthAlignedRanges:
    def test_periods_end_before_the_next_one(self):
        assert month_aligned_ranges([date(2024, 2, 1), date(2024, 2, 15)]) == [
            (date(2024, 2, 1), date(2024, 2, 14)),
            (date(2024, 2, 15), date(2024, 2, 29)),
        ]

    def test_single_period_runs_to_month_end(self):
        assert month_aligned_ranges([date(2024, 4, 1)]) == [(date(2024, 4, 1), date(2024, 4, 30))]

    def test_empty(self):
        assert month_aligned_ranges([]) == []

    def test_unordered_starts(self):
        with pytest.raises(InputShapeError):
            month_aligned_ranges([date(2024, 2, 15), date(2024, 2, 1)])

    def test_starts_in_another_month(self):
        with pytest.raises(InputShapeError):
            month_aligned_ranges([date(2024, 2, 1), date(2024, 3, 1)])

    def test_first_start_must_be_first_of_month(self):
        with pytest.raises(InputShapeError, match="first day of the month"):
            month_aligned_ranges([date(2024, 2, 5)])


class TestCheckMonthCoverage:
    def test_back_to_back_periods_pass(self):
        check_month_coverage([
            PeriodInput(date(2024, 2, 1), date(2024, 2, 14)),
            PeriodInput(date(2024, 2, 15), date(2024, 2, 29)),
        ])

    @pytest.mark.parametrize(
        "ranges",
        [
            [(5, 29)],
            [(1, 28)],
            [(1, 10), (12, 29)],
            [(1, 29), (15, 29)],
        ],
        ids=["late-start", "early-end", "gap", "overlap"],
    )
    def test_incomplete_month(self, ranges):
        periods = [PeriodInput(date(2024, 2, a), date(2024, 2, b)) for a, b in ranges]
        with pytest.raises(PeriodCoverageError, match="2024-02"):
            check_month_coverage(periods)

    def test_periods_of_another_month(self):
        with pytest.raises(PeriodCoverageError):
            check_month_coverage([PeriodInput(date(2024, 3, 1), date(2024, 3, 31))], Month(2024, 2))

    def test_period_across_months(self):
        with pytest.raises(PeriodSpansMonthsError):
            check_month_coverage([PeriodInput(date(2024, 2, 1), date(2024, 3, 1))])

    def test_no_periods(self):
        with pytest.raises(PeriodCoverageError):
            check_month_coverage([])


class TestMonths:
    def test_iter_months_over_year_end(self):
        assert list(iter_months(Month(2023, 11), Month(2024, 2))) == [
            Month(2023, 11),
            Month(2023, 12),
            Month(2024, 1),
            Month(2024, 2),
        ]

    def test_last_before_first(self):
        with pytest.raises(CrossReferenceError, match="Last month is before first month"):
            list(iter_months(Month(2024, 2), Month(2024, 1)))

    def test_bill_months(self):
        bill = Bill("Gas", 300, date(2024, 1, 20), date(2024, 2, 10))
        assert bill_months(bill) == [Month(2024, 1), Month(2024, 2)]

    def test_month_names(self):
        m = Month(2024, 2)
        assert m.yyyy_mm() == "2024-02"
        assert m.sheet_name() == "2024-02-01"
        assert m.last_day == date(2024, 2, 29)
        assert Month(2024, 12).next_month() == Month(2025, 1)


class TestIntersectPeriods:
    def test_overlaps_only(self):
        periods = [
            PeriodInput(date(2024, 2, 1), date(2024, 2, 9)),
            PeriodInput(date(2024, 2, 10), date(2024, 2, 19)),
            PeriodInput(date(2024, 2, 20), date(2024, 2, 29)),
        ]
        bill = Bill("Water", 100, date(2024, 2, 12), date(2024, 2, 22))

        out = intersect_periods(bill, periods)

        assert [(a, b) for a, b, _ in out] == [
            (date(2024, 2, 12), date(2024, 2, 19)),
            (date(2024, 2, 20), date(2024, 2, 22)),
        ]
        assert out[0][2] is periods[1]
