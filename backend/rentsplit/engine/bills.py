from __future__ import annotations

import logging
import math
from typing import Callable, List, Mapping, Sequence, Tuple, Union

from .aggregate import roommate_totals
from .allocator import allocate_bill_period
from .errors import InputShapeError, MissingMonthError
from .models import Bill, BillCalculation, BillPeriod, Month, RentInput
from .periods import bill_months, check_month_coverage, days_between, intersect_periods, iter_months

logger = logging.getLogger(__name__)

MonthResolver = Callable[[Month], RentInput]
RentInputs = Union[Mapping[Month, RentInput], MonthResolver]


def months_for_bills(bills: Sequence[Bill]) -> List[Month]:
    """Every month touched by at least one of the bills, in order."""
    if not bills:
        return []
    first = Month.from_date(min(b.first_day for b in bills))
    last = Month.from_date(max(b.last_day for b in bills))
    return list(iter_months(first, last))


def _validate_bill(bill: Bill) -> None:
    if not math.isfinite(bill.amount):
        raise InputShapeError(f"Bill {bill.name!r} amount must be a number, got {bill.amount!r}")
    if bill.last_day < bill.first_day:
        raise InputShapeError(
            f"Bill {bill.name!r} ends before it starts: "
            f"{bill.first_day.isoformat()} - {bill.last_day.isoformat()}"
        )


class BillSplitter:
    """
    Splits bills whose date ranges may span several months.

    Residency for each month comes from `rent_inputs`: either a mapping
    Month -> RentInput or a callable returning the RentInput of a month
    (raising MissingMonthError when there is none). Single use.
    """

    def __init__(self, rent_inputs: RentInputs) -> None:
        self._rent_inputs = rent_inputs

    def _rent_input(self, month: Month) -> RentInput:
        if callable(self._rent_inputs):
            rent_input = self._rent_inputs(month)
        else:
            try:
                rent_input = self._rent_inputs[month]
            except KeyError:
                raise MissingMonthError(f"No rent input for month {month.yyyy_mm()}") from None
        # every bill day must fall in exactly one period
        check_month_coverage(rent_input.periods, month)
        return rent_input

    def split_periods(self, bill: Bill) -> Tuple[BillPeriod, ...]:
        _validate_bill(bill)
        daily_rate = bill.amount / days_between(bill.first_day, bill.last_day)

        periods: List[BillPeriod] = []
        for month in bill_months(bill):
            rent_input = self._rent_input(month)
            for first, last, period in intersect_periods(bill, rent_input.periods):
                periods.append(allocate_bill_period(first, last, daily_rate, period))
        return tuple(periods)

    def calculate_bill(self, bill: Bill) -> BillCalculation:
        logger.info(
            "Splitting bill %r (%s) from %s to %s",
            bill.name,
            bill.amount,
            bill.first_day.isoformat(),
            bill.last_day.isoformat(),
        )
        periods = self.split_periods(bill)
        return BillCalculation(bill=bill, periods=periods, roommate_totals=roommate_totals(periods))

    def calculate(self, bills: Sequence[Bill]) -> Tuple[BillCalculation, ...]:
        return tuple(self.calculate_bill(b) for b in bills)


def split_bills(bills: Sequence[Bill], rent_inputs: RentInputs) -> Tuple[BillCalculation, ...]:
    return BillSplitter(rent_inputs).calculate(bills)
