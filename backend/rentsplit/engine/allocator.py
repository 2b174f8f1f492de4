from __future__ import annotations

import logging
from datetime import date
from typing import List

from .errors import EmptyRoomError, InputShapeError, PeriodSpansMonthsError
from .models import (
    BillPeriod,
    PeriodInput,
    RentConfiguration,
    ResidentCost,
    PeriodOutput,
)
from .periods import days_between, days_in_month, same_month
from .ratios import resolve_ratios

logger = logging.getLogger(__name__)


def _check_range(first_day: date, last_day: date) -> None:
    if last_day < first_day:
        raise InputShapeError(
            f"Period ends before it starts: {first_day.isoformat()} - {last_day.isoformat()}"
        )


def price_with_surcharge(base_price: float, surcharge: float, resident_count: int) -> float:
    return base_price + surcharge * (resident_count - 1)


def allocate_rent_period(period: PeriodInput, config: RentConfiguration) -> PeriodOutput:
    """
    Rent owed by each resident for one period of the month.

    Subtotals come from room prices, surcharges and ratios; the difference
    between their sum and the period's share of the total rent is then
    spread equally over every resident of the period, so the adjusted
    totals always add up to the period cost.
    """
    if not same_month(period.first_day, period.last_day):
        raise PeriodSpansMonthsError(
            "All days in period must be in the same month: "
            f"{period.first_day.isoformat()} - {period.last_day.isoformat()}"
        )
    _check_range(period.first_day, period.last_day)

    n_days = days_between(period.first_day, period.last_day)
    n_month = days_in_month(period.first_day)
    period_month_ratio = n_days / n_month
    period_cost = config.total_rent * period_month_ratio

    logger.debug("Period %s: %d / %d days, cost %s", period.first_day.isoformat(), n_days, n_month, period_cost)

    subtotals: List[ResidentCost] = []
    for room in period.room_residency:
        price = price_with_surcharge(
            config.room(room.room_name).base_price,
            config.extra_person_surcharge,
            len(room.residents),
        )
        for resident in resolve_ratios(room.residents, room_name=room.room_name):
            cost = price * resident.ratio * period_month_ratio
            logger.debug("%s's subtotal %s", resident.name, cost)
            subtotals.append(ResidentCost(resident.name, cost))

    if not subtotals:
        if period_cost != 0:
            raise EmptyRoomError(
                f"Nobody lives in the residence from {period.first_day.isoformat()} "
                f"to {period.last_day.isoformat()}; its rent cannot be split"
            )
        total_overage = 0.0
        overage_per_person = 0.0
    else:
        total_overage = sum(s.cost for s in subtotals) - period_cost
        overage_per_person = total_overage / len(subtotals)

    logger.debug("Overage: %s (%s per person)", total_overage, overage_per_person)

    adjusted = tuple(
        ResidentCost(s.resident_name, s.cost - overage_per_person) for s in subtotals
    )

    return PeriodOutput(
        first_day=period.first_day,
        last_day=period.last_day,
        days_in_period=n_days,
        days_in_month=n_month,
        period_month_ratio=period_month_ratio,
        period_cost=period_cost,
        total_overage=total_overage,
        overage_per_person=overage_per_person,
        resident_subtotals=tuple(subtotals),
        resident_adjusted_totals=adjusted,
    )


def allocate_bill_period(
    first_day: date,
    last_day: date,
    daily_rate: float,
    period: PeriodInput,
) -> BillPeriod:
    """Share of a bill for [first_day, last_day], split evenly among the residents present."""
    _check_range(first_day, last_day)

    roommates = period.resident_names()
    if not roommates:
        raise EmptyRoomError(
            f"Nobody lives in the residence from {first_day.isoformat()} "
            f"to {last_day.isoformat()}; the bill cannot be split"
        )

    amount = daily_rate * days_between(first_day, last_day)
    return BillPeriod(first_day=first_day, last_day=last_day, amount=amount, roommates=roommates)
