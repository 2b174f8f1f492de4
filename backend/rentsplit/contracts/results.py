from __future__ import annotations

from datetime import date
from typing import Sequence

from pydantic import BaseModel, ConfigDict

from ..engine.models import BillCalculation, RentOutput


class ResidentCostOut(BaseModel):
    model_config = ConfigDict(extra="forbid")

    resident_name: str
    cost: float


class PeriodOut(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_day: date
    last_day: date
    days_in_period: int
    days_in_month: int
    period_month_ratio: float
    period_cost: float
    total_overage: float
    overage_per_person: float
    resident_subtotals: list[ResidentCostOut]
    resident_adjusted_totals: list[ResidentCostOut]


class RentResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    periods: list[PeriodOut]
    month_totals: list[ResidentCostOut]
    total: float


class BillPeriodOut(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_day: date
    last_day: date
    num_days: int
    amount: float
    amount_per_person: float
    roommates: list[str]


class RoommateTotalOut(BaseModel):
    model_config = ConfigDict(extra="forbid")

    roommate: str
    total: float
    period_components: list[float]


class BillResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    amount: float
    first_day: date
    last_day: date
    num_days: int
    daily_amount: float
    periods: list[BillPeriodOut]
    roommate_totals: list[RoommateTotalOut]


class BillsResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    bills: list[BillResult]


def _costs(items) -> list[ResidentCostOut]:
    return [ResidentCostOut(resident_name=r.resident_name, cost=r.cost) for r in items]


def rent_result(output: RentOutput) -> RentResult:
    return RentResult(
        periods=[
            PeriodOut(
                first_day=p.first_day,
                last_day=p.last_day,
                days_in_period=p.days_in_period,
                days_in_month=p.days_in_month,
                period_month_ratio=p.period_month_ratio,
                period_cost=p.period_cost,
                total_overage=p.total_overage,
                overage_per_person=p.overage_per_person,
                resident_subtotals=_costs(p.resident_subtotals),
                resident_adjusted_totals=_costs(p.resident_adjusted_totals),
            )
            for p in output.periods
        ],
        month_totals=_costs(output.month_totals.residents),
        total=output.month_totals.total(),
    )


def bills_result(calculations: Sequence[BillCalculation]) -> BillsResult:
    return BillsResult(
        bills=[
            BillResult(
                name=c.bill.name,
                amount=c.bill.amount,
                first_day=c.bill.first_day,
                last_day=c.bill.last_day,
                num_days=c.num_days,
                daily_amount=c.daily_amount,
                periods=[
                    BillPeriodOut(
                        first_day=p.first_day,
                        last_day=p.last_day,
                        num_days=p.num_days,
                        amount=p.amount,
                        amount_per_person=p.amount_per_person,
                        roommates=list(p.roommates),
                    )
                    for p in c.periods
                ],
                roommate_totals=[
                    RoommateTotalOut(
                        roommate=t.roommate,
                        total=t.total,
                        period_components=list(t.period_components),
                    )
                    for t in c.roommate_totals
                ],
            )
            for c in calculations
        ]
    )
