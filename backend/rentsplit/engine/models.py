from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple, Union

from .errors import UnknownRoomError


# ----------------------------
# Cost ratio (tagged value)
# ----------------------------

@dataclass(frozen=True)
class ExplicitRatio:
    value: float


@dataclass(frozen=True)
class DefaultRatio:
    """Share whatever the explicit ratios of the room leave over."""


CostRatio = Union[ExplicitRatio, DefaultRatio]

DEFAULT_RATIO = DefaultRatio()


# ----------------------------
# Input records
# ----------------------------

@dataclass(frozen=True)
class RoomConfig:
    name: str
    base_price: float  # monthly


@dataclass(frozen=True)
class Resident:
    name: str
    cost_ratio: CostRatio = DEFAULT_RATIO


@dataclass(frozen=True)
class ResolvedResident:
    name: str
    ratio: float


@dataclass(frozen=True)
class RoomResidency:
    """Residents splitting one room during one period."""
    room_name: str
    residents: Tuple[Resident, ...]


@dataclass(frozen=True)
class PeriodInput:
    """
    Residency during a part of the month. No move-ins, move-outs or room
    changes happen inside the period. last_day is inclusive.
    """
    first_day: date
    last_day: date
    room_residency: Tuple[RoomResidency, ...] = ()

    def resident_names(self) -> Tuple[str, ...]:
        return tuple(r.name for room in self.room_residency for r in room.residents)


@dataclass(frozen=True)
class RentConfiguration:
    total_rent: float
    rooms: Tuple[RoomConfig, ...]
    # added to a room's base price for each resident beyond the first
    extra_person_surcharge: float = 0.0

    def room(self, name: str) -> RoomConfig:
        for room in self.rooms:
            if room.name == name:
                return room
        raise UnknownRoomError(f"Unknown room {name!r}")


@dataclass(frozen=True)
class RentInput:
    periods: Tuple[PeriodInput, ...]
    config: RentConfiguration


@dataclass(frozen=True)
class Bill:
    name: str
    amount: float
    first_day: date
    last_day: date


@dataclass(frozen=True, order=True)
class Month:
    year: int
    month: int

    @classmethod
    def from_date(cls, d: date) -> "Month":
        return cls(d.year, d.month)

    def next_month(self) -> "Month":
        if self.month == 12:
            return Month(self.year + 1, 1)
        return Month(self.year, self.month + 1)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def yyyy_mm(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def sheet_name(self) -> str:
        """Name of the rent sheet holding this month's residency."""
        return f"{self.yyyy_mm()}-01"


# ----------------------------
# Output records
# ----------------------------

@dataclass(frozen=True)
class ResidentCost:
    resident_name: str
    cost: float


@dataclass(frozen=True)
class PeriodOutput:
    first_day: date
    last_day: date
    days_in_period: int
    days_in_month: int
    period_month_ratio: float
    period_cost: float
    total_overage: float
    overage_per_person: float
    resident_subtotals: Tuple[ResidentCost, ...]
    resident_adjusted_totals: Tuple[ResidentCost, ...]


@dataclass(frozen=True)
class MonthTotals:
    """Month-end totals per resident; what gets shared with residents."""
    residents: Tuple[ResidentCost, ...]

    def total(self) -> float:
        return sum(r.cost for r in self.residents)

    def cost_of(self, resident_name: str) -> Optional[float]:
        for r in self.residents:
            if r.resident_name == resident_name:
                return r.cost
        return None


@dataclass(frozen=True)
class RentOutput:
    periods: Tuple[PeriodOutput, ...]
    month_totals: MonthTotals


@dataclass(frozen=True)
class BillPeriod:
    first_day: date
    last_day: date
    # share of the bill attributed to this period
    amount: float
    roommates: Tuple[str, ...]

    @property
    def num_days(self) -> int:
        return (self.last_day - self.first_day).days + 1

    @property
    def amount_per_person(self) -> float:
        return self.amount / len(self.roommates)


@dataclass(frozen=True)
class RoommateTotal:
    roommate: str
    total: float
    # cost from each period the roommate was present in; sums to total
    period_components: Tuple[float, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class BillCalculation:
    bill: Bill
    periods: Tuple[BillPeriod, ...]
    roommate_totals: Tuple[RoommateTotal, ...]

    @property
    def num_days(self) -> int:
        return (self.bill.last_day - self.bill.first_day).days + 1

    @property
    def daily_amount(self) -> float:
        return self.bill.amount / self.num_days

    def total(self) -> float:
        return sum(t.total for t in self.roommate_totals)
