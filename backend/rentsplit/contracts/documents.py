from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError

from ..engine.errors import InputShapeError, UnknownRoomError
from ..engine.models import (
    DEFAULT_RATIO,
    Bill,
    ExplicitRatio,
    Month,
    PeriodInput,
    RentConfiguration,
    RentInput,
    Resident,
    RoomConfig,
    RoomResidency,
)
from ..engine.periods import month_aligned_ranges, same_month
from ..extract.residency import parse_residents
from ..normalize.dates import parse_month


# ----------------------------
# Common scalar types
# ----------------------------

ResidentName = Annotated[
    str,
    StringConstraints(
        pattern=r"^[A-Za-z0-9 \-]+$",
        strip_whitespace=True,
    ),
]

MonthStr = Annotated[
    str,
    StringConstraints(
        pattern=r"^\d{4}-\d{2}$",  # YYYY-MM
        strip_whitespace=True,
    ),
]

Money = Annotated[float, Field(allow_inf_nan=False)]


# ----------------------------
# Rent document
# ----------------------------

class ResidentIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: ResidentName
    # None: share what the explicit ratios of the room leave over
    ratio: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)


class RoomIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    base_price: Money


class RentConfigIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total_rent: Money
    rooms: list[RoomIn]
    extra_person_surcharge: Money = 0.0


class PeriodIn(BaseModel):
    """
    residency maps room name -> residents, either as a cell-style string
    ("Dani (0.6); Jill") or as a list of residents. Rooms left out are empty.
    last_day is implied: the day before the next period (or the month end).
    When given it must match.
    """
    model_config = ConfigDict(extra="forbid")

    first_day: date
    last_day: Optional[date] = None
    residency: Dict[str, Union[str, List[ResidentIn]]] = Field(default_factory=dict)


class RentDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schema_version: Literal["1.0"] = "1.0"
    config: RentConfigIn
    periods: list[PeriodIn] = Field(..., min_length=1)


# ----------------------------
# Bills document
# ----------------------------

class BillIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    amount: Money
    first_day: date
    last_day: date


class MonthRentIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    config: RentConfigIn
    periods: list[PeriodIn] = Field(..., min_length=1)


class BillsDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schema_version: Literal["1.0"] = "1.0"
    bills: list[BillIn] = Field(..., min_length=1)
    # residency per month, keyed "YYYY-MM"
    months: Dict[MonthStr, MonthRentIn]


# ----------------------------
# Loading + conversion to engine records
# ----------------------------

def load_rent_document(raw: Any) -> RentDocument:
    try:
        return RentDocument.model_validate(raw)
    except ValidationError as e:
        raise InputShapeError(f"Invalid rent document: {e}") from e


def load_bills_document(raw: Any) -> BillsDocument:
    try:
        return BillsDocument.model_validate(raw)
    except ValidationError as e:
        raise InputShapeError(f"Invalid bills document: {e}") from e


def _to_config(cfg: RentConfigIn) -> RentConfiguration:
    names = [r.name for r in cfg.rooms]
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise InputShapeError(f"Room names must be unique; repeated: {', '.join(dupes)}")
    return RentConfiguration(
        total_rent=cfg.total_rent,
        rooms=tuple(RoomConfig(r.name, r.base_price) for r in cfg.rooms),
        extra_person_surcharge=cfg.extra_person_surcharge,
    )


def _to_residents(value: Union[str, List[ResidentIn]]) -> tuple[Resident, ...]:
    if isinstance(value, str):
        return parse_residents(value)
    return tuple(
        Resident(r.name, DEFAULT_RATIO if r.ratio is None else ExplicitRatio(r.ratio))
        for r in value
    )


def _to_rent_input(config_in: RentConfigIn, periods_in: List[PeriodIn]) -> RentInput:
    config = _to_config(config_in)
    room_names = {r.name for r in config.rooms}

    derived = month_aligned_ranges([p.first_day for p in periods_in])
    periods: List[PeriodInput] = []
    for p, (first_day, derived_last) in zip(periods_in, derived):
        if p.last_day is not None and p.last_day != derived_last:
            raise InputShapeError(
                f"Period {first_day.isoformat()} must end on {derived_last.isoformat()} "
                f"(the day before the next period or the month end), not {p.last_day.isoformat()}"
            )
        residency: List[RoomResidency] = []
        for room_name, value in p.residency.items():
            if room_name not in room_names:
                raise UnknownRoomError(
                    f"Period {first_day.isoformat()} refers to unknown room {room_name!r}"
                )
            residents = _to_residents(value)
            if residents:
                residency.append(RoomResidency(room_name, residents))
        periods.append(
            PeriodInput(
                first_day=first_day,
                last_day=derived_last,
                room_residency=tuple(residency),
            )
        )
    return RentInput(periods=tuple(periods), config=config)


def rent_document_to_input(doc: RentDocument) -> RentInput:
    return _to_rent_input(doc.config, doc.periods)


def bills_document_to_input(doc: BillsDocument) -> tuple[List[Bill], Dict[Month, RentInput]]:
    bills = [Bill(b.name, b.amount, b.first_day, b.last_day) for b in doc.bills]

    months: Dict[Month, RentInput] = {}
    for key, month_in in doc.months.items():
        try:
            month = parse_month(key)
        except ValueError as e:
            raise InputShapeError(str(e)) from e
        rent_input = _to_rent_input(month_in.config, month_in.periods)
        for p in rent_input.periods:
            if not (same_month(p.first_day, month.first_day) and same_month(p.last_day, month.first_day)):
                raise InputShapeError(
                    f"Period {p.first_day.isoformat()} - {p.last_day.isoformat()} is not in month {key}"
                )
        months[month] = rent_input
    return bills, months
