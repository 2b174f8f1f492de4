from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Tuple

from openpyxl.worksheet.worksheet import Worksheet

from ..engine.errors import InputShapeError
from ..engine.models import PeriodInput, RentConfiguration, RentInput, RoomConfig, RoomResidency
from ..engine.periods import month_aligned_ranges
from ..extract.residency import parse_residents
from ..normalize.dates import cell_date
from ..normalize.numbers import to_number

logger = logging.getLogger(__name__)

# Sheet layout (1-based)
HEADER_ROOMS = "Rooms"
HEADER_BASE_PRICES = "Base prices"
FIRST_PERIOD_COLUMN = 3  # "C"
OUTPUT_MARKER = "OUTPUT >"
SUM_ROW_LABEL = "Sum (bases)"
EXTRA_PERSON_FEE_LABEL = "Extra person fee"
RENT_DUE_LABEL = "Rent due"


@dataclass(frozen=True)
class RentSheet:
    input: RentInput
    # column of the OUTPUT marker; results are written from here on
    output_column: int


def read_rent_sheet(ws: Worksheet) -> RentSheet:
    """
    Read a monthly rent sheet:

        Rooms        | Base prices | 2024-02-01   | 2024-02-15 | OUTPUT >
        Big room     | 2000        | Dani (0.6); Jill | Dani   |
        Small room   | 1000        | Beatrice     | Beatrice   |
        Sum (bases)  | (bold)
        Extra person fee | 250
        Rent due     | 5095

    Room rows end at the first row whose first cell is bold.
    """
    logger.info("Reading rent calculation from sheet %r", ws.title)

    _verify_headers(ws)
    period_starts, output_column = _read_period_starts(ws)
    rooms, row = _read_rooms(ws)

    _verify_label(ws, row, SUM_ROW_LABEL)
    extra_person_surcharge = _read_labeled_number(ws, row + 1, EXTRA_PERSON_FEE_LABEL)
    total_rent = _read_labeled_number(ws, row + 2, RENT_DUE_LABEL)

    periods: List[PeriodInput] = []
    for i, (first_day, last_day) in enumerate(month_aligned_ranges(period_starts)):
        periods.append(
            PeriodInput(
                first_day=first_day,
                last_day=last_day,
                room_residency=_read_period_residency(ws, FIRST_PERIOD_COLUMN + i, rooms),
            )
        )

    config = RentConfiguration(
        total_rent=total_rent,
        rooms=tuple(room for room, _row in rooms),
        extra_person_surcharge=extra_person_surcharge,
    )
    return RentSheet(input=RentInput(periods=tuple(periods), config=config), output_column=output_column)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _verify_headers(ws: Worksheet) -> None:
    if _text(ws.cell(1, 1).value) != HEADER_ROOMS:
        raise InputShapeError(f'A1 must be "{HEADER_ROOMS}"')
    if _text(ws.cell(1, 2).value) != HEADER_BASE_PRICES:
        raise InputShapeError(f'B1 must be "{HEADER_BASE_PRICES}"')


def _read_period_starts(ws: Worksheet) -> Tuple[List[date], int]:
    starts: List[date] = []
    col = FIRST_PERIOD_COLUMN
    while True:
        value = ws.cell(1, col).value
        if _text(value).startswith("OUTPUT"):
            break
        d = cell_date(value)
        if d is None:
            raise InputShapeError(
                f"Non-date value found in column header; should be start of period: {value!r}"
            )
        logger.debug("Read period starting %s", d.isoformat())
        starts.append(d)
        col += 1

    if not starts:
        raise InputShapeError("No periods found; row 1 needs at least one period start date before OUTPUT")
    return starts, col


def _read_rooms(ws: Worksheet) -> Tuple[List[Tuple[RoomConfig, int]], int]:
    """Returns ((room, row) list, first row after the rooms)."""
    rooms: List[Tuple[RoomConfig, int]] = []
    seen: set[str] = set()
    row = 2
    while True:
        if row > ws.max_row:
            raise InputShapeError(f'Missing bold "{SUM_ROW_LABEL}" row after the rooms')
        header = ws.cell(row, 1)
        if header.font is not None and header.font.bold:
            break

        name = header.value
        if not isinstance(name, str) or not name.strip():
            raise InputShapeError(f"Non-string value found in row header; should be room name: {name!r}")
        name = name.strip()
        if name in seen:
            raise InputShapeError(f"Room name {name!r} is used more than once")
        seen.add(name)

        raw_price = ws.cell(row, 2).value
        try:
            base_price = to_number(raw_price)
        except ValueError as e:
            raise InputShapeError(f"Non-number value found in Base prices column: {raw_price!r}") from e

        logger.debug("Read room config; name: %s; base price: %s", name, base_price)
        rooms.append((RoomConfig(name, base_price), row))
        row += 1

    return rooms, row


def _verify_label(ws: Worksheet, row: int, label: str) -> None:
    if _text(ws.cell(row, 1).value) != label:
        raise InputShapeError(f'First cell of row {row} should be "{label}"')


def _read_labeled_number(ws: Worksheet, row: int, label: str) -> float:
    _verify_label(ws, row, label)
    raw = ws.cell(row, 2).value
    try:
        value = to_number(raw)
    except ValueError as e:
        raise InputShapeError(f"{label} must be a number; found {raw!r}") from e
    logger.debug("Read %s: %s", label, value)
    return value


def _read_period_residency(
    ws: Worksheet,
    col: int,
    rooms: List[Tuple[RoomConfig, int]],
) -> Tuple[RoomResidency, ...]:
    out: List[RoomResidency] = []
    for room, row in rooms:
        try:
            residents = parse_residents(ws.cell(row, col).value)
        except InputShapeError as e:
            raise type(e)(f"{ws.cell(row, col).coordinate}: {e}") from e
        # an empty room has no residency entry at all
        if residents:
            out.append(RoomResidency(room.name, residents))
    return tuple(out)
