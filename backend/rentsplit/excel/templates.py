from __future__ import annotations

from datetime import date
from typing import Optional, Sequence, Tuple

from openpyxl.worksheet.worksheet import Worksheet

from ..engine.models import Month
from ..normalize.dates import first_day_of_next_month
from ..sheets.bills_reader import BILLS_HEADERS
from ..sheets.rent_reader import (
    EXTRA_PERSON_FEE_LABEL,
    HEADER_BASE_PRICES,
    HEADER_ROOMS,
    OUTPUT_MARKER,
    RENT_DUE_LABEL,
    SUM_ROW_LABEL,
)
from .style_apply import addr, set_cell
from .styles import DATE_FMT

SAMPLE_ROOMS: Tuple[Tuple[str, float, str], ...] = (
    ("Big room", 2000, "Dani"),
    ("Upstairs room", 1500, "Jill"),
    ("Small room", 1000, "Beatrice"),
)
SAMPLE_EXTRA_PERSON_FEE = 250
SAMPLE_RENT_DUE = 5095


def setup_rent_sheet(
    ws: Worksheet,
    first_day: Optional[date] = None,
    *,
    rooms: Sequence[Tuple[str, float, str]] = SAMPLE_ROOMS,
) -> None:
    """
    Lay out a new monthly rent sheet for the month of first_day (default:
    next month) with sample rooms to be edited by hand.
    """
    first_day = first_day or first_day_of_next_month()
    sheet_name = Month.from_date(first_day).sheet_name()
    wb = ws.parent
    if ws.title != sheet_name and sheet_name not in wb.sheetnames:
        ws.title = sheet_name

    set_cell(ws, "A1", HEADER_ROOMS, bold=True)
    set_cell(ws, "B1", HEADER_BASE_PRICES, bold=True)
    set_cell(ws, "C1", first_day, bold=True, num_fmt=DATE_FMT)
    set_cell(ws, "D1", OUTPUT_MARKER, bold=True)

    row = 2
    for name, base_price, residents in rooms:
        set_cell(ws, addr(row, 1), name)
        set_cell(ws, addr(row, 2), base_price)
        set_cell(ws, addr(row, 3), residents)
        row += 1

    last_room_row = row - 1
    set_cell(ws, addr(row, 1), SUM_ROW_LABEL, bold=True)
    set_cell(ws, addr(row, 2), f"=SUM(B2:B{last_room_row})" if rooms else 0, bold=True)
    set_cell(ws, addr(row + 1, 1), EXTRA_PERSON_FEE_LABEL, bold=True)
    set_cell(ws, addr(row + 1, 2), SAMPLE_EXTRA_PERSON_FEE, bold=True)
    set_cell(ws, addr(row + 2, 1), RENT_DUE_LABEL, bold=True)
    set_cell(ws, addr(row + 2, 2), SAMPLE_RENT_DUE, bold=True)


def setup_bills_sheet(ws: Worksheet) -> None:
    ws.delete_rows(1, ws.max_row)
    for col, title in enumerate(BILLS_HEADERS, start=1):
        set_cell(ws, addr(1, col), title, bold=True)
