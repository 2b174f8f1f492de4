from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from ..engine.bills import months_for_bills
from ..engine.errors import InputShapeError, MissingMonthError
from ..engine.models import Bill, Month, RentInput
from ..normalize.dates import cell_date
from ..normalize.numbers import to_number
from .rent_reader import read_rent_sheet

logger = logging.getLogger(__name__)

BILLS_HEADERS = ("Type/Name", "Amount", "First day", "Last day")


def read_bills_sheet(ws: Worksheet) -> List[Bill]:
    """
    Bills are listed from row 2 until the first empty row:

        Type/Name | Amount | First day  | Last day
        Gas       | 300    | 2024-01-20 | 2024-02-10
    """
    first = ws.cell(1, 1).value
    if not isinstance(first, str) or first.strip() != BILLS_HEADERS[0]:
        raise InputShapeError(f'A1 must be "{BILLS_HEADERS[0]}"')

    bills: List[Bill] = []
    for row in range(2, ws.max_row + 1):
        name, amount, first_day, last_day = (ws.cell(row, c).value for c in range(1, 5))
        if isinstance(name, str):
            name = name.strip()

        if not name or amount in (None, "") or first_day is None or last_day is None:
            if name or amount not in (None, ""):
                raise InputShapeError(f"Missing name, amount, first day or last day on row {row}")
            break

        try:
            value = to_number(amount)
        except ValueError as e:
            raise InputShapeError(f"Amount on row {row} must be a number; found {amount!r}") from e

        d1, d2 = cell_date(first_day), cell_date(last_day)
        if d1 is None or d2 is None:
            raise InputShapeError(f"First day and last day on row {row} must be dates")

        bills.append(Bill(name=str(name), amount=value, first_day=d1, last_day=d2))

    logger.info("Read %d bill(s) from sheet %r", len(bills), ws.title)
    return bills


def read_month_rent_inputs(wb: Workbook, bills: Sequence[Bill]) -> Dict[Month, RentInput]:
    """
    Rent residency for every month touched by the bills, read from the
    sheets named "YYYY-MM-01".
    """
    out: Dict[Month, RentInput] = {}
    for month in months_for_bills(bills):
        sheet_name = month.sheet_name()
        if sheet_name not in wb.sheetnames:
            raise MissingMonthError(f"Could not find rent sheet with name {sheet_name}")
        out[month] = read_rent_sheet(wb[sheet_name]).input
    return out
