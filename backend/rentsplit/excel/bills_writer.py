from __future__ import annotations

import logging
from typing import Sequence

from openpyxl.worksheet.worksheet import Worksheet

from ..engine.models import BillCalculation
from .style_apply import addr, apply_column_widths, clear_from_column, set_cell, set_money
from .styles import FILL_GRAY, FILL_HEADER, OUTPUT_COLUMN_WIDTHS

logger = logging.getLogger(__name__)

RESULTS_LABEL_COLUMN = 5  # "E"
RESULTS_MARKER = "RESULTS >"


def write_bills_output(ws: Worksheet, calculations: Sequence[BillCalculation]) -> int:
    """
    Writes bill calculations to the right of the bills table (column F on).
    Returns the last row written.
    """
    logger.info("Writing %d bill calculation(s) to sheet %r", len(calculations), ws.title)

    clear_from_column(ws, RESULTS_LABEL_COLUMN)
    set_cell(ws, addr(1, RESULTS_LABEL_COLUMN), RESULTS_MARKER, bold=True)

    c = RESULTS_LABEL_COLUMN + 1
    apply_column_widths(ws, c, OUTPUT_COLUMN_WIDTHS)

    row = 1
    last_row = 1
    for calc in calculations:
        set_cell(ws, addr(row, c), f"Bill: {calc.bill.name}", bold=True, fill=FILL_HEADER)
        row += 1
        set_cell(ws, addr(row, c), f"Num days: {calc.num_days}")
        row += 1
        set_cell(ws, addr(row, c), "Daily amount:")
        set_money(ws, addr(row, c + 1), calc.daily_amount)
        row += 1
        set_cell(ws, addr(row, c), "Periods:", bold=True)
        row += 1

        for period in calc.periods:
            set_cell(ws, addr(row, c), f"{period.first_day.isoformat()} - {period.last_day.isoformat()}")
            set_cell(ws, addr(row, c + 1), f"Days: {period.num_days}")
            set_money(ws, addr(row, c + 2), period.amount)
            set_money(ws, addr(row, c + 3), period.amount_per_person)
            set_cell(ws, addr(row, c + 4), ", ".join(period.roommates))
            row += 1

        set_cell(ws, addr(row, c), "Roommate Totals:", bold=True)
        row += 1
        for total in calc.roommate_totals:
            set_cell(ws, addr(row, c), total.roommate, fill=FILL_GRAY)
            set_money(ws, addr(row, c + 1), total.total, bold=True, fill=FILL_GRAY)
            components = ",".join(str(x) for x in total.period_components)
            set_cell(ws, addr(row, c + 2), f"({components})")
            row += 1

        last_row = row - 1
        row += 2  # two blank rows between bills

    return last_row
