from __future__ import annotations

import logging

from openpyxl.worksheet.worksheet import Worksheet

from ..engine.models import PeriodOutput, RentOutput
from ..sheets.rent_reader import OUTPUT_MARKER
from .style_apply import addr, apply_column_widths, apply_thin_grid, clear_from_column, set_cell, set_money
from .styles import FILL_GRAY, FILL_HEADER, FILL_TOTAL, OUTPUT_COLUMN_WIDTHS

logger = logging.getLogger(__name__)


def write_rent_output(ws: Worksheet, output: RentOutput, output_column: int) -> None:
    """
    Writes results to the right of the input, starting at output_column:

      OUTPUT > | Resident | Month rent
               | Dani     | $2,100.00
               | ...
               |          | =SUM(...)

    followed by the per-period breakdown. Anything previously written at or
    right of output_column is cleared first.
    """
    logger.info("Writing output to sheet %r", ws.title)

    clear_from_column(ws, output_column)
    set_cell(ws, addr(1, output_column), OUTPUT_MARKER, bold=True)

    c = output_column + 1
    apply_column_widths(ws, c, OUTPUT_COLUMN_WIDTHS)

    # Month totals
    set_cell(ws, addr(1, c), "Resident", bold=True, fill=FILL_HEADER)
    set_cell(ws, addr(1, c + 1), "Month rent", bold=True, fill=FILL_HEADER)

    first_resident_row = row = 2
    for resident in output.month_totals.residents:
        set_cell(ws, addr(row, c), resident.resident_name)
        set_money(ws, addr(row, c + 1), resident.cost)
        row += 1

    sum_row = row
    set_cell(ws, addr(sum_row, c), "Total", bold=True, fill=FILL_TOTAL)
    if sum_row > first_resident_row:
        formula = f"=SUM({addr(first_resident_row, c + 1)}:{addr(sum_row - 1, c + 1)})"
    else:
        formula = 0
    set_money(ws, addr(sum_row, c + 1), formula, bold=True, fill=FILL_TOTAL)
    apply_thin_grid(ws, addr(1, c), addr(sum_row, c + 1))

    # Per-period breakdown
    row = sum_row + 2
    header_row = row
    for offset, title in enumerate(("Period / resident", "Days", "Subtotal", "Adjusted")):
        set_cell(ws, addr(row, c + offset), title, bold=True, fill=FILL_HEADER)
    row += 1

    for period in output.periods:
        row = _write_period(ws, row, c, period)

    apply_thin_grid(ws, addr(header_row, c), addr(row - 1, c + 3))


def _write_period(ws: Worksheet, row: int, c: int, period: PeriodOutput) -> int:
    label = f"{period.first_day.isoformat()} - {period.last_day.isoformat()}"
    set_cell(ws, addr(row, c), label, bold=True, fill=FILL_GRAY)
    set_cell(ws, addr(row, c + 1), f"{period.days_in_period} / {period.days_in_month}", h="center", fill=FILL_GRAY)
    set_money(ws, addr(row, c + 2), period.period_cost + period.total_overage, fill=FILL_GRAY)
    set_money(ws, addr(row, c + 3), period.period_cost, bold=True, fill=FILL_GRAY)
    row += 1

    for subtotal, adjusted in zip(period.resident_subtotals, period.resident_adjusted_totals):
        set_cell(ws, addr(row, c), subtotal.resident_name)
        set_money(ws, addr(row, c + 2), subtotal.cost)
        set_money(ws, addr(row, c + 3), adjusted.cost)
        row += 1
    return row
