from __future__ import annotations

from typing import Any, Optional, Sequence

from openpyxl.styles import Alignment, Border, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .styles import DOLLAR_FMT, FONT_NAME, THIN


def addr(row: int, col: int) -> str:
    return f"{get_column_letter(col)}{row}"


# ---------------------------------------------------------------------
# Layout helpers
# ---------------------------------------------------------------------

def apply_column_widths(ws: Worksheet, first_col: int, widths: Sequence[float]) -> None:
    for offset, w in enumerate(widths):
        ws.column_dimensions[get_column_letter(first_col + offset)].width = w


def clear_from_column(ws: Worksheet, first_col: int) -> None:
    """Drop values and styles of every cell at or right of first_col."""
    for merged in list(ws.merged_cells.ranges):
        if merged.max_col >= first_col:
            ws.unmerge_cells(str(merged))
    for row in ws.iter_rows(min_col=first_col):
        for cell in row:
            cell.value = None
            cell.style = "Normal"


# ---------------------------------------------------------------------
# Cell setters
# ---------------------------------------------------------------------

def set_cell(
    ws: Worksheet,
    address: str,
    value: Any,
    *,
    bold: bool = False,
    size: int = 10,
    h: str = "left",
    v: str = "center",
    fill: Optional[PatternFill] = None,
    num_fmt: Optional[str] = None,
) -> None:
    cell = ws[address]
    cell.value = value
    cell.alignment = Alignment(horizontal=h, vertical=v)
    cell.font = Font(name=FONT_NAME, size=size, bold=bold)
    if fill is not None:
        cell.fill = fill
    if num_fmt is not None:
        cell.number_format = num_fmt


def set_money(
    ws: Worksheet,
    address: str,
    amount: Any,
    *,
    size: int = 10,
    bold: bool = False,
    fill: Optional[PatternFill] = None,
) -> None:
    """amount is a number or a formula string."""
    set_cell(ws, address, amount, bold=bold, size=size, h="right", fill=fill, num_fmt=DOLLAR_FMT)


def apply_thin_grid(ws: Worksheet, top_left: str, bottom_right: str) -> None:
    tl = ws[top_left]
    br = ws[bottom_right]
    border = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)
    for r in range(tl.row, br.row + 1):
        for c in range(tl.column, br.column + 1):
            ws.cell(r, c).border = border
