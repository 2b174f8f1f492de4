from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

from openpyxl import Workbook, load_workbook

from ..engine.bills import BillSplitter
from ..engine.errors import InputShapeError
from ..engine.models import BillCalculation, Month, RentOutput
from ..engine.rent_calculator import RentCalculator
from ..excel.bills_writer import write_bills_output
from ..excel.rent_writer import write_rent_output
from ..excel.templates import setup_bills_sheet, setup_rent_sheet
from ..normalize.dates import first_day_of_next_month
from ..sheets.bills_reader import read_bills_sheet, read_month_rent_inputs
from ..sheets.rent_reader import read_rent_sheet

logger = logging.getLogger(__name__)


def _open(in_path: Path) -> Tuple[Workbook, Workbook]:
    """
    (values, writable) views of one workbook. Values are read with
    data_only so formula cells give their last calculated value; results
    are written into the formula-preserving copy.
    """
    if not in_path.exists():
        raise InputShapeError(f"Workbook not found: {in_path}")
    return load_workbook(in_path, data_only=True), load_workbook(in_path)


def _sheet_name(wb: Workbook, sheet_name: Optional[str]) -> str:
    if sheet_name is None:
        return wb.active.title
    if sheet_name not in wb.sheetnames:
        raise InputShapeError(f"Sheet {sheet_name!r} not found; sheets: {', '.join(wb.sheetnames)}")
    return sheet_name


def _save(wb: Workbook, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(out_path)


def calculate_rent_workbook(
    in_path: Path,
    out_path: Path,
    *,
    sheet_name: Optional[str] = None,
) -> RentOutput:
    """
    XLSX rent sheet -> rent calculation written next to the input.

    IMPORTANT:
      - in_path is not modified unless out_path points at it.
      - Nothing is written when reading or calculating fails.
    """
    values_wb, wb = _open(Path(in_path))
    name = _sheet_name(values_wb, sheet_name)

    sheet = read_rent_sheet(values_wb[name])
    output = RentCalculator().calculate(sheet.input)

    write_rent_output(wb[name], output, sheet.output_column)
    _save(wb, Path(out_path))
    return output


def calculate_bills_workbook(
    in_path: Path,
    out_path: Path,
    *,
    sheet_name: Optional[str] = None,
) -> Tuple[BillCalculation, ...]:
    """
    XLSX bills sheet -> bill splitting results. Residency is read from the
    month sheets ("YYYY-MM-01") of the same workbook.
    """
    values_wb, wb = _open(Path(in_path))
    name = _sheet_name(values_wb, sheet_name)

    bills = read_bills_sheet(values_wb[name])
    rent_inputs = read_month_rent_inputs(values_wb, bills)
    calculations = BillSplitter(rent_inputs).calculate(bills)

    write_bills_output(wb[name], calculations)
    _save(wb, Path(out_path))
    return calculations


def _open_or_new(path: Path) -> Tuple[Workbook, bool]:
    if path.exists():
        return load_workbook(path), False
    return Workbook(), True


def add_rent_sheet(path: Path, first_day: Optional[date] = None) -> str:
    """Add a new rent sheet (default: next month) to the workbook, creating it if needed."""
    path = Path(path)
    first_day = first_day or first_day_of_next_month()
    wb, created = _open_or_new(path)

    sheet_name = Month.from_date(first_day).sheet_name()
    if sheet_name in wb.sheetnames:
        raise InputShapeError(f"Workbook already has a sheet named {sheet_name}")
    ws = wb.active if created else wb.create_sheet()
    setup_rent_sheet(ws, first_day)

    _save(wb, path)
    logger.info("Added rent sheet %s to %s", ws.title, path)
    return ws.title


def add_bills_sheet(path: Path, title: str = "Bills") -> str:
    path = Path(path)
    wb, created = _open_or_new(path)
    if title in wb.sheetnames:
        ws = wb[title]
    elif created:
        ws = wb.active
        ws.title = title
    else:
        ws = wb.create_sheet(title)
    setup_bills_sheet(ws)

    _save(wb, path)
    logger.info("Set up bills sheet %s in %s", ws.title, path)
    return ws.title
