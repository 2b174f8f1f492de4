from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Sequence, Tuple

import pytest
from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.worksheet.worksheet import Worksheet


def pytest_sessionstart(session):
    """
    Make sure backend/ (where the rentsplit package lives) is on sys.path,
    even when pytest is started from the repository root.
    """
    backend_dir = Path(__file__).resolve().parents[1]  # .../backend
    p = str(backend_dir)
    if p not in sys.path:
        sys.path.insert(0, p)


def fill_rent_sheet(
    ws: Worksheet,
    *,
    starts: Sequence[date],
    rooms: Sequence[Tuple[str, float]],
    residency: Sequence[Sequence[str | None]],
    extra_person_fee: float = 250,
    rent_due: float = 5095,
) -> None:
    """
    Lay out a rent sheet by hand. residency[i][j] is the cell of room i in
    period j.
    """
    ws.cell(1, 1, "Rooms")
    ws.cell(1, 2, "Base prices")
    for j, d in enumerate(starts):
        ws.cell(1, 3 + j, d)
    ws.cell(1, 3 + len(starts), "OUTPUT >")

    row = 2
    for i, (name, price) in enumerate(rooms):
        ws.cell(row, 1, name)
        ws.cell(row, 2, price)
        for j, cell in enumerate(residency[i]):
            ws.cell(row, 3 + j, cell)
        row += 1

    for label, value in (
        ("Sum (bases)", sum(p for _n, p in rooms)),
        ("Extra person fee", extra_person_fee),
        ("Rent due", rent_due),
    ):
        ws.cell(row, 1, label).font = Font(bold=True)
        ws.cell(row, 2, value).font = Font(bold=True)
        row += 1


@pytest.fixture
def rent_workbook() -> Workbook:
    """February 2024, two periods; Eve moves into the big room on the 15th."""
    wb = Workbook()
    ws = wb.active
    ws.title = "2024-02-01"
    fill_rent_sheet(
        ws,
        starts=[date(2024, 2, 1), date(2024, 2, 15)],
        rooms=[("Big room", 2000), ("Upstairs room", 1500), ("Small room", 1000)],
        residency=[
            ["Dani", "Dani; Eve"],
            ["Jill", "Jill"],
            ["Beatrice", "Beatrice"],
        ],
    )
    return wb


@pytest.fixture
def rent_xlsx(tmp_path: Path, rent_workbook: Workbook) -> Path:
    p = tmp_path / "rent.xlsx"
    rent_workbook.save(p)
    return p


@pytest.fixture
def bills_xlsx(tmp_path: Path) -> Path:
    """Alice alone in January, Alice and Bob in February, one gas bill across both."""
    wb = Workbook()
    jan = wb.active
    jan.title = "2024-01-01"
    fill_rent_sheet(jan, starts=[date(2024, 1, 1)], rooms=[("Room A", 1000)], residency=[["Alice"]])

    feb = wb.create_sheet("2024-02-01")
    fill_rent_sheet(
        feb,
        starts=[date(2024, 2, 1)],
        rooms=[("Room A", 1000), ("Room B", 800)],
        residency=[["Alice"], ["Bob"]],
    )

    bills = wb.create_sheet("Bills")
    bills.append(["Type/Name", "Amount", "First day", "Last day"])
    bills.append(["Gas", 300, date(2024, 1, 20), date(2024, 2, 10)])
    wb.active = wb.sheetnames.index("Bills")

    p = tmp_path / "bills.xlsx"
    wb.save(p)
    return p


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    out = tmp_path / "out"
    out.mkdir(parents=True, exist_ok=True)
    return out


@pytest.fixture
def fill_sheet():
    return fill_rent_sheet
