from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

from ..engine.models import Month
from ..engine.periods import as_day

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def ensure_iso_date(s: str) -> date:
    """ "2024-02-29" -> date(2024, 2, 29); ValueError on anything else."""
    s = (s or "").strip()
    m = _ISO_DATE_RE.match(s)
    if not m:
        raise ValueError(f"Invalid date (YYYY-MM-DD) token: {s!r}")
    yyyy, mm, dd = map(int, m.groups())
    return date(yyyy, mm, dd)  # invalid day or month raises ValueError


def parse_month(s: str) -> Month:
    """ "2024-02" -> Month(2024, 2) """
    s = (s or "").strip()
    m = _MONTH_RE.match(s)
    if not m:
        raise ValueError(f"Invalid month token (YYYY-MM): {s!r}")
    yyyy, mm = int(m.group(1)), int(m.group(2))
    if not 1 <= mm <= 12:
        raise ValueError(f"Invalid month token (YYYY-MM): {s!r}")
    return Month(yyyy, mm)


def cell_date(value: Any) -> Optional[date]:
    """
    Date held by a spreadsheet cell, or None if the cell holds no date.
    openpyxl returns datetimes for date cells; ISO strings are accepted too.
    """
    if isinstance(value, (datetime, date)):
        return as_day(value)
    if isinstance(value, str):
        try:
            return ensure_iso_date(value)
        except ValueError:
            return None
    return None


def first_day_of_next_month(today: Optional[date] = None) -> date:
    today = today or date.today()
    return Month.from_date(today).next_month().first_day
