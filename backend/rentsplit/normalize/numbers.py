from __future__ import annotations

import math
import re
from typing import Any

# "1500", "1,500.50", "$1,500.50", "-20", "0.35"
_NUMBER_TOKEN_RE = re.compile(r"^(?P<sign>-)?\$?(?P<int>\d{1,3}(?:,\d{3})+|\d*)(?P<dec>\.\d+)?$")


def to_number(raw: Any) -> float:
    """
    Normalize a numeric cell to float.

    Accepts ints/floats (not bools) and strings such as "1,500.50" or
    "$1500". Raises ValueError for anything else, including NaN/inf.
    """
    if raw is None or isinstance(raw, bool):
        raise ValueError(f"number expected, got {raw!r}")

    if isinstance(raw, (int, float)):
        val = float(raw)
    else:
        s = str(raw).strip().replace(" ", "")
        m = _NUMBER_TOKEN_RE.match(s)
        if not m or not (m.group("int") or m.group("dec")):
            raise ValueError(f"number expected, got {raw!r}")
        val = float(f"{m.group('sign') or ''}{(m.group('int') or '0').replace(',', '')}{m.group('dec') or ''}")

    if not math.isfinite(val):
        raise ValueError(f"finite number expected, got {raw!r}")
    return val
