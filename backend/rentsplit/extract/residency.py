from __future__ import annotations

import re
from typing import Any, List, Tuple

from ..engine.errors import InputShapeError, InvalidRatioError
from ..engine.models import DEFAULT_RATIO, ExplicitRatio, Resident
from ..normalize.numbers import to_number

# "Name" or "Name (0.35)"
_RESIDENT_RE = re.compile(r"^(?P<name>[A-Za-z0-9 \-]+?)\s*(?:\((?P<ratio>[^()]*)\))?$")


def parse_residents(cell: Any) -> Tuple[Resident, ...]:
    """
    Parse the residents of a room from a residency cell:

        "Dani (0.6); Jill (0.4)"  -> explicit ratios
        "Dani; Jill"              -> both share the room evenly
        "" / None                 -> empty room

    Names match [A-Za-z0-9 -]+ and are kept exactly as written (trimmed).
    """
    if cell is None:
        return ()
    if not isinstance(cell, str):
        raise InputShapeError(f"Residency must be text like 'Name (0.5); Name2', got {cell!r}")

    residents: List[Resident] = []
    for part in cell.split(";"):
        part = part.strip()
        if not part:
            continue
        m = _RESIDENT_RE.match(part)
        if not m or not m.group("name").strip():
            raise InputShapeError(f"Malformed resident {part!r} in residency {cell!r}")

        name = m.group("name").strip()
        raw_ratio = m.group("ratio")
        if raw_ratio is None:
            residents.append(Resident(name, DEFAULT_RATIO))
            continue
        try:
            ratio = to_number(raw_ratio)
        except ValueError as e:
            raise InvalidRatioError(f"Cost ratio of {name!r} is not a number: {raw_ratio!r}") from e
        if ratio < 0:
            raise InvalidRatioError(f"Cost ratio of {name!r} must not be negative: {raw_ratio!r}")
        residents.append(Resident(name, ExplicitRatio(ratio)))

    return tuple(residents)
