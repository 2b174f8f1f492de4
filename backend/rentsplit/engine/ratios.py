from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple

from .errors import EmptyRoomError, InvalidRatioError
from .models import DefaultRatio, ExplicitRatio, Resident, ResolvedResident

logger = logging.getLogger(__name__)

# Explicit ratios summing to 1 within this tolerance are not reported.
RATIO_SUM_TOLERANCE = 1e-9


def resolve_ratios(residents: Sequence[Resident], *, room_name: str = "") -> Tuple[ResolvedResident, ...]:
    """
    Resolve the cost ratio of every resident of one room for one period.

    - all explicit: used as-is; a sum other than 1 is only logged
    - some unset: the unset residents split (1 - explicit_sum) evenly,
      or get 0 when the explicit ratios already exceed 1

    Over-subscribed rooms are evened out later by period reconciliation.
    """
    if not residents:
        raise EmptyRoomError(f"Room {room_name!r} has no residents to share its cost")

    explicit_sum = 0.0
    unset_count = 0
    for resident in residents:
        ratio = resident.cost_ratio
        if isinstance(ratio, ExplicitRatio):
            explicit_sum += _checked(ratio.value, resident.name)
        elif isinstance(ratio, DefaultRatio):
            unset_count += 1
        else:
            raise InvalidRatioError(f"Unsupported cost ratio for {resident.name!r}: {ratio!r}")

    if unset_count == 0:
        if abs(explicit_sum - 1.0) > RATIO_SUM_TOLERANCE:
            logger.warning(
                "Cost ratios in room %r add up to %s, not 1; using them as-is",
                room_name,
                explicit_sum,
            )
        default_share = 0.0
    elif explicit_sum <= 1.0:
        default_share = (1.0 - explicit_sum) / unset_count
    else:
        logger.warning(
            "Explicit cost ratios in room %r add up to %s; %d resident(s) without a ratio get 0",
            room_name,
            explicit_sum,
            unset_count,
        )
        default_share = 0.0

    out: List[ResolvedResident] = []
    for resident in residents:
        ratio = resident.cost_ratio
        value = ratio.value if isinstance(ratio, ExplicitRatio) else default_share
        out.append(ResolvedResident(resident.name, value))
    return tuple(out)


def _checked(value: float, resident_name: str) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidRatioError(f"Cost ratio of {resident_name!r} is not a number: {value!r}") from e
    if not math.isfinite(v) or v < 0:
        raise InvalidRatioError(f"Cost ratio of {resident_name!r} must be a finite number >= 0, got {value!r}")
    return v
