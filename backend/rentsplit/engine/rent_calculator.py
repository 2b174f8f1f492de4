from __future__ import annotations

import logging

from .aggregate import month_totals
from .allocator import allocate_rent_period
from .models import RentInput, RentOutput
from .periods import check_month_coverage

logger = logging.getLogger(__name__)


class RentCalculator:
    """
    Calculates one month of rent. Single use: build one per input.

    The calculator keeps no state between calls, so reusing an instance
    gives independent results, but callers should not rely on that.
    """

    def calculate(self, rent_input: RentInput) -> RentOutput:
        logger.info(
            "Calculating rent %s over %d period(s)",
            rent_input.config.total_rent,
            len(rent_input.periods),
        )
        check_month_coverage(rent_input.periods)
        # each period is calculated in isolation
        periods = tuple(allocate_rent_period(p, rent_input.config) for p in rent_input.periods)
        return RentOutput(periods=periods, month_totals=month_totals(periods))


def calculate_rent(rent_input: RentInput) -> RentOutput:
    return RentCalculator().calculate(rent_input)
