from __future__ import annotations


class RentCalcError(Exception):
    """Base error for rent / bill apportioning."""


class InputShapeError(RentCalcError):
    """Input is malformed: headers, markers, numbers, dates, residency syntax."""


class InvalidRatioError(InputShapeError):
    pass


class CrossReferenceError(RentCalcError):
    """Input refers to something that does not exist."""


class UnknownRoomError(CrossReferenceError):
    pass


class MissingMonthError(CrossReferenceError):
    pass


class InvariantViolation(RentCalcError):
    pass


class PeriodSpansMonthsError(InvariantViolation):
    pass


class EmptyRoomError(InvariantViolation):
    pass


class PeriodCoverageError(InvariantViolation):
    """Periods of a month leave a gap, overlap, or do not span the whole month."""
