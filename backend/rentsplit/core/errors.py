from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..engine.errors import (
    CrossReferenceError,
    InputShapeError,
    InvariantViolation,
    RentCalcError,
)


@dataclass
class UserFacingError(Exception):
    """
    An error that is safe and useful to show directly in UI.
    """
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    stage: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.stage:
            out["stage"] = self.stage
        if self.details:
            out["details"] = self.details
        return out

    @classmethod
    def from_calc_error(cls, e: RentCalcError, *, stage: Optional[str] = None) -> "UserFacingError":
        if isinstance(e, InputShapeError):
            code = "INPUT_SHAPE"
        elif isinstance(e, CrossReferenceError):
            code = "CROSS_REFERENCE"
        elif isinstance(e, InvariantViolation):
            code = "INVARIANT"
        else:
            code = "CALCULATION"
        return cls(
            code=code,
            message=str(e),
            details={"error_type": type(e).__name__},
            stage=stage,
        )
