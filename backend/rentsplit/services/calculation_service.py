# backend/rentsplit/services/calculation_service.py

from __future__ import annotations

import logging
import shutil
import uuid
import zipfile
from datetime import date
from pathlib import Path
from typing import Any, Callable, Optional

from openpyxl.utils.exceptions import InvalidFileException

from ..contracts.results import BillsResult, RentResult
from ..core.config import Settings, default_data_dir
from ..core.errors import UserFacingError
from ..engine.errors import RentCalcError
from ..pipeline.documents import bills_from_document, rent_from_document
from ..pipeline.workbooks import (
    add_bills_sheet,
    add_rent_sheet,
    calculate_bills_workbook,
    calculate_rent_workbook,
)

logger = logging.getLogger(__name__)


class ProcessingError(RuntimeError):
    pass


class CalculationService:
    """
    Facade over the calculation pipeline:
      - JSON documents -> result models
      - uploaded XLSX -> XLSX with results written in
      - new XLSX templates

    Every call is an independent run; workbooks live in their own job
    directory under data_dir. Nothing is kept: callers hand the returned
    path back to discard() once the file has been delivered.
    """

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self._data_dir = Path(data_dir) if data_dir is not None else default_data_dir()
        self._data_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CalculationService":
        return cls(settings.data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def new_job_dir(self) -> Path:
        job_dir = self._data_dir / uuid.uuid4().hex
        job_dir.mkdir(parents=True, exist_ok=False)
        return job_dir

    def discard(self, path: Path) -> None:
        """Remove the job directory holding path."""
        job_dir = Path(path).parent
        if job_dir.parent != self._data_dir:
            raise ValueError(f"{path} is not inside a job directory of {self._data_dir}")
        shutil.rmtree(job_dir)
        logger.debug("Removed job dir %s", job_dir)

    # -----------------------------
    # JSON documents
    # -----------------------------
    def rent_from_document(self, raw: Any) -> RentResult:
        try:
            return rent_from_document(raw)
        except RentCalcError as e:
            raise UserFacingError.from_calc_error(e, stage="rent") from e

    def bills_from_document(self, raw: Any) -> BillsResult:
        try:
            return bills_from_document(raw)
        except RentCalcError as e:
            raise UserFacingError.from_calc_error(e, stage="bills") from e

    # -----------------------------
    # Workbooks
    # -----------------------------
    def _calculate_upload(
        self,
        data: bytes,
        calculate: Callable[..., Any],
        *,
        sheet_name: Optional[str],
        stage: str,
    ) -> Path:
        job_dir = self.new_job_dir()
        in_path = job_dir / "input.xlsx"
        out_path = job_dir / "result.xlsx"
        in_path.write_bytes(data)

        try:
            calculate(in_path, out_path, sheet_name=sheet_name)
        except RentCalcError as e:
            self.discard(in_path)
            raise UserFacingError.from_calc_error(e, stage=stage) from e
        except (zipfile.BadZipFile, InvalidFileException) as e:
            self.discard(in_path)
            raise ProcessingError(f"Not a readable XLSX workbook: {e}") from e
        except Exception:
            self.discard(in_path)
            raise

        in_path.unlink()
        logger.info("%s calculated: %s", stage, out_path)
        return out_path

    def rent_for_workbook(self, data: bytes, *, sheet_name: Optional[str] = None) -> Path:
        return self._calculate_upload(data, calculate_rent_workbook, sheet_name=sheet_name, stage="rent_workbook")

    def bills_for_workbook(self, data: bytes, *, sheet_name: Optional[str] = None) -> Path:
        return self._calculate_upload(data, calculate_bills_workbook, sheet_name=sheet_name, stage="bills_workbook")

    def new_rent_workbook(self, first_day: Optional[date] = None) -> Path:
        path = self.new_job_dir() / "rent.xlsx"
        add_rent_sheet(path, first_day)
        return path

    def new_bills_workbook(self) -> Path:
        path = self.new_job_dir() / "bills.xlsx"
        add_bills_sheet(path)
        return path
