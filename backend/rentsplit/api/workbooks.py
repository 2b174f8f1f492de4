# backend/rentsplit/api/workbooks.py
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse

from ..core.config import Settings
from ..core.errors import UserFacingError
from ..services.calculation_service import CalculationService, ProcessingError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workbooks", tags=["workbooks"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _xlsx_response(
    svc: CalculationService,
    path: Path,
    filename: str,
    background_tasks: BackgroundTasks,
) -> FileResponse:
    # the job dir goes away once the file has been sent
    background_tasks.add_task(svc.discard, path)
    return FileResponse(path, media_type=XLSX_MEDIA_TYPE, filename=filename)


def _result_name(upload: UploadFile) -> str:
    stem = Path(upload.filename or "workbook.xlsx").stem
    return f"{stem}.result.xlsx"


@router.post("/rent")
async def rent_workbook(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    sheet_name: Optional[str] = Form(None),
) -> FileResponse:
    svc = CalculationService.from_settings(Settings.from_env())
    data = await file.read()
    try:
        out = svc.rent_for_workbook(data, sheet_name=sheet_name)
    except UserFacingError as e:
        raise HTTPException(status_code=422, detail=e.to_dict()) from e
    except ProcessingError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _xlsx_response(svc, out, _result_name(file), background_tasks)


@router.post("/bills")
async def bills_workbook(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    sheet_name: Optional[str] = Form(None),
) -> FileResponse:
    svc = CalculationService.from_settings(Settings.from_env())
    data = await file.read()
    try:
        out = svc.bills_for_workbook(data, sheet_name=sheet_name)
    except UserFacingError as e:
        raise HTTPException(status_code=422, detail=e.to_dict()) from e
    except ProcessingError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _xlsx_response(svc, out, _result_name(file), background_tasks)


@router.get("/templates/rent")
def rent_template(background_tasks: BackgroundTasks, first_day: Optional[date] = None) -> FileResponse:
    if first_day is not None and first_day.day != 1:
        raise HTTPException(status_code=422, detail="first_day must be the first day of a month")
    svc = CalculationService.from_settings(Settings.from_env())
    path = svc.new_rent_workbook(first_day)
    return _xlsx_response(svc, path, "rent.xlsx", background_tasks)


@router.get("/templates/bills")
def bills_template(background_tasks: BackgroundTasks) -> FileResponse:
    svc = CalculationService.from_settings(Settings.from_env())
    return _xlsx_response(svc, svc.new_bills_workbook(), "bills.xlsx", background_tasks)
