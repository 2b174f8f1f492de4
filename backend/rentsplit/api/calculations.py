# backend/rentsplit/api/calculations.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from ..contracts.results import BillsResult, RentResult
from ..core.config import Settings
from ..core.errors import UserFacingError
from ..services.calculation_service import CalculationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calculations"])


@router.post("/rent/calculate", response_model=RentResult)
def calculate_rent(document: dict[str, Any] = Body(...)) -> RentResult:
    """One month of rent from a rent document (see contracts.documents.RentDocument)."""
    svc = CalculationService.from_settings(Settings.from_env())
    try:
        return svc.rent_from_document(document)
    except UserFacingError as e:
        logger.info("Rent calculation rejected: %s", e)
        raise HTTPException(status_code=422, detail=e.to_dict()) from e


@router.post("/bills/calculate", response_model=BillsResult)
def calculate_bills(document: dict[str, Any] = Body(...)) -> BillsResult:
    """Bill splitting from a bills document (see contracts.documents.BillsDocument)."""
    svc = CalculationService.from_settings(Settings.from_env())
    try:
        return svc.bills_from_document(document)
    except UserFacingError as e:
        logger.info("Bill splitting rejected: %s", e)
        raise HTTPException(status_code=422, detail=e.to_dict()) from e
