# backend/rentsplit/api/__init__.py
from __future__ import annotations

from fastapi import APIRouter

from .calculations import router as calculations_router
from .workbooks import router as workbooks_router

api_router = APIRouter()
api_router.include_router(calculations_router)
api_router.include_router(workbooks_router)
