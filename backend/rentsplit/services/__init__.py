"""
Services layer - Business logic orchestration.

This layer coordinates between the engine, the spreadsheet / JSON
boundaries and the API.
"""

from .calculation_service import CalculationService, ProcessingError

__all__ = [
    "CalculationService",
    "ProcessingError",
]
