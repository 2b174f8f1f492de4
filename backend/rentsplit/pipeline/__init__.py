"""
Pipeline - reading input, running the engine, writing results.

Components:
- workbooks: XLSX rent / bills sheets -> calculation written back to XLSX
- documents: JSON / YAML documents -> result models
- cli: command-line entry point
"""

from .documents import bills_from_document, rent_from_document
from .workbooks import calculate_bills_workbook, calculate_rent_workbook

__all__ = [
    "bills_from_document",
    "calculate_bills_workbook",
    "calculate_rent_workbook",
    "rent_from_document",
]
