"""
Sheets - reading engine input from openpyxl worksheets.
"""

from .bills_reader import read_bills_sheet, read_month_rent_inputs
from .rent_reader import RentSheet, read_rent_sheet

__all__ = [
    "RentSheet",
    "read_bills_sheet",
    "read_month_rent_inputs",
    "read_rent_sheet",
]
