"""
Engine - rent and bill apportioning.

Pure functions over immutable records: no I/O, no state between calls.

Components:
- ratios: resolve per-resident cost ratios inside a room
- periods: month-aligned / range-aligned segmentation and day counts
- allocator: per-period costs and reconciliation
- aggregate: per-resident totals across periods
- rent_calculator / bills: drivers for one month of rent / many bills
"""

from .bills import BillSplitter, months_for_bills, split_bills
from .rent_calculator import RentCalculator, calculate_rent

__all__ = [
    "BillSplitter",
    "RentCalculator",
    "calculate_rent",
    "months_for_bills",
    "split_bills",
]
