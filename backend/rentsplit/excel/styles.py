from __future__ import annotations

from openpyxl.styles import PatternFill, Side

# ---------------------------------------------------------------------
# Base typography / number formats
# ---------------------------------------------------------------------

FONT_NAME = "Arial"

DATE_FMT = "yyyy-mm-dd"
DOLLAR_FMT = "$#,##0.00_)"

# ---------------------------------------------------------------------
# Column widths of the output block (relative to its first column)
# ---------------------------------------------------------------------

OUTPUT_COLUMN_WIDTHS = (22.0, 16.0, 16.0, 16.0, 30.0)

# ---------------------------------------------------------------------
# Fills (ARGB)
# ---------------------------------------------------------------------

FILL_HEADER = PatternFill("solid", fgColor="FFFFFF00")
FILL_GRAY = PatternFill("solid", fgColor="FFD9D9D9")
FILL_TOTAL = PatternFill("solid", fgColor="FFFFDAB9")

# ---------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------

THIN = Side(style="thin", color="FF000000")
