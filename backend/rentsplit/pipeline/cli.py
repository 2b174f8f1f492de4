from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from ..engine.errors import RentCalcError
from ..normalize.dates import ensure_iso_date
from .documents import bills_from_document, read_document, rent_from_document, write_result
from .workbooks import add_bills_sheet, add_rent_sheet, calculate_bills_workbook, calculate_rent_workbook


def _validate_iso_date(value: str) -> date:
    try:
        return ensure_iso_date(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"date must be in YYYY-MM-DD format, got: {value}") from e


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rentsplit", description="Split rent and bills among roommates")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every period calculation")
    sub = p.add_subparsers(dest="command", required=True)

    rent = sub.add_parser("rent", help="Calculate a monthly rent sheet of an XLSX workbook")
    rent.add_argument("in_xlsx", help="Path to input workbook")
    rent.add_argument("out_xlsx", nargs="?", default=None, help="Output workbook (default: overwrite input)")
    rent.add_argument("--sheet", default=None, help="Sheet to calculate (default: active sheet)")

    bills = sub.add_parser("bills", help="Calculate a bill splitting sheet of an XLSX workbook")
    bills.add_argument("in_xlsx", help="Path to input workbook")
    bills.add_argument("out_xlsx", nargs="?", default=None, help="Output workbook (default: overwrite input)")
    bills.add_argument("--sheet", default=None, help="Bills sheet (default: active sheet)")

    new_rent = sub.add_parser("new-rent-sheet", help="Add a new monthly rent sheet to a workbook")
    new_rent.add_argument("xlsx", help="Workbook to add the sheet to (created if missing)")
    new_rent.add_argument(
        "--first-day",
        type=_validate_iso_date,
        default=None,
        help="First day of the month (YYYY-MM-DD); default: first day of next month",
    )

    new_bills = sub.add_parser("new-bills-sheet", help="Set up a bill splitting sheet in a workbook")
    new_bills.add_argument("xlsx", help="Workbook to add the sheet to (created if missing)")
    new_bills.add_argument("--title", default="Bills", help="Sheet title")

    doc = sub.add_parser("json", help="Calculate a JSON/YAML rent or bills document")
    doc.add_argument("kind", choices=("rent", "bills"))
    doc.add_argument("in_doc", help="Path to .json / .yml document")
    doc.add_argument("out_json", nargs="?", default=None, help="Output JSON (default: stdout)")

    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "rent":
            out = Path(args.out_xlsx or args.in_xlsx)
            output = calculate_rent_workbook(Path(args.in_xlsx), out, sheet_name=args.sheet)
            for r in output.month_totals.residents:
                print(f"{r.resident_name}: {r.cost}")
            print(f"[OK] XLSX written to {out.resolve()}")

        elif args.command == "bills":
            out = Path(args.out_xlsx or args.in_xlsx)
            calculations = calculate_bills_workbook(Path(args.in_xlsx), out, sheet_name=args.sheet)
            for calc in calculations:
                print(f"{calc.bill.name}:")
                for t in calc.roommate_totals:
                    print(f"  {t.roommate}: {t.total}")
            print(f"[OK] XLSX written to {out.resolve()}")

        elif args.command == "new-rent-sheet":
            title = add_rent_sheet(Path(args.xlsx), args.first_day)
            print(f"[OK] sheet {title} added to {Path(args.xlsx).resolve()}")

        elif args.command == "new-bills-sheet":
            title = add_bills_sheet(Path(args.xlsx), args.title)
            print(f"[OK] sheet {title} set up in {Path(args.xlsx).resolve()}")

        else:  # json
            raw = read_document(Path(args.in_doc))
            result = rent_from_document(raw) if args.kind == "rent" else bills_from_document(raw)
            if args.out_json:
                write_result(result, Path(args.out_json))
                print(f"[OK] JSON written to {Path(args.out_json).resolve()}")
            else:
                print(result.model_dump_json(indent=2))

    except RentCalcError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
