from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from ..contracts.documents import (
    bills_document_to_input,
    load_bills_document,
    load_rent_document,
    rent_document_to_input,
)
from ..contracts.results import BillsResult, RentResult, bills_result, rent_result
from ..engine.bills import BillSplitter
from ..engine.errors import InputShapeError
from ..engine.rent_calculator import RentCalculator


def read_document(path: Path) -> Any:
    """Load a JSON or YAML input document."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix in (".yml", ".yaml"):
            return yaml.safe_load(text)
        if suffix == ".json":
            return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise InputShapeError(f"Cannot parse {path.name}: {e}") from e
    raise InputShapeError("Input document must be .json, .yml or .yaml")


def rent_from_document(raw: Any) -> RentResult:
    rent_input = rent_document_to_input(load_rent_document(raw))
    return rent_result(RentCalculator().calculate(rent_input))


def bills_from_document(raw: Any) -> BillsResult:
    bills, months = bills_document_to_input(load_bills_document(raw))
    return bills_result(BillSplitter(months).calculate(bills))


def write_result(result: RentResult | BillsResult, out_json_path: Path) -> None:
    p = Path(out_json_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(result.model_dump_json(indent=2), encoding="utf-8")
