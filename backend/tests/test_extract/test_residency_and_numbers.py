from __future__ import annotations

from datetime import date, datetime

import pytest

from rentsplit.engine.errors import InputShapeError, InvalidRatioError
from rentsplit.engine.models import DEFAULT_RATIO, ExplicitRatio, Month, Resident
from rentsplit.extract.residency import parse_residents
from rentsplit.normalize.dates import cell_date, ensure_iso_date, first_day_of_next_month, parse_month
from rentsplit.normalize.numbers import to_number


class TestParseResidents:
    def test_explicit_and_default_ratios(self):
        assert parse_residents("Dani (0.6); Jill") == (
            Resident("Dani", ExplicitRatio(0.6)),
            Resident("Jill", DEFAULT_RATIO),
        )

    def test_names_are_trimmed_not_case_folded(self):
        assert parse_residents("  Mary Ann ;bob-2 ") == (Resident("Mary Ann"), Resident("bob-2"))

    @pytest.mark.parametrize("cell", [None, "", " ; "])
    def test_empty_room(self, cell):
        assert parse_residents(cell) == ()

    @pytest.mark.parametrize("cell", ["Dani (abc)", "Dani (-0.2)", "Dani (nan)"])
    def test_bad_ratio(self, cell):
        with pytest.raises(InvalidRatioError):
            parse_residents(cell)

    @pytest.mark.parametrize("cell", ["Dani, Jill", "(0.5)", 42])
    def test_malformed(self, cell):
        with pytest.raises(InputShapeError):
            parse_residents(cell)


class TestToNumber:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (1500, 1500.0),
            (0.35, 0.35),
            ("1500", 1500.0),
            ("1,500.50", 1500.5),
            ("$1,500.50", 1500.5),
            ("-20", -20.0),
            (".5", 0.5),
        ],
    )
    def test_accepts(self, raw, expected):
        assert to_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, True, "", "abc", "1.2.3", float("nan"), float("inf")])
    def test_rejects(self, raw):
        with pytest.raises(ValueError):
            to_number(raw)


class TestDates:
    def test_iso_date(self):
        assert ensure_iso_date(" 2024-02-29 ") == date(2024, 2, 29)
        with pytest.raises(ValueError):
            ensure_iso_date("2023-02-29")
        with pytest.raises(ValueError):
            ensure_iso_date("29.02.2024")

    def test_parse_month(self):
        assert parse_month("2024-02") == Month(2024, 2)
        with pytest.raises(ValueError):
            parse_month("2024-13")

    def test_cell_date(self):
        assert cell_date(datetime(2024, 2, 1, 0, 0)) == date(2024, 2, 1)
        assert cell_date("2024-02-01") == date(2024, 2, 1)
        assert cell_date("OUTPUT >") is None
        assert cell_date(45000) is None

    def test_first_day_of_next_month(self):
        assert first_day_of_next_month(date(2024, 12, 15)) == date(2025, 1, 1)
        assert first_day_of_next_month(date(2024, 2, 1)) == date(2024, 3, 1)
