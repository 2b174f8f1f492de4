from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from openpyxl import load_workbook

from rentsplit.core.config import DEFAULT_CORS_ORIGINS, Settings, default_data_dir, parse_cors_origins
from rentsplit.core.errors import UserFacingError
from rentsplit.engine.errors import EmptyRoomError, InvalidRatioError, MissingMonthError, RentCalcError
from rentsplit.services import CalculationService, ProcessingError


@pytest.fixture
def svc(tmp_path: Path) -> CalculationService:
    return CalculationService(tmp_path / "data")


def _rent_doc(residency):
    return {
        "config": {"total_rent": 1000, "rooms": [{"name": "Room A", "base_price": 1000}]},
        "periods": [{"first_day": "2024-02-01", "residency": residency}],
    }


class TestCalculationService:
    def test_rent_document(self, svc):
        result = svc.rent_from_document(_rent_doc({"Room A": "Alice; Bob"}))

        assert [r.cost for r in result.month_totals] == pytest.approx([500, 500])

    def test_calc_errors_become_user_facing(self, svc):
        with pytest.raises(UserFacingError) as ei:
            svc.rent_from_document(_rent_doc({"Room B": "Alice"}))

        err = ei.value
        assert err.code == "CROSS_REFERENCE"
        assert err.stage == "rent"
        assert err.to_dict()["details"] == {"error_type": "UnknownRoomError"}

    def test_shape_errors(self, svc):
        with pytest.raises(UserFacingError) as ei:
            svc.bills_from_document({"bills": []})
        assert ei.value.code == "INPUT_SHAPE"
        assert ei.value.stage == "bills"

    def test_rent_workbook_upload(self, svc, rent_xlsx):
        out = svc.rent_for_workbook(rent_xlsx.read_bytes())

        assert out.parent.parent == svc.data_dir
        assert out.name == "result.xlsx"
        assert load_workbook(out).active["E1"].value == "OUTPUT >"

    def test_bills_workbook_upload(self, svc, bills_xlsx):
        out = svc.bills_for_workbook(bills_xlsx.read_bytes(), sheet_name="Bills")
        assert load_workbook(out)["Bills"]["F1"].value == "Bill: Gas"

    def test_each_upload_gets_its_own_job_dir(self, svc, rent_xlsx):
        a = svc.rent_for_workbook(rent_xlsx.read_bytes())
        b = svc.rent_for_workbook(rent_xlsx.read_bytes())
        assert a.parent != b.parent

    def test_not_a_workbook(self, svc):
        with pytest.raises(ProcessingError):
            svc.rent_for_workbook(b"definitely not xlsx")

    def test_workbook_calc_error(self, svc, rent_xlsx):
        with pytest.raises(UserFacingError) as ei:
            svc.rent_for_workbook(rent_xlsx.read_bytes(), sheet_name="nope")
        assert ei.value.code == "INPUT_SHAPE"
        assert ei.value.stage == "rent_workbook"

    def test_discard_removes_job_dir(self, svc, rent_xlsx):
        out = svc.rent_for_workbook(rent_xlsx.read_bytes())
        assert [p.name for p in out.parent.iterdir()] == ["result.xlsx"]

        svc.discard(out)

        assert list(svc.data_dir.iterdir()) == []

    def test_discard_outside_data_dir(self, svc, tmp_path):
        stray = tmp_path / "elsewhere" / "result.xlsx"
        stray.parent.mkdir()
        stray.write_bytes(b"")

        with pytest.raises(ValueError):
            svc.discard(stray)
        assert stray.exists()

    @pytest.mark.parametrize(
        "data,sheet_name,error",
        [
            (b"definitely not xlsx", None, ProcessingError),
            (None, "nope", UserFacingError),
        ],
        ids=["not-xlsx", "calc-error"],
    )
    def test_failed_upload_leaves_nothing(self, svc, rent_xlsx, data, sheet_name, error):
        data = rent_xlsx.read_bytes() if data is None else data

        with pytest.raises(error):
            svc.rent_for_workbook(data, sheet_name=sheet_name)

        assert list(svc.data_dir.iterdir()) == []

    def test_default_data_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            "rentsplit.services.calculation_service.default_data_dir", lambda: tmp_path / "default"
        )
        assert CalculationService().data_dir == tmp_path / "default"
        assert Settings().data_dir == default_data_dir()

    def test_templates(self, svc):
        rent = svc.new_rent_workbook(date(2024, 6, 1))
        bills = svc.new_bills_workbook()

        assert load_workbook(rent).sheetnames == ["2024-06-01"]
        assert load_workbook(bills).sheetnames == ["Bills"]


class TestUserFacingError:
    @pytest.mark.parametrize(
        "exc,code",
        [
            (InvalidRatioError("x"), "INPUT_SHAPE"),
            (MissingMonthError("x"), "CROSS_REFERENCE"),
            (EmptyRoomError("x"), "INVARIANT"),
            (RentCalcError("x"), "CALCULATION"),
        ],
    )
    def test_codes(self, exc, code):
        assert UserFacingError.from_calc_error(exc).code == code

    def test_to_dict_skips_empty_fields(self):
        assert UserFacingError(code="X", message="m").to_dict() == {"code": "X", "message": "m"}


class TestSettings:
    def test_defaults(self):
        s = Settings.from_env({})
        assert s.cors_allow_origins == DEFAULT_CORS_ORIGINS
        assert s.log_level == "INFO"
        assert s.data_dir.name == "data"

    def test_from_env(self, tmp_path):
        s = Settings.from_env(
            {
                "CORS_ALLOW_ORIGINS": "http://a.test, ,http://b.test",
                "RENTSPLIT_DATA_DIR": str(tmp_path),
                "RENTSPLIT_LOG_LEVEL": "debug",
            }
        )
        assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
        assert s.data_dir == tmp_path
        assert s.log_level == "DEBUG"

    def test_parse_cors_origins_empty(self):
        assert parse_cors_origins("") == DEFAULT_CORS_ORIGINS
