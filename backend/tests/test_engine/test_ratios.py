from __future__ import annotations

import logging

import pytest

from rentsplit.engine.errors import EmptyRoomError, InvalidRatioError
from rentsplit.engine.models import ExplicitRatio, Resident
from rentsplit.engine.ratios import resolve_ratios


def _ratios(residents):
    return [(r.name, r.ratio) for r in resolve_ratios(residents, room_name="Big room")]


class TestResolveRatios:
    def test_unset_residents_share_the_remainder(self):
        out = _ratios([Resident("A"), Resident("B", ExplicitRatio(0.3)), Resident("C")])

        assert [name for name, _ in out] == ["A", "B", "C"]
        assert out[0][1] == pytest.approx(0.35)
        assert out[1][1] == pytest.approx(0.3)
        assert out[2][1] == pytest.approx(0.35)

    def test_single_unset_resident_pays_everything(self):
        assert _ratios([Resident("Dani")]) == [("Dani", 1.0)]

    def test_oversubscribed_room_gives_unset_residents_zero(self, caplog):
        with caplog.at_level(logging.WARNING, logger="rentsplit.engine.ratios"):
            out = _ratios([
                Resident("A", ExplicitRatio(0.7)),
                Resident("B", ExplicitRatio(0.6)),
                Resident("C"),
            ])

        assert out == [("A", 0.7), ("B", 0.6), ("C", 0.0)]
        assert "Big room" in caplog.text

    def test_all_explicit_off_sum_is_kept_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="rentsplit.engine.ratios"):
            out = _ratios([Resident("A", ExplicitRatio(0.5)), Resident("B", ExplicitRatio(0.4))])

        assert out == [("A", 0.5), ("B", 0.4)]
        assert "not 1" in caplog.text

    def test_float_noise_is_not_reported(self, caplog):
        with caplog.at_level(logging.WARNING, logger="rentsplit.engine.ratios"):
            _ratios([
                Resident("A", ExplicitRatio(0.1)),
                Resident("B", ExplicitRatio(0.2)),
                Resident("C", ExplicitRatio(0.7)),
            ])

        assert caplog.records == []

    def test_explicit_zero_is_kept(self):
        assert _ratios([Resident("A", ExplicitRatio(0.0)), Resident("B")]) == [("A", 0.0), ("B", 1.0)]

    def test_empty_room_is_rejected(self):
        with pytest.raises(EmptyRoomError):
            resolve_ratios([], room_name="Small room")

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), -0.1])
    def test_invalid_explicit_ratio(self, bad):
        with pytest.raises(InvalidRatioError):
            resolve_ratios([Resident("A", ExplicitRatio(bad))])
