"""Tests für die nachträgliche Prüfung der Belegungsmatrix."""

import pytest

from analysis.occupancy_validator import OccupancyValidator
from engine.core import EngineResult, TimetableEngine
from engine.diagnostics import CollectingDiagnostics
from engine.placement import UNPLACED


@pytest.fixture
def result(data_factory) -> EngineResult:
    """Zwei platzierte Stunden (eine fixiert, eine Doppelstunde) + eine offene."""
    data = data_factory(
        courses=[
            {"id": "K1", "subjects": ["S1"], "groups": ["C1"], "teachers": ["T1"]},
            {"id": "K2", "subjects": ["S2"], "groups": ["C2"], "teachers": ["T2"],
             "preferredRooms": ["R1"]},
        ],
        lessons=[
            {"id": "L1", "course": "K1", "day": 0, "hour": 0, "fixed": True},
            {"id": "L2", "course": "K2", "day": 1, "hour": 0, "duration": 2},
            {"id": "L3", "course": "K2"},
        ],
    )
    return TimetableEngine(data, diagnostics=CollectingDiagnostics()).build()


class TestOccupancyValidator:
    def test_consistent_build(self, result):
        """Frisch aufgebautes Ergebnis: keine Fehler, offene Stunde als Warnung."""
        report = OccupancyValidator().validate(result)
        assert report.is_valid
        assert [v.constraint for v in report.violations] == ["unplaced"]
        assert report.violations[0].entity == "A3"

    def test_cell_mismatch(self, result):
        """Zelle einer platzierten Aktivität überschrieben."""
        result.occupancy[1 * result.slots_per_week + 0] = 0
        report = OccupancyValidator().validate(result)
        assert not report.is_valid
        assert "cell_mismatch" in {v.constraint for v in report.violations}

    def test_foreign_cell(self, result):
        """Aktivität in einer Zelle einer Ressource, die sie nicht besitzt."""
        r2 = 4
        result.occupancy[r2 * result.slots_per_week + 6] = 2
        report = OccupancyValidator().validate(result)
        foreign = [v for v in report.violations if v.constraint == "foreign_cell"]
        assert len(foreign) == 1
        assert foreign[0].entity == "R4"

    def test_unplaced_activity_in_matrix(self, result):
        """Uneingeplante Aktivität darf keine Zelle belegen."""
        result.occupancy[2 * result.slots_per_week + 20] = 3
        report = OccupancyValidator().validate(result)
        foreign = [v for v in report.violations if v.constraint == "foreign_cell"]
        assert foreign and "uneingeplant" in foreign[0].description

    def test_fixed_unplaced(self, result):
        result.activity(1).placement = UNPLACED
        report = OccupancyValidator().validate(result)
        assert "fixed_unplaced" in {v.constraint for v in report.violations}
        assert not report.is_valid

    def test_day_overflow(self, result):
        a = result.activity(2)
        a.placement = 5
        report = OccupancyValidator().validate(result)
        assert "day_overflow" in {v.constraint for v in report.violations}

    def test_print_rich(self, result, capsys):
        OccupancyValidator().validate(result).print_rich()
        assert "Belegungs-Prüfung" in capsys.readouterr().out
