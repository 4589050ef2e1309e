"""Gemeinsame Testdaten: ein kleiner W365-Datensatz.

Ressourcen-Indizes des Standard-Datensatzes:
  1 = T1 (MÜL), 2 = T2 (SCH), 3 = R1, 4 = R2,
  5 = 5A.A, 6 = 5A.B (Klasse C1 mit Teilung A/B), 7 = 6B (Klasse C2)
Raster: 5 Tage × 6 Stunden (30 Slots), Mittagspause Stunde 3, Nachmittag ab 4.
"""

import copy
from typing import Any, Callable

import pytest

from data.w365_import import parse_w365
from models.school_data import TimetableData

DAY_NAMES = ["Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag"]

BASE_RAW: dict[str, Any] = {
    "w365TT": {
        "schoolName": "Testschule",
        "firstAfternoonHour": 4,
        "middayBreak": [3],
        "scenario": "Test",
    },
    "days": [
        {"id": f"D{i}", "name": name, "shortcut": name[:2]}
        for i, name in enumerate(DAY_NAMES)
    ],
    "hours": [
        {
            "id": f"H{i}",
            "name": f"{i + 1}. Stunde",
            "shortcut": str(i + 1),
            "start": f"{8 + i:02d}:00",
            "end": f"{8 + i:02d}:45",
        }
        for i in range(6)
    ],
    "teachers": [
        {"id": "T1", "name": "Müller", "firstname": "Anna", "shortcut": "mül"},
        {"id": "T2", "name": "Schmidt", "firstname": "Ben", "shortcut": "SCH"},
    ],
    "subjects": [
        {"id": "S1", "name": "Mathematik", "shortcut": "Ma"},
        {"id": "S2", "name": "Deutsch", "shortcut": "De"},
    ],
    "rooms": [
        {"id": "R1", "name": "Raum 1", "shortcut": "R1"},
        {"id": "R2", "name": "Raum 2", "shortcut": "R2"},
    ],
    "groups": [
        {"id": "G1", "shortcut": "A"},
        {"id": "G2", "shortcut": "B"},
    ],
    "classes": [
        {
            "id": "C1", "name": "Klasse 5a", "shortcut": "5A", "level": 5,
            "letter": "a",
            "divisions": [{"id": "DV1", "name": "AB", "groups": ["G1", "G2"]}],
        },
        {"id": "C2", "name": "Klasse 6b", "shortcut": "6B", "level": 6, "letter": "b"},
    ],
    "courses": [],
    "lessons": [],
}


def make_raw(
    courses: list[dict] | None = None,
    lessons: list[dict] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Kopie des Standard-Datensatzes mit eigenen Kursen/Stunden."""
    raw = copy.deepcopy(BASE_RAW)
    raw["courses"] = courses or []
    raw["lessons"] = lessons or []
    raw.update(overrides)
    return raw


@pytest.fixture
def raw_factory() -> Callable[..., dict[str, Any]]:
    return make_raw


@pytest.fixture
def data_factory() -> Callable[..., TimetableData]:
    """Baut geprüfte TimetableData aus Kursen und Stunden."""

    def factory(courses=None, lessons=None, **overrides) -> TimetableData:
        return parse_w365(make_raw(courses, lessons, **overrides))

    return factory
