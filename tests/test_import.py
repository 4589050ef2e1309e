"""Tests für W365-Import, Eingangsprüfung und Constraint-Katalog."""

import json
import logging

import pytest

from data.w365_import import load_w365, parse_w365
from models.constraints import (
    MAXWEIGHT,
    AutomaticDifferentDays,
    ConstraintCollection,
    DaysBetween,
    ParallelCourses,
)
from models.room import RoomChoiceGroup
from models.school_data import InputError, TimetableData
from models.timeslot import TimeSlot


# ─── ZEITSLOTS ────────────────────────────────────────────────────────────────

class TestTimeSlot:
    def test_linear_roundtrip(self):
        ts = TimeSlot(day=2, hour=3)
        assert ts.linear(6) == 15
        assert TimeSlot.from_linear(15, 6) == ts

    def test_str(self):
        assert str(TimeSlot(day=0, hour=0)) == "Mo 1."

    def test_hashable(self):
        assert len({TimeSlot(day=1, hour=1), TimeSlot(day=1, hour=1)}) == 1


# ─── IMPORT ───────────────────────────────────────────────────────────────────

class TestW365Import:
    def test_aliases(self, data_factory):
        """W365-Feldnamen (camelCase, shortcut) werden übernommen."""
        data = data_factory()
        assert data.info.institution == "Testschule"
        assert data.info.first_afternoon_hour == 4
        assert data.teachers[0].tag == "MÜL"
        assert data.classes[0].year == 5
        assert data.hours_per_day == 6
        assert data.slots_per_week == 30

    def test_adds_default_different_days(self, data_factory):
        """Fehlt AutomaticDifferentDays, wird sie hart ergänzt."""
        data = data_factory()
        add = data.constraints.automatic_different_days()
        assert add is not None
        assert add.weight == MAXWEIGHT

    def test_keeps_existing_different_days(self, data_factory):
        data = data_factory(constraints=[
            {"constraint": "AutomaticDifferentDays", "weight": 20, "consecutiveIfSameDay": True},
        ])
        assert len(data.constraints) == 1
        add = data.constraints.automatic_different_days()
        assert add.consecutive_if_same_day
        assert not add.is_hard

    def test_constraints_empty_object(self, raw_factory):
        """W365 liefert `constraints` als leeres Objekt."""
        raw = raw_factory(constraints={})
        data = parse_w365(raw)
        assert len(data.constraints) == 1
        assert data.constraints.automatic_different_days().is_hard

    def test_constraints_object_by_variant(self, raw_factory):
        """Objekt-Form: Variante → Eintrag oder Liste, Reihenfolge bleibt erhalten."""
        raw = raw_factory(constraints={
            "DaysBetween": [
                {"courses": ["K1"], "daysBetween": 1},
                {"courses": ["K2"], "daysBetween": 2, "weight": 40},
            ],
            "AutomaticDifferentDays": {"weight": 80},
        })
        data = parse_w365(raw)
        assert [c.constraint for c in data.constraints] == [
            "DaysBetween", "DaysBetween", "AutomaticDifferentDays",
        ]
        assert data.constraints.different_days_exempt() == {"K1"}
        assert not data.constraints.different_days_is_hard()

    def test_schema_error(self, raw_factory):
        raw = raw_factory(lessons=[{"id": "L1", "course": "K1", "duration": 0}])
        with pytest.raises(InputError):
            parse_w365(raw)

    def test_unknown_constraint(self, raw_factory):
        raw = raw_factory(constraints=[{"constraint": "Unbekannt"}])
        with pytest.raises(InputError):
            parse_w365(raw)

    def test_load_file(self, raw_factory, tmp_path):
        path = tmp_path / "schule.json"
        path.write_text(json.dumps(raw_factory()), encoding="utf-8")
        data = load_w365(path)
        assert len(data.classes) == 2

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_w365(tmp_path / "fehlt.json")

    def test_load_broken_json(self, tmp_path):
        path = tmp_path / "kaputt.json"
        path.write_text("{nicht json", encoding="utf-8")
        with pytest.raises(InputError):
            load_w365(path)

    def test_save_json_roundtrip(self, data_factory, tmp_path):
        data = data_factory()
        path = tmp_path / "out.json"
        data.save_json(path)
        loaded = TimetableData.load_json(path)
        assert loaded.info.institution == "Testschule"
        assert [t.tag for t in loaded.teachers] == ["MÜL", "SCH"]


# ─── EINGANGSPRÜFUNG ──────────────────────────────────────────────────────────

class TestCheck:
    def test_midday_break_sorted(self, raw_factory):
        raw = raw_factory()
        raw["w365TT"]["middayBreak"] = [3, 2]
        data = parse_w365(raw)
        assert data.info.midday_break == [2, 3]

    def test_midday_break_not_contiguous(self, raw_factory):
        """Nicht zusammenhängende Mittagspause ist fatal."""
        raw = raw_factory()
        raw["w365TT"]["middayBreak"] = [2, 4]
        with pytest.raises(InputError, match="Mittagspause"):
            parse_w365(raw)

    @pytest.mark.parametrize("key", ["days", "hours", "teachers", "subjects", "rooms", "classes"])
    def test_missing_basics(self, raw_factory, key):
        raw = raw_factory()
        raw[key] = []
        with pytest.raises(InputError):
            parse_w365(raw)

    def test_registry(self, data_factory):
        data = data_factory(subCourses=[{"id": "K1"}])
        assert data.element("T1").name == "Müller"
        assert data.has_element("$$K1")
        assert not data.has_element("K1")
        with pytest.raises(KeyError):
            data.element("XYZ")

    def test_duplicate_id_logged(self, raw_factory, caplog):
        raw = raw_factory()
        raw["rooms"].append({"id": "T1", "name": "Doppelt"})
        with caplog.at_level(logging.ERROR):
            data = parse_w365(raw)
        assert "mehrfach" in caplog.text
        assert data.element("T1").name == "Müller"

    def test_new_id_after_indexed_ids(self, raw_factory):
        raw = raw_factory()
        raw["rooms"].append({"id": "#7", "name": "Raum 7"})
        data = parse_w365(raw)
        assert data.new_id() == "#8"

    def test_unknown_teacher(self, raw_factory):
        raw = raw_factory(courses=[{"id": "K1", "subjects": ["S1"], "teachers": ["T99"]}])
        with pytest.raises(InputError, match="K1.*T99"):
            parse_w365(raw)

    def test_unknown_group(self, raw_factory):
        """Gruppen-Referenz muss eine Klasse oder eine Teilungsgruppe sein."""
        raw = raw_factory(subCourses=[{"id": "K1", "groups": ["G9"]}])
        with pytest.raises(InputError, match="G9"):
            parse_w365(raw)

    def test_group_outside_division(self, raw_factory):
        raw = raw_factory(courses=[{"id": "K1", "subjects": ["S1"], "groups": ["G3"]}])
        raw["groups"].append({"id": "G3", "shortcut": "X"})
        with pytest.raises(InputError, match="G3"):
            parse_w365(raw)

    def test_unknown_room_group_member(self, raw_factory):
        raw = raw_factory(roomGroups=[{"id": "RG1", "rooms": ["R1", "R9"]}])
        with pytest.raises(InputError, match="RG1.*R9"):
            parse_w365(raw)

    def test_single_subject(self, data_factory):
        data = data_factory(courses=[{"id": "K1", "subjects": ["S2"]}])
        assert data.courses[0].subject == "S2"

    def test_combined_subject(self, data_factory):
        """Mehrere Fächer → ein kombiniertes Fach, wiederverwendet."""
        data = data_factory(courses=[
            {"id": "K1", "subjects": ["S1", "S2"]},
            {"id": "K2", "subjects": ["S1", "S2"]},
        ])
        ref = data.courses[0].subject
        assert ref == data.courses[1].subject
        subject = data.element(ref)
        assert subject.name == "Mathematik,Deutsch"
        assert subject.tag == "X1"
        assert len(data.subjects) == 3

    def test_combined_subject_unknown(self, raw_factory):
        raw = raw_factory(courses=[{"id": "K1", "subjects": ["S1", "S9"]}])
        with pytest.raises(InputError):
            parse_w365(raw)

    def test_preferred_rooms_choice_group(self, data_factory):
        """Mehrere Wunschräume → eine (geteilte) RoomChoiceGroup."""
        data = data_factory(courses=[
            {"id": "K1", "subjects": ["S1"], "preferredRooms": ["R1", "R2"]},
            {"id": "K2", "subjects": ["S1"], "preferredRooms": ["R1", "R2"]},
            {"id": "K3", "subjects": ["S1"], "preferredRooms": ["R2"]},
        ])
        ref = data.courses[0].room
        assert ref == data.courses[1].room
        rcg = data.element(ref)
        assert isinstance(rcg, RoomChoiceGroup)
        assert rcg.rooms == ["R1", "R2"]
        assert data.courses[2].room == "R2"

    def test_existing_choice_group_reused(self, data_factory):
        data = data_factory(
            courses=[{"id": "K1", "subjects": ["S1"], "preferredRooms": ["R1", "R2"]}],
            roomChoiceGroups=[{"id": "RC1", "rooms": ["R1", "R2"]}],
        )
        assert data.courses[0].room == "RC1"
        assert len(data.room_choice_groups) == 1

    def test_zero_afternoons(self, raw_factory):
        """maxAfternoons = 0 sperrt alle Stunden ab firstAfternoonHour."""
        raw = raw_factory()
        raw["teachers"][1]["maxAfternoons"] = 0
        raw["teachers"][1]["absences"] = [{"day": 0, "hour": 5}, {"day": 0, "hour": 0}]
        raw["classes"][1]["maxAfternoons"] = 0
        data = parse_w365(raw)
        t2 = data.teachers[1]
        assert len(t2.absences) == 11
        assert TimeSlot(day=0, hour=0) in t2.absences
        assert TimeSlot(day=4, hour=4) in t2.absences
        assert len(data.classes[1].absences) == 10
        assert data.teachers[0].absences == []

    def test_summary(self, data_factory):
        text = data_factory().summary()
        assert "5 Tage × 6 Stunden" in text
        assert "Lehrkräfte: 2" in text


# ─── CONSTRAINTS ──────────────────────────────────────────────────────────────

class TestConstraints:
    def test_new_registers_in_order(self):
        cc = ConstraintCollection()
        cc.new_lessons_end_day("K1")
        cc.new_before_after_hour(["K1", "K2"], hour=4, after=True, weight=60)
        cc.new_parallel_courses(["K1", "K2"])
        assert [c.constraint for c in cc] == ["LessonsEndDay", "BeforeAfterHour", "ParallelCourses"]
        assert cc.tags() == {"LessonsEndDay": 1, "BeforeAfterHour": 1, "ParallelCourses": 1}

    def test_weight_range(self):
        with pytest.raises(ValueError):
            DaysBetween(courses=["K1"], days_between=2, weight=0)
        with pytest.raises(ValueError):
            DaysBetween(courses=["K1"], days_between=2, weight=101)

    def test_hard_soft(self):
        assert AutomaticDifferentDays().is_hard
        assert not AutomaticDifferentDays(weight=99).is_hard

    def test_no_reference_validation(self):
        """ParallelCourses mit unbekannten Kursen wird ohne Prüfung registriert."""
        cc = ConstraintCollection()
        c = cc.new_parallel_courses(["gibt", "es nicht"])
        assert isinstance(c, ParallelCourses)
        assert len(cc) == 1

    def test_different_days_default_hard(self):
        cc = ConstraintCollection()
        assert cc.different_days_is_hard()
        cc.new_automatic_different_days(weight=10)
        assert not cc.different_days_is_hard()

    def test_exempt_courses(self):
        cc = ConstraintCollection()
        cc.new_days_between(["K1", "K2"], days_between=1)
        cc.new_days_between(["K3"], days_between=2)
        assert cc.different_days_exempt() == {"K1", "K2"}

    def test_json_roundtrip_tags(self):
        """Serialisierung mit Varianten-Tag und W365-Feldnamen."""
        cc = ConstraintCollection()
        cc.new_days_between_join("K1", "K2", days_between=2, consecutive_if_same_day=True)
        cc.new_not_on_same_day(["S1", "S2"], weight=70)
        raw = json.loads(cc.model_dump_json(by_alias=True))
        assert raw[0]["constraint"] == "DaysBetweenJoin"
        assert raw[0]["daysBetween"] == 2
        assert raw[0]["consecutiveIfSameDay"] is True
        loaded = ConstraintCollection.model_validate(raw)
        assert loaded.of_type("NotOnSameDay")[0].weight == 70
