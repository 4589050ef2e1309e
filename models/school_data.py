"""TimetableData: Vollständiger Stundenplan-Datensatz im W365-Schema (Pydantic v2).

Enthält die Element-Registry (Referenz → Element) und die Eingangsprüfung,
die vor dem Aufbau der Aktivitäten laufen muss.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from models.constraints import ConstraintCollection
from models.course import Course, EpochPlan, Lesson, SubCourse, SuperCourse
from models.room import Room, RoomChoiceGroup, RoomGroup
from models.school_class import Group, SchoolClass
from models.subject import Subject
from models.teacher import Teacher
from models.timeslot import Day, Hour, TimeSlot

logger = logging.getLogger(__name__)


class InputError(Exception):
    """Strukturell fehlerhafte Eingabe: der Lauf kann nicht fortgesetzt werden."""


class SchoolInfo(BaseModel):
    """Kopfdaten des W365-Exports."""

    model_config = ConfigDict(populate_by_name=True)

    institution: str = Field("", alias="schoolName")
    first_afternoon_hour: int = Field(0, alias="firstAfternoonHour")
    midday_break: list[int] = Field([], alias="middayBreak")
    reference: str = Field("", alias="scenario")


class TimetableData(BaseModel):
    """Vollständiger Datensatz: Zeitraster, Personal, Räume, Klassen, Kurse, Stunden."""

    model_config = ConfigDict(populate_by_name=True)

    info: SchoolInfo = Field(default_factory=SchoolInfo, alias="w365TT")
    days: list[Day] = []
    hours: list[Hour] = []
    teachers: list[Teacher] = []
    subjects: list[Subject] = []
    rooms: list[Room] = []
    room_groups: list[RoomGroup] = Field([], alias="roomGroups")
    room_choice_groups: list[RoomChoiceGroup] = Field([], alias="roomChoiceGroups")
    classes: list[SchoolClass] = []
    groups: list[Group] = []
    courses: list[Course] = []
    super_courses: list[SuperCourse] = Field([], alias="superCourses")
    sub_courses: list[SubCourse] = Field([], alias="subCourses")
    lessons: list[Lesson] = []
    epoch_plans: list[EpochPlan] = Field([], alias="epochPlans")
    constraints: ConstraintCollection = Field(default_factory=ConstraintCollection)

    @field_validator("constraints", mode="before")
    @classmethod
    def normalize_constraints(cls, v: Any) -> Any:
        """W365 liefert `constraints` als Objekt: Variante → Eintrag oder Liste."""
        if not isinstance(v, dict):
            return v
        items: list[Any] = []
        for tag, entry in v.items():
            for c in entry if isinstance(entry, list) else [entry]:
                if isinstance(c, dict):
                    c = {"constraint": tag, **c}
                items.append(c)
        return items

    # Nicht Teil des JSON-Objekts
    _elements: dict[str, Any] = PrivateAttr(default_factory=dict)
    _max_id: int = PrivateAttr(0)
    _subject_tags: dict[str, str] = PrivateAttr(default_factory=dict)
    _subject_names: dict[str, str] = PrivateAttr(default_factory=dict)
    _room_choice_names: dict[str, str] = PrivateAttr(default_factory=dict)

    # ─── Kalender ───

    @property
    def hours_per_day(self) -> int:
        return len(self.hours)

    @property
    def slots_per_week(self) -> int:
        return len(self.days) * len(self.hours)

    # ─── Element-Registry ───

    def new_id(self) -> str:
        """Nächste freie "indizierte" Id ("#<n>")."""
        return f"#{self._max_id + 1}"

    def add_element(self, ref: str, element: Any) -> None:
        if ref in self._elements:
            logger.error(f"Element-Id mehrfach definiert: {ref}")
            return
        self._elements[ref] = element
        if ref.startswith("#"):
            try:
                i = int(ref[1:])
            except ValueError:
                return
            self._max_id = max(self._max_id, i)

    def element(self, ref: str) -> Any:
        """Element zur Referenz; KeyError wenn unbekannt."""
        return self._elements[ref]

    def has_element(self, ref: str) -> bool:
        return ref in self._elements

    # ─── Eingangsprüfung ───

    def check(self) -> None:
        """Initialisiert die Registry und prüft die globale Struktur.

        Raises:
            InputError: bei fehlenden Grunddaten oder nicht zusammenhängender
                Mittagspause. Diese Fehler sind fatal für den ganzen Lauf.
        """
        if self.info.midday_break:
            mb = sorted(self.info.midday_break)
            if mb[-1] - mb[0] >= len(mb):
                raise InputError(f"Mittagspause nicht zusammenhängend: {mb}")
            self.info.midday_break = mb

        for label, items in (
            ("Tage", self.days),
            ("Stunden", self.hours),
            ("Lehrkräfte", self.teachers),
            ("Fächer", self.subjects),
            ("Räume", self.rooms),
            ("Klassen", self.classes),
        ):
            if not items:
                raise InputError(f"Keine {label} definiert")

        self._elements = {}
        self._max_id = 0
        self._subject_tags = {}
        self._subject_names = {}
        self._room_choice_names = {}

        for collection in (
            self.days, self.hours, self.teachers, self.subjects, self.rooms,
            self.classes, self.room_groups, self.room_choice_groups,
            self.groups, self.courses, self.super_courses, self.lessons,
            self.epoch_plans,
        ):
            for item in collection:
                self.add_element(item.id, item)
        for sc in self.sub_courses:
            self.add_element(sc.element_id, sc)

        for s in self.subjects:
            if s.tag:
                self._subject_tags[s.tag] = s.id
        for rcg in self.room_choice_groups:
            self._room_choice_names[self._room_key(rcg.rooms)] = rcg.id

        self._check_references()

        for course in [*self.courses, *self.sub_courses]:
            self._resolve_subject(course)
            self._resolve_room(course)

        self._handle_zero_afternoons()

    def _check_references(self) -> None:
        """Lehrkräfte, Gruppen und Raumgruppen-Mitglieder müssen auflösbar sein."""
        teachers = {t.id for t in self.teachers}
        rooms = {r.id for r in self.rooms}
        groups = {c.id for c in self.classes}
        for c in self.classes:
            for d in c.divisions:
                groups.update(d.groups)

        for course in [*self.courses, *self.sub_courses]:
            for t in course.teachers:
                if t not in teachers:
                    raise InputError(f"Kurs {course.id}: unbekannte Lehrkraft {t}")
            for g in course.groups:
                if g not in groups:
                    raise InputError(f"Kurs {course.id}: unbekannte Gruppe {g}")
        for rg in self.room_groups:
            for r in rg.rooms:
                if r not in rooms:
                    raise InputError(f"Raumgruppe {rg.id}: unbekannter Raum {r}")

    # ─── Fächer ───

    def _new_subject_tag(self) -> str:
        i = 0
        while True:
            i += 1
            tag = f"X{i}"
            if tag not in self._subject_tags:
                return tag

    def make_new_subject(self, tag: str, name: str) -> str:
        """Legt ein neues Fach an und gibt dessen Referenz zurück."""
        stag = tag or self._new_subject_tag()
        sref = self.new_id()
        subject = Subject(id=sref, tag=stag, name=name)
        self.subjects.append(subject)
        self.add_element(sref, subject)
        self._subject_tags[stag] = sref
        if not tag and name:
            self._subject_names[name] = stag
        return sref

    def _resolve_subject(self, course: Course | SubCourse) -> None:
        """Mehrere Fächer eines Kurses werden zu einem kombinierten Fach."""
        if course.subject or not course.subjects:
            return
        if len(course.subjects) == 1:
            course.subject = course.subjects[0]
            return
        for s in course.subjects:
            if not self.has_element(s):
                raise InputError(f"Kurs {course.id}: unbekanntes Fach {s}")
        name = ",".join(self.element(s).name for s in course.subjects)
        stag = self._subject_names.get(name)
        if stag is not None:
            course.subject = self._subject_tags[stag]
        else:
            course.subject = self.make_new_subject("", name)

    # ─── Räume ───

    def _room_key(self, rooms: list[str]) -> str:
        return ",".join(
            (self._elements[r].tag or self._elements[r].name)
            if r in self._elements else r
            for r in rooms
        )

    def _resolve_room(self, course: Course | SubCourse) -> None:
        """Leitet `room` aus den Wunschräumen ab (Raum oder Auswahlgruppe)."""
        if course.room or not course.preferred_rooms:
            return
        if len(course.preferred_rooms) == 1:
            course.room = course.preferred_rooms[0]
            return
        key = self._room_key(course.preferred_rooms)
        ref = self._room_choice_names.get(key)
        if ref is None:
            ref = self.new_id()
            rcg = RoomChoiceGroup(id=ref, name=key, rooms=list(course.preferred_rooms))
            self.room_choice_groups.append(rcg)
            self.add_element(ref, rcg)
            self._room_choice_names[key] = ref
        course.room = ref

    # ─── Nachmittage ───

    def _handle_zero_afternoons(self) -> None:
        """max_afternoons == 0 sperrt alle Nachmittagsstunden."""
        fah = self.info.first_afternoon_hour
        if fah <= 0:
            return
        for item in [*self.teachers, *self.classes]:
            if item.max_afternoons != 0:
                continue
            blocked = set(item.absences)
            for d in range(len(self.days)):
                for h in range(fah, len(self.hours)):
                    blocked.add(TimeSlot(day=d, hour=h))
            item.absences = sorted(blocked, key=lambda ts: (ts.day, ts.hour))

    # ─── Übersicht & Persistenz ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        fixed = sum(1 for l in self.lessons if l.fixed)
        placed = sum(1 for l in self.lessons if l.has_slot)
        lines = [
            f"Schule: {self.info.institution}" if self.info.institution else "",
            f"Raster: {len(self.days)} Tage × {len(self.hours)} Stunden",
            f"Lehrkräfte: {len(self.teachers)}",
            f"Klassen: {len(self.classes)} (Gruppen: {len(self.groups)})",
            f"Räume: {len(self.rooms)}",
            f"Kurse: {len(self.courses)} (Blockkurse: {len(self.super_courses)})",
            f"Stunden: {len(self.lessons)} ({placed} mit Zeit, {fixed} fixiert)",
            f"Constraints: {len(self.constraints)}",
        ]
        return "\n".join(l for l in lines if l)

    def save_json(self, path: Path) -> None:
        """Speichert den Datensatz im W365-Format."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2, by_alias=True))

    @classmethod
    def load_json(cls, path: Path) -> "TimetableData":
        """Lädt einen Datensatz aus einer W365-JSON-Datei (ohne Prüfung)."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
