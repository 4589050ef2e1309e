"""Aufbereitete Kursinformationen für den Platzierungskern.

Für jeden Course und jeden SuperCourse entsteht ein CourseInfo mit Fach,
Gruppen, Lehrkräften, Pflichträumen und Raumalternativen. Ein SuperCourse
vereinigt die Angaben seiner SubCourses. Die Stundenliste (TtLesson) behält
die Reihenfolge der Eingabe bei.
"""

from dataclasses import dataclass, field

from engine.diagnostics import DiagnosticSink
from models.course import Lesson, SuperCourse
from models.room import Room, RoomChoiceGroup, RoomGroup
from models.school_data import TimetableData


@dataclass
class CourseInfo:
    id: str
    subject: str
    groups: list[str] = field(default_factory=list)
    teachers: list[str] = field(default_factory=list)
    rooms: list[str] = field(default_factory=list)              # Pflichträume
    room_choices: list[list[str]] = field(default_factory=list)  # je eine Alternative
    lessons: list[str] = field(default_factory=list)
    is_super: bool = False


@dataclass
class TtLesson:
    lesson: Lesson
    course_info: CourseInfo


def _extend_unique(target: list, items: list) -> None:
    for item in items:
        if item not in target:
            target.append(item)


class TtInfo:
    """Kursinformationen + Stundenliste eines geprüften Datensatzes."""

    def __init__(self, data: TimetableData, diagnostics: DiagnosticSink) -> None:
        self.data = data
        self.diagnostics = diagnostics
        self.course_infos: dict[str, CourseInfo] = {}
        self.lessons: list[TtLesson] = []
        # Gruppen-Referenz → Anzeige ("5A.L"), Klassen-Referenz → "5A"
        self.group_labels: dict[str, str] = {}

        self._build_group_labels()
        self._build_course_infos()
        self._build_lessons()

    # ─── Aufbau ───

    def _build_group_labels(self) -> None:
        tags = {g.id: g.tag or g.id for g in self.data.groups}
        for c in self.data.classes:
            self.group_labels[c.id] = c.label
            for d in c.divisions:
                for g in d.groups:
                    self.group_labels[g] = f"{c.label}.{tags.get(g, g)}"

    def _rooms_of(self, ref: str, course_id: str) -> tuple[list[str], list[list[str]]]:
        """(Pflichträume, Alternativen) für einen Raum-Eintrag des Kurses."""
        if not ref:
            return [], []
        if not self.data.has_element(ref):
            self.diagnostics.error(f"Kurs {course_id}: unbekannter Raum {ref}")
            return [], []
        element = self.data.element(ref)
        if isinstance(element, Room):
            return [ref], []
        if isinstance(element, RoomGroup):
            return list(element.rooms), []
        if isinstance(element, RoomChoiceGroup):
            return [], [list(element.rooms)]
        self.diagnostics.error(f"Kurs {course_id}: {ref} ist kein Raum")
        return [], []

    def _build_course_infos(self) -> None:
        for course in self.data.courses:
            rooms, choices = self._rooms_of(course.room, course.id)
            self.course_infos[course.id] = CourseInfo(
                id=course.id,
                subject=course.subject,
                groups=list(course.groups),
                teachers=list(course.teachers),
                rooms=rooms,
                room_choices=choices,
            )
        for spc in self.data.super_courses:
            self.course_infos[spc.id] = self._super_course_info(spc)

    def _super_course_info(self, spc: SuperCourse) -> CourseInfo:
        cinfo = CourseInfo(id=spc.id, subject=spc.subject, is_super=True)
        for sub in self.data.sub_courses:
            if spc.id not in sub.super_courses:
                continue
            _extend_unique(cinfo.groups, sub.groups)
            _extend_unique(cinfo.teachers, sub.teachers)
            rooms, choices = self._rooms_of(sub.room, sub.id)
            _extend_unique(cinfo.rooms, rooms)
            cinfo.room_choices.extend(choices)
        return cinfo

    def _build_lessons(self) -> None:
        for lesson in self.data.lessons:
            cinfo = self.course_infos.get(lesson.course)
            if cinfo is None:
                self.diagnostics.error(
                    f"Stunde {lesson.id}: unbekannter Kurs {lesson.course} – ignoriert"
                )
                continue
            cinfo.lessons.append(lesson.id)
            self.lessons.append(TtLesson(lesson=lesson, course_info=cinfo))

    # ─── Anzeige ───

    def subject_tag(self, ref: str) -> str:
        if ref and self.data.has_element(ref):
            s = self.data.element(ref)
            return s.tag or s.name
        return ref or "?"

    def teacher_tag(self, ref: str) -> str:
        if self.data.has_element(ref):
            return self.data.element(ref).label
        return ref

    def room_tag(self, ref: str) -> str:
        if self.data.has_element(ref):
            r = self.data.element(ref)
            return r.tag or r.name
        return ref

    def view(self, cinfo: CourseInfo) -> str:
        """Kurzbeschreibung eines Kurses für Meldungen."""
        groups = ",".join(self.group_labels.get(g, g) for g in cinfo.groups)
        teachers = ",".join(self.teacher_tag(t) for t in cinfo.teachers)
        kind = "SuperCourse" if cinfo.is_super else "Course"
        return (
            f"{kind} {cinfo.id}: {self.subject_tag(cinfo.subject)}"
            f" / {groups or '-'} / {teachers or '-'}"
        )

