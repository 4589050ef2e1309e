"""Aufbau der Aktivitäten aus den Unterrichtsstunden.

Pro Stunde genau eine Aktivität (Index = Position + 1). Ressourcen in dieser
Reihenfolge: Lehrkräfte, Atomgruppen der Gruppen-Referenzen (Duplikate
werden übersprungen, einmal pro Kurs gemeldet), Pflichträume. Raum-
Alternativen (RoomChoiceGroup) gehören nicht dazu.

Danach zwei Durchläufe:
  1. fixierte Stunden platzieren; Konflikt → Fehler, Aktivität wird
     unfixiert und uneingeplant
  2. nicht fixierte Stunden mit Zeitangabe platzieren; Konflikt → Warnung,
     Aktivität bleibt uneingeplant
Fixierte Stunden gewinnen damit immer gegen nicht fixierte.
"""

import logging

from engine.course_info import CourseInfo, TtInfo
from engine.diagnostics import DiagnosticSink
from engine.placement import UNPLACED, Activity, PlacementEngine
from engine.resources import ResourceIndex
from models.constraints import ConstraintCollection

logger = logging.getLogger(__name__)


class ActivityBuilder:
    """Erzeugt die Aktivitäten und platziert die vorgegebenen Stunden.

    Verwendung:
        builder = ActivityBuilder(ttinfo, resources, engine, diagnostics)
        activities = builder.build()
    """

    def __init__(
        self,
        ttinfo: TtInfo,
        resources: ResourceIndex,
        engine: PlacementEngine,
        diagnostics: DiagnosticSink,
        constraints: ConstraintCollection | None = None,
        possible_slots: bool = True,
        different_days: bool = True,
    ) -> None:
        self.ttinfo = ttinfo
        self.resources = resources
        self.engine = engine
        self.diagnostics = diagnostics
        self.constraints = constraints if constraints is not None else ConstraintCollection()
        self._with_possible_slots = possible_slots
        self._with_different_days = different_days

        self._warned: set[str] = set()        # Kurse mit Atomgruppen-Meldung
        self._to_place: list[int] = []        # nicht fixiert, mit Zeitangabe

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def build(self) -> list[Activity]:
        self._make_activities()
        self._place_fixed()
        if self._with_possible_slots:
            self._make_possible_slots()
        if self._with_different_days:
            self._make_different_days()
        self._place_unfixed()

        placed = sum(1 for a in self.engine.activities[1:] if a and a.is_placed)
        logger.info(
            f"Aktivitäten: {len(self.engine.activities) - 1} | "
            f"platziert: {placed}"
        )
        return [a for a in self.engine.activities[1:] if a is not None]

    # ─── Aufbau ───────────────────────────────────────────────────────────────

    def resources_for(self, cinfo: CourseInfo) -> list[int]:
        """Ressourcenmenge eines Kurses ohne Duplikate."""
        resources: list[int] = []
        for tref in cinfo.teachers:
            rix = self.resources.teacher(tref)
            if rix not in resources:
                resources.append(rix)

        for gref in cinfo.groups:
            for ag in self.resources.group(gref):
                if ag in resources:
                    if cinfo.id not in self._warned:
                        self.diagnostics.warning(
                            f"Stunde mit wiederholter Atomgruppe im Kurs: "
                            f"{self.ttinfo.view(cinfo)}"
                        )
                        self._warned.add(cinfo.id)
                else:
                    resources.append(ag)

        # Nur Pflichträume
        for rref in cinfo.rooms:
            rix = self.resources.room(rref)
            if rix not in resources:
                resources.append(rix)
        return resources

    def _make_activities(self) -> None:
        for i, ttl in enumerate(self.ttinfo.lessons):
            lesson = ttl.lesson
            p = UNPLACED
            if lesson.has_slot:
                p = self.engine.slot_of(lesson.day, lesson.hour)
            a = Activity(
                index=i + 1,
                duration=lesson.duration,
                resources=self.resources_for(ttl.course_info),
                fixed=lesson.fixed,
                placement=p,
                lesson=lesson.id,
                course=ttl.course_info.id,
            )
            self.engine.add_activity(a)
            if lesson.has_slot and not lesson.fixed:
                self._to_place.append(a.index)

    def _start_ok(self, aix: int) -> bool:
        """Zeitangabe der Stunde liegt im Raster und die Dauer passt in den Tag."""
        a = self.engine.activity(aix)
        lesson = self.ttinfo.lessons[aix - 1].lesson
        if lesson.day >= self.engine.days or lesson.hour >= self.engine.hours_per_day:
            return False
        return self.engine.is_legal_start(a.placement, a.duration)

    def _view(self, aix: int) -> str:
        return self.ttinfo.view(self.ttinfo.lessons[aix - 1].course_info)

    # ─── Durchlauf 1: fixierte Stunden ────────────────────────────────────────

    def _place_fixed(self) -> None:
        for a in self.engine.activities[1:]:
            if a is None or not a.fixed or a.placement == UNPLACED:
                continue
            p = a.placement
            if self._start_ok(a.index) and self.engine.test_placement(a.index, p):
                self.engine.place_activity(a.index, p)
            else:
                self.diagnostics.error(
                    f"Platzierung der fixierten Aktivität {a.index} @ {p} "
                    f"fehlgeschlagen:\n  -- {self._view(a.index)}"
                )
                a.placement = UNPLACED
                a.fixed = False

    # ─── Erweiterungspunkte ───────────────────────────────────────────────────

    def _make_possible_slots(self) -> None:
        """Kandidaten-Slots für alle nicht fixierten Aktivitäten.

        Einfache Aufzählung: zulässige Starts, an denen die Aktivität nach
        dem fixierten Durchlauf frei platzierbar wäre. Keine Suche.
        """
        starts_by_duration: dict[int, list[int]] = {}
        for a in self.engine.activities[1:]:
            if a is None or a.fixed:
                continue
            starts = starts_by_duration.get(a.duration)
            if starts is None:
                starts = self.engine.legal_starts(a.duration)
                starts_by_duration[a.duration] = starts
            a.possible_slots = [
                s for s in starts if self.engine.test_placement(a.index, s)
            ]

    def _make_different_days(self) -> None:
        """Harte "verschiedene Tage"-Partner je Kurs (nur Buchführung)."""
        if not self.constraints.different_days_is_hard():
            return
        exempt = self.constraints.different_days_exempt()
        by_course: dict[str, list[int]] = {}
        for a in self.engine.activities[1:]:
            if a is not None:
                by_course.setdefault(a.course, []).append(a.index)
        for course, aixs in by_course.items():
            if len(aixs) < 2 or course in exempt:
                continue
            for aix in aixs:
                self.engine.activity(aix).different_days = [x for x in aixs if x != aix]

    # ─── Durchlauf 2: nicht fixierte Stunden ──────────────────────────────────

    def _place_unfixed(self) -> None:
        for aix in self._to_place:
            a = self.engine.activity(aix)
            p = a.placement
            if self._start_ok(aix) and self.engine.test_placement(aix, p):
                self.engine.place_activity(aix, p)
            else:
                self.diagnostics.warning(
                    f"Platzierung der Aktivität {aix} @ {p} fehlgeschlagen:\n"
                    f"  -- {self._view(aix)}"
                )
                a.placement = UNPLACED
