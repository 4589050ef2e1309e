"""Druckdaten für Klassen-, Lehrer- und Raumpläne (JSON).

Jede platzierte Aktivität wird zu einer Kachel (Tile) auf den Seiten der
beteiligten Klassen, Lehrkräfte und Räume. Bei Klassen beschreiben
fraction/offset/total den belegten Anteil der Atomgruppen (0 = ganze Klasse).
Das eigentliche Setzen der PDFs übernimmt ein externes Werkzeug.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

from engine.core import TimetableEngine
from engine.placement import Activity

logger = logging.getLogger(__name__)


class Tile(BaseModel):
    """Eine Kachel im Wochenraster."""

    day: int
    hour: int
    duration: int = 0
    fraction: int = 0
    offset: int = 0
    total: int = 0
    subject: str
    groups: list[str] = []
    teachers: list[str] = []
    rooms: list[str] = []
    background: str = ""

    @model_serializer(mode="wrap")
    def _drop_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        """Leere Kachelfelder (Standardwerte) entfallen im JSON."""
        fields = type(self).model_fields
        return {
            k: v for k, v in handler(self).items()
            if fields[k].is_required() or v != fields[k].default
        }


class PrintPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")
    short: str = Field(alias="Short")
    activities: list[Tile] = Field([], alias="Activities")


class PrintTimetable(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    table_type: str = Field(alias="TableType")
    info: dict[str, Any] = Field(default_factory=dict, alias="Info")
    pages: list[PrintPage] = Field([], alias="Pages")

    def to_json(self) -> str:
        """JSON wie vom Druckskript erwartet (leere Kachelfelder entfallen)."""
        return self.model_dump_json(indent=2, by_alias=True)


class PrintDataBuilder:
    """Erzeugt die Druckdaten aus einer gebauten TimetableEngine."""

    def __init__(self, engine: TimetableEngine) -> None:
        if engine.ttinfo is None or engine.resources is None or engine.placement is None:
            raise RuntimeError("TimetableEngine.build() wurde noch nicht aufgerufen")
        self.engine = engine
        self.data = engine.data
        self.ttinfo = engine.ttinfo
        self.resources = engine.resources
        self.placement = engine.placement

    # ─── Gemeinsame Bausteine ───

    def _info(self) -> dict[str, Any]:
        return {
            "School": self.data.info.institution,
            "Scenario": self.data.info.reference,
            "Days": [{"Name": d.name, "Short": d.tag} for d in self.data.days],
            "Hours": [
                {"Name": h.name, "Short": h.tag, "Start": h.start, "End": h.end}
                for h in self.data.hours
            ],
        }

    def _placed(self) -> list[Activity]:
        return [
            a for a in self.placement.activities[1:]
            if a is not None and a.is_placed
        ]

    def _rooms_of(self, a: Activity) -> list[str]:
        """Tatsächliche Räume der Stunde, sonst die Pflichträume des Kurses."""
        ttl = self.ttinfo.lessons[a.index - 1]
        return list(ttl.lesson.rooms) or list(ttl.course_info.rooms)

    def _tile(self, a: Activity, **extra: Any) -> Tile:
        ttl = self.ttinfo.lessons[a.index - 1]
        cinfo = ttl.course_info
        hpd = self.placement.hours_per_day
        return Tile(
            day=a.placement // hpd,
            hour=a.placement % hpd,
            duration=a.duration,
            subject=self.ttinfo.subject_tag(cinfo.subject),
            groups=[self.ttinfo.group_labels.get(g, g) for g in cinfo.groups],
            teachers=[self.ttinfo.teacher_tag(t) for t in cinfo.teachers],
            rooms=[self.ttinfo.room_tag(r) for r in self._rooms_of(a)],
            **extra,
        )

    # ─── Tabellen ───

    def class_timetable(self) -> PrintTimetable:
        pages = []
        for c in self.data.classes:
            class_groups = self.resources.group(c.id)
            tiles = []
            for a in self._placed():
                covered = [ag for ag in class_groups if ag in a.resources]
                if not covered:
                    continue
                if len(covered) == len(class_groups):
                    tiles.append(self._tile(a))
                else:
                    tiles.append(self._tile(
                        a,
                        fraction=len(covered),
                        offset=class_groups.index(covered[0]),
                        total=len(class_groups),
                    ))
            pages.append(PrintPage(name=c.name or c.label, short=c.label, activities=tiles))
        return PrintTimetable(table_type="Class", info=self._info(), pages=pages)

    def teacher_timetable(self) -> PrintTimetable:
        pages = []
        for t in self.data.teachers:
            rix = self.resources.teacher(t.id)
            tiles = [self._tile(a) for a in self._placed() if rix in a.resources]
            name = f"{t.firstname} {t.name}".strip()
            pages.append(PrintPage(name=name, short=t.label, activities=tiles))
        return PrintTimetable(table_type="Teacher", info=self._info(), pages=pages)

    def room_timetable(self) -> PrintTimetable:
        pages = []
        for r in self.data.rooms:
            tiles = [self._tile(a) for a in self._placed() if r.id in self._rooms_of(a)]
            pages.append(PrintPage(name=r.name, short=r.tag or r.name, activities=tiles))
        return PrintTimetable(table_type="Room", info=self._info(), pages=pages)

    def build(self, table_type: str) -> PrintTimetable:
        builders = {
            "Class": self.class_timetable,
            "Teacher": self.teacher_timetable,
            "Room": self.room_timetable,
        }
        if table_type not in builders:
            raise ValueError(f"Unbekannte Druckdaten: {table_type}")
        return builders[table_type]()

    # ─── Schreiben ───

    def write(self, print_tables: list[str], datadir: Path, stem: str) -> list[str]:
        """Schreibt <datadir>/_data/<stem>_<Typ>.json je Tabellentyp.

        Gibt die Namen der zu setzenden Dokumente zurück; ein Suffix
        "_overview" erzeugt zusätzlich den Übersichtsnamen.
        """
        outdir = Path(datadir) / "_data"
        outdir.mkdir(parents=True, exist_ok=True)
        documents: list[str] = []
        for ptable in print_tables:
            table_type = ptable.removesuffix("_overview")
            timetable = self.build(table_type)
            f = f"{stem}_{table_type}"
            path = outdir / f"{f}.json"
            path.write_text(timetable.to_json(), encoding="utf-8")
            logger.info(f"Geschrieben: {path}")
            documents.append(f)
            if ptable.endswith("_overview"):
                documents.append(f + "_overview")
        return documents
