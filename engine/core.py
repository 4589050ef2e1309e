"""Platzierungskern: Datensatz → Ressourcen → Aktivitäten → Belegungsmatrix.

Architektur:
  - TtInfo            Kursinformationen + Stundenliste
  - ResourceIndex     Referenz → dichter Ressourcen-Index
  - PlacementEngine   flache Belegungsmatrix, test/place
  - ActivityBuilder   eine Aktivität pro Stunde, fixiert vor nicht fixiert
Das Ergebnis (EngineResult) ist die Schnittstelle für Solver und Druck.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from config.schema import PlacementConfig
from engine.activities import ActivityBuilder
from engine.course_info import TtInfo
from engine.diagnostics import DiagnosticSink, LoggingDiagnostics
from engine.placement import Activity, PlacementEngine
from engine.resources import ResourceIndex, ResourceInfo
from models.constraints import ConstraintCollection
from models.school_data import TimetableData
from models.timeslot import TimeSlot

logger = logging.getLogger(__name__)


# ─── Ergebnis-Modell ──────────────────────────────────────────────────────────

class EngineResult(BaseModel):
    """Ressourcen-indizierte Aktivitäten + Belegungsmatrix + Constraints."""

    days: list[str]
    hours: list[str]
    resources: list[ResourceInfo]     # Index 1..n (0 reserviert)
    activities: list[Activity]        # Index 1..n (0 = keine Aktivität)
    occupancy: list[int]              # resource * slots_per_week + slot
    constraints: ConstraintCollection

    @property
    def hours_per_day(self) -> int:
        return len(self.hours)

    @property
    def slots_per_week(self) -> int:
        return len(self.days) * len(self.hours)

    def cell(self, resource: int, slot: int) -> int:
        """Aktivitäts-Index in Zelle (resource, slot); 0 = frei."""
        return self.occupancy[resource * self.slots_per_week + slot]

    def activity(self, aix: int) -> Activity:
        return self.activities[aix - 1]

    def unplaced(self) -> list[Activity]:
        return [a for a in self.activities if not a.is_placed]

    def save_json(self, path: Path) -> None:
        """Speichert das Ergebnis als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2, by_alias=True))

    @classmethod
    def load_json(cls, path: Path) -> "EngineResult":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Ergebnis nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())


# ─── Haupt-Engine ─────────────────────────────────────────────────────────────

class TimetableEngine:
    """Baut aus einem geprüften Datensatz die platzierten Aktivitäten.

    Verwendung:
        data = load_w365(path)           # inkl. data.check()
        engine = TimetableEngine(data)
        result = engine.build()
    """

    def __init__(
        self,
        data: TimetableData,
        config: Optional[PlacementConfig] = None,
        diagnostics: Optional[DiagnosticSink] = None,
    ) -> None:
        self.data = data
        self.config = config or PlacementConfig()
        self.diagnostics = diagnostics or LoggingDiagnostics()

        # Werden in build() befüllt
        self.ttinfo: Optional[TtInfo] = None
        self.resources: Optional[ResourceIndex] = None
        self.placement: Optional[PlacementEngine] = None

    def build(self) -> EngineResult:
        t0 = time.time()

        self.ttinfo = TtInfo(self.data, self.diagnostics)
        self.resources = ResourceIndex.from_data(self.data)
        self.placement = PlacementEngine(
            self.resources.count, len(self.data.days), len(self.data.hours),
        )
        if self.config.block_absences:
            self._block_absences()

        ActivityBuilder(
            self.ttinfo,
            self.resources,
            self.placement,
            self.diagnostics,
            constraints=self.data.constraints,
            possible_slots=self.config.possible_slots,
            different_days=self.config.different_days,
        ).build()

        logger.info(
            f"Aufbau beendet: {self.resources.count - 1} Ressourcen | "
            f"{self.placement.slots_per_week} Slots | "
            f"Zeit: {time.time() - t0:.2f}s"
        )
        return self.result()

    def _absence_slots(self, absences: list[TimeSlot]) -> list[int]:
        hpd = len(self.data.hours)
        return [
            ts.linear(hpd) for ts in absences
            if 0 <= ts.day < len(self.data.days) and 0 <= ts.hour < hpd
        ]

    def _block_absences(self) -> None:
        """Abwesenheiten sperren; Klassen-Abwesenheit gilt für alle Atomgruppen."""
        if self.resources is None or self.placement is None:
            raise RuntimeError("build() wurde noch nicht aufgerufen")
        for t in self.data.teachers:
            self.placement.block_slots(
                self.resources.teacher(t.id), self._absence_slots(t.absences)
            )
        for r in self.data.rooms:
            self.placement.block_slots(
                self.resources.room(r.id), self._absence_slots(r.absences)
            )
        for c in self.data.classes:
            slots = self._absence_slots(c.absences)
            for ag in self.resources.group(c.id):
                self.placement.block_slots(ag, slots)

    def result(self) -> EngineResult:
        if self.placement is None or self.resources is None:
            raise RuntimeError("build() wurde noch nicht aufgerufen")
        return EngineResult(
            days=[d.tag or d.name for d in self.data.days],
            hours=[h.tag or h.name for h in self.data.hours],
            resources=[r for r in self.resources.resources if r is not None],
            activities=[a for a in self.placement.activities if a is not None],
            occupancy=list(self.placement.matrix.cells),
            constraints=self.data.constraints,
        )
