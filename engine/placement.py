"""Belegungsmatrix und Platzierung von Aktivitäten.

Die Matrix ist eine flache Liste der Größe Ressourcen × Slots pro Woche;
Zelle (r, s) liegt bei r * slots_per_week + s. Jede Zelle enthält 0 (frei),
einen Aktivitäts-Index oder BLOCKED (Abwesenheit).

Ablauf immer: test_placement() → place_activity(). place_activity prüft
NICHT erneut und überschreibt belegte Zellen. Die Platzierung ist
single-threaded und sequenziell.
"""

from typing import Optional

from pydantic import BaseModel

UNPLACED = -1    # Activity.placement: nicht eingeplant
BLOCKED = -1     # Matrix-Zelle: gesperrt (keine Aktivität)


class Activity(BaseModel):
    """Planbare Einheit, abgeleitet aus genau einer Unterrichtsstunde."""

    index: int                        # 1-basiert, 0 = "keine Aktivität"
    duration: int = 1                 # aufeinanderfolgende Slots am selben Tag
    resources: list[int] = []
    fixed: bool = False
    placement: int = UNPLACED         # linearer Slot oder UNPLACED
    possible_slots: list[int] = []
    different_days: list[int] = []    # Aktivitäten, die nicht am selben Tag liegen dürfen
    lesson: str = ""                  # Lesson-Referenz
    course: str = ""                  # Course-/SuperCourse-Referenz

    @property
    def is_placed(self) -> bool:
        return self.placement != UNPLACED


class OccupancyMatrix:
    """Ressource × Slot → Aktivitäts-Index | 0."""

    def __init__(self, n_resources: int, slots_per_week: int) -> None:
        self.n_resources = n_resources
        self.slots_per_week = slots_per_week
        self.cells: list[int] = [0] * (n_resources * slots_per_week)

    def get(self, resource: int, slot: int) -> int:
        return self.cells[resource * self.slots_per_week + slot]

    def row(self, resource: int) -> list[int]:
        """Alle Slots einer Ressource (Kopie)."""
        start = resource * self.slots_per_week
        return self.cells[start:start + self.slots_per_week]

    def block(self, resource: int, slot: int) -> None:
        i = resource * self.slots_per_week + slot
        if self.cells[i] == 0:
            self.cells[i] = BLOCKED

    def cells_of(self, aix: int) -> list[tuple[int, int]]:
        """Alle (Ressource, Slot)-Zellen, die aix belegt."""
        spw = self.slots_per_week
        return [(i // spw, i % spw) for i, v in enumerate(self.cells) if v == aix]


class PlacementEngine:
    """Besitzt die Belegungsmatrix und die Aktivitätsliste (Index 0 leer)."""

    def __init__(self, n_resources: int, days: int, hours_per_day: int) -> None:
        self.days = days
        self.hours_per_day = hours_per_day
        self.slots_per_week = days * hours_per_day
        self.matrix = OccupancyMatrix(n_resources, self.slots_per_week)
        self.activities: list[Optional[Activity]] = [None]

    def add_activity(self, activity: Activity) -> None:
        if activity.index != len(self.activities):
            raise ValueError(
                f"Aktivität {activity.index}: erwarteter Index {len(self.activities)}"
            )
        self.activities.append(activity)

    def activity(self, aix: int) -> Activity:
        a = self.activities[aix]
        if a is None:
            raise KeyError(aix)
        return a

    # ─── Slots ───

    def slot_of(self, day: int, hour: int) -> int:
        return day * self.hours_per_day + hour

    def is_legal_start(self, slot: int, duration: int) -> bool:
        """Slot existiert und die Dauer passt in den Rest des Tages."""
        if slot < 0 or slot >= self.slots_per_week or duration < 1:
            return False
        return slot % self.hours_per_day + duration <= self.hours_per_day

    def legal_starts(self, duration: int) -> list[int]:
        return [
            s for s in range(self.slots_per_week)
            if self.is_legal_start(s, duration)
        ]

    # ─── Platzierung ───

    def test_placement(self, aix: int, slot: int) -> bool:
        """True wenn alle Zellen aller Ressourcen über die Dauer frei sind.

        Setzt voraus, dass slot ein zulässiger Start ist (kein Tageswechsel).
        Keine Seiteneffekte.
        """
        a = self.activity(aix)
        cells = self.matrix.cells
        spw = self.slots_per_week
        for rix in a.resources:
            i = rix * spw + slot
            for ix in range(a.duration):
                if cells[i + ix] != 0:
                    return False
        return True

    def place_activity(self, aix: int, slot: int) -> None:
        """Belegt die Zellen der Aktivität. Nur nach erfolgreichem test_placement!"""
        a = self.activity(aix)
        cells = self.matrix.cells
        spw = self.slots_per_week
        for rix in a.resources:
            i = rix * spw + slot
            for ix in range(a.duration):
                cells[i + ix] = aix
        a.placement = slot

    def block_slots(self, resource: int, slots: list[int]) -> None:
        """Sperrt Slots einer Ressource (vor jeder Platzierung aufrufen)."""
        for s in slots:
            if 0 <= s < self.slots_per_week:
                self.matrix.block(resource, s)
