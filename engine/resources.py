"""Ressourcen-Index: Lehrkräfte, Räume und Atomgruppen → dichte int-Indizes.

Index 0 ist reserviert (Sentinel) und wird nie vergeben. Die Zuordnung
erfolgt einmalig; danach arbeitet die Belegungsmatrix nur noch mit Indizes.

Atomgruppen: Eine Klasse mit den Teilungen A/B und L/F zerfällt in die
unteilbaren Gruppen A.L, A.F, B.L, B.F. Eine Klassen-Referenz steht für alle
Atomgruppen der Klasse, eine Gruppen-Referenz (z.B. "A") für alle, die diese
Gruppe enthalten. Klassen ohne Teilung bilden genau eine Atomgruppe.
"""

import itertools
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from models.school_data import TimetableData


class ResourceKind(str, Enum):
    TEACHER = "teacher"
    ROOM = "room"
    GROUP = "group"


class ResourceInfo(BaseModel):
    """Beschreibung einer Ressource (für Ausgabe und Anzeige)."""

    index: int
    kind: ResourceKind
    ref: str          # Element-Referenz; bei Atomgruppen "<klasse>:<g1>.<g2>"
    label: str        # "MÜL", "PH1", "5A.A.L"
    owner: str = ""   # Klassen-Referenz (nur Atomgruppen)


class ResourceIndex:
    """Reine Nachschlage-Struktur Referenz → Ressourcen-Index.

    Fehlende Referenzen sind ein Vertragsbruch des Aufrufers und führen zu
    einem KeyError.
    """

    def __init__(self) -> None:
        self.teachers: dict[str, int] = {}
        self.rooms: dict[str, int] = {}
        self.groups: dict[str, list[int]] = {}
        self.resources: list[Optional[ResourceInfo]] = [None]

    @property
    def count(self) -> int:
        """Anzahl Ressourcen inklusive des reservierten Index 0."""
        return len(self.resources)

    def teacher(self, ref: str) -> int:
        return self.teachers[ref]

    def room(self, ref: str) -> int:
        return self.rooms[ref]

    def group(self, ref: str) -> list[int]:
        """Alle Atomgruppen einer Klassen- oder Gruppen-Referenz."""
        return self.groups[ref]

    def info(self, index: int) -> ResourceInfo:
        info = self.resources[index]
        if info is None:
            raise KeyError(index)
        return info

    def of_kind(self, kind: ResourceKind) -> list[ResourceInfo]:
        return [r for r in self.resources if r is not None and r.kind == kind]

    def _add(self, kind: ResourceKind, ref: str, label: str, owner: str = "") -> int:
        index = len(self.resources)
        self.resources.append(
            ResourceInfo(index=index, kind=kind, ref=ref, label=label, owner=owner)
        )
        return index

    # ─── Aufbau ───

    @classmethod
    def from_data(cls, data: TimetableData) -> "ResourceIndex":
        """Vergibt Indizes: erst Lehrkräfte, dann Räume, dann Atomgruppen."""
        idx = cls()
        for t in data.teachers:
            idx.teachers[t.id] = idx._add(ResourceKind.TEACHER, t.id, t.label)
        for r in data.rooms:
            idx.rooms[r.id] = idx._add(ResourceKind.ROOM, r.id, r.tag or r.name)

        group_tags = {g.id: g.tag or g.id for g in data.groups}
        for c in data.classes:
            divisions = c.active_divisions
            if not divisions:
                idx.groups[c.id] = [
                    idx._add(ResourceKind.GROUP, c.id, c.label, owner=c.id)
                ]
                continue
            class_groups: list[int] = []
            for combo in itertools.product(*(d.groups for d in divisions)):
                label = ".".join([c.label, *(group_tags.get(g, g) for g in combo)])
                ag = idx._add(
                    ResourceKind.GROUP, f"{c.id}:{'.'.join(combo)}", label, owner=c.id,
                )
                class_groups.append(ag)
                for g in combo:
                    idx.groups.setdefault(g, []).append(ag)
            idx.groups[c.id] = class_groups
        return idx
