"""Datenmodelle für Räume, Raumgruppen und Raum-Auswahlgruppen (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict, Field

from models.timeslot import TimeSlot


class Room(BaseModel):
    """Ein einzelner, exklusiv belegbarer Raum."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    tag: str = Field("", alias="shortcut")   # "PH1", "CH2"
    absences: list[TimeSlot] = []


class RoomGroup(BaseModel):
    """Mehrere Räume, die ALLE gleichzeitig benötigt werden (Pflichträume)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    tag: str = Field("", alias="shortcut")
    rooms: list[str] = []


class RoomChoiceGroup(BaseModel):
    """Alternativen: genau EINER der Räume wird benötigt.

    Die Auswahl ist eine spätere Solver-Entscheidung; Auswahlräume gehören
    daher nicht zur Pflicht-Ressourcenmenge einer Aktivität.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    tag: str = Field("", alias="shortcut")
    rooms: list[str] = []
