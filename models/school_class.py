"""Datenmodelle für Klassen, Teilungen und Gruppen (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict, Field

from models.timeslot import TimeSlot


class Group(BaseModel):
    """Eine Schülergruppe innerhalb einer Teilung (z.B. "A" oder "Latein")."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    tag: str = Field("", alias="shortcut")


class Division(BaseModel):
    """Eine Teilung der Klasse in disjunkte Gruppen (z.B. A/B, Latein/Französisch).

    Jede:r Schüler:in gehört in jeder Teilung genau einer Gruppe an.
    """

    id: str
    name: str = ""
    groups: list[str] = []   # Group-Referenzen


class SchoolClass(BaseModel):
    """Repräsentiert eine Klasse mit ihren Teilungen."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    tag: str = Field("", alias="shortcut")   # "5A", "10B"
    year: int = Field(0, alias="level")
    letter: str = ""
    absences: list[TimeSlot] = []
    divisions: list[Division] = []
    min_lessons_per_day: int = Field(-1, alias="minLessonsPerDay")
    max_lessons_per_day: int = Field(-1, alias="maxLessonsPerDay")
    max_gaps_per_day: int = Field(-1, alias="maxGapsPerDay")
    max_gaps_per_week: int = Field(-1, alias="maxGapsPerWeek")
    max_afternoons: int = Field(-1, alias="maxAfternoons")
    lunch_break: bool = Field(False, alias="lunchBreak")
    force_first_hour: bool = Field(False, alias="forceFirstHour")

    @property
    def label(self) -> str:
        return self.tag or self.name or self.id

    @property
    def active_divisions(self) -> list[Division]:
        """Nur Teilungen, die tatsächlich Gruppen enthalten."""
        return [d for d in self.divisions if d.groups]
