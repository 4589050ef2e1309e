"""Datenmodell für eine Lehrkraft (Pydantic v2, W365-Feldnamen)."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.timeslot import TimeSlot


class Teacher(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft.

    Limits mit -1 bedeuten "nicht gesetzt" (W365-Default).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str                                     # "Müller"
    tag: str = Field("", alias="shortcut")        # Kürzel ("MÜL")
    firstname: str = ""
    absences: list[TimeSlot] = []                 # gesperrte (Tag, Stunde)
    min_lessons_per_day: int = Field(-1, alias="minLessonsPerDay")
    max_lessons_per_day: int = Field(-1, alias="maxLessonsPerDay")
    max_days: int = Field(-1, alias="maxDays")
    max_gaps_per_day: int = Field(-1, alias="maxGapsPerDay")
    max_gaps_per_week: int = Field(-1, alias="maxGapsPerWeek")
    max_afternoons: int = Field(-1, alias="maxAfternoons")
    lunch_break: bool = Field(False, alias="lunchBreak")

    @field_validator("tag")
    @classmethod
    def normalize_tag(cls, v: str) -> str:
        return v.upper()

    @property
    def label(self) -> str:
        """Kürzel, ersatzweise der Name."""
        return self.tag or self.name
