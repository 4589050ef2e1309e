"""Datenmodelle für Kurse, Epochen-/Blockkurse und Unterrichtsstunden (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict, Field


class Course(BaseModel):
    """Ein Kurs: Fach + Gruppen + Lehrkräfte (+ Raumwunsch).

    `room` ist kein W365-Feld, sondern wird beim Einlesen aus
    `preferred_rooms` abgeleitet (Room, RoomGroup oder RoomChoiceGroup).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    subjects: list[str] = []
    subject: str = ""
    groups: list[str] = []        # Klassen- oder Gruppen-Referenzen
    teachers: list[str] = []
    preferred_rooms: list[str] = Field([], alias="preferredRooms")
    room: str = ""


class SuperCourse(BaseModel):
    """Blockkurs: Die Stunden gehören dem SuperCourse, die Inhalte den SubCourses."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    subject: str = ""
    epoch_plan: str = Field("", alias="epochPlan")


class SubCourse(BaseModel):
    """Teilkurs eines oder mehrerer SuperCourses (hat selbst keine Stunden)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    super_courses: list[str] = Field([], alias="superCourses")
    subjects: list[str] = []
    subject: str = ""
    groups: list[str] = []
    teachers: list[str] = []
    preferred_rooms: list[str] = Field([], alias="preferredRooms")
    room: str = ""

    @property
    def element_id(self) -> str:
        """Registry-Schlüssel; Präfix verhindert Kollisionen mit Kurs-Ids."""
        return "$$" + self.id


class Lesson(BaseModel):
    """Eine einzelne Unterrichtsstunde (ggf. mehrstündig) eines Kurses.

    `day`/`hour` = -1 bedeutet: noch nicht eingeplant.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    course: str                   # Course- oder SuperCourse-Referenz
    duration: int = Field(1, ge=1)
    day: int = -1
    hour: int = -1
    fixed: bool = False
    rooms: list[str] = Field([], alias="localRooms")   # nur Room-Elemente

    @property
    def has_slot(self) -> bool:
        return self.day >= 0 and self.hour >= 0


class EpochPlan(BaseModel):
    """Epochenplan (nur zur Anzeige durchgereicht)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    tag: str = Field("", alias="shortcut")
    name: str = ""
