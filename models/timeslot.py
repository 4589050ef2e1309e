"""Datenmodelle für Tage, Stunden und Zeitslots im Wochenraster."""

from pydantic import BaseModel, ConfigDict, Field


class TimeSlot(BaseModel):
    """Ein einzelner Unterrichtsslot (Tag, Stunde) im Wochenraster.

    Immutable (frozen=True) damit es als Dict-Key / Set-Element nutzbar ist.
    Tag und Stunde sind 0-basiert, wie im W365-Export.
    """

    model_config = ConfigDict(frozen=True)

    day: int
    hour: int

    def linear(self, hours_per_day: int) -> int:
        """Linearer Slot-Index: day * hours_per_day + hour."""
        return self.day * hours_per_day + self.hour

    @classmethod
    def from_linear(cls, slot: int, hours_per_day: int) -> "TimeSlot":
        return cls(day=slot // hours_per_day, hour=slot % hours_per_day)

    @property
    def day_name(self) -> str:
        """Abgekürzter Tagesname."""
        names = ["Mo", "Di", "Mi", "Do", "Fr", "Sa"]
        return names[self.day] if 0 <= self.day < len(names) else str(self.day)

    def __str__(self) -> str:
        return f"{self.day_name} {self.hour + 1}."


class Day(BaseModel):
    """Ein Unterrichtstag der Woche."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    tag: str = Field("", alias="shortcut")


class Hour(BaseModel):
    """Eine Unterrichtsstunde im Tagesraster ("HH:MM"-Zeiten)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    tag: str = Field("", alias="shortcut")
    start: str = ""
    end: str = ""
