"""Constraint-Katalog: alle unterstützten Planungsregeln als geschlossene Varianten.

Jede Variante trägt ein Gewicht 1..100. MAXWEIGHT (100) bedeutet harte
Regel, kleinere Werte sind weiche Präferenzen mit entsprechender Wichtigkeit.

Constraints sind reine Daten für einen nachgelagerten Solver. Sie werden beim
Einlesen registriert und danach nicht mehr verändert; die Belegungsmatrix
berühren sie nie. Referenzen und Struktur (z.B. gleiche Stundenzahl bei
ParallelCourses) werden hier NICHT geprüft.
"""

from typing import Annotated, Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel

MAXWEIGHT = 100


class _ConstraintBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    weight: int = Field(MAXWEIGHT, ge=1, le=MAXWEIGHT)

    @property
    def is_hard(self) -> bool:
        return self.weight == MAXWEIGHT


class LessonsEndDay(_ConstraintBase):
    """Alle Stunden des Kurses liegen am Ende des Schultags."""

    constraint: Literal["LessonsEndDay"] = "LessonsEndDay"
    course: str


class BeforeAfterHour(_ConstraintBase):
    """Erlaubt sind nur Stunden vor (bzw. nach) `hour`, ausschließlich `hour`."""

    constraint: Literal["BeforeAfterHour"] = "BeforeAfterHour"
    courses: list[str] = []
    after: bool = False
    hour: int


class AutomaticDifferentDays(_ConstraintBase):
    """Globale Regel für alle Kurse mit mehr als einer Stunde: verschiedene Tage.

    Fehlt sie, gilt sie als harte Regel. Kurse mit DaysBetween = 1 sind
    ausgenommen.
    """

    constraint: Literal["AutomaticDifferentDays"] = "AutomaticDifferentDays"
    consecutive_if_same_day: bool = Field(False, alias="consecutiveIfSameDay")


class DaysBetween(_ConstraintBase):
    """Mindestabstand in Tagen zwischen den Stunden JEDES einzelnen Kurses."""

    constraint: Literal["DaysBetween"] = "DaysBetween"
    courses: list[str] = []      # Courses oder SuperCourses
    days_between: int = Field(alias="daysBetween")
    consecutive_if_same_day: bool = Field(False, alias="consecutiveIfSameDay")


class DaysBetweenJoin(_ConstraintBase):
    """Mindestabstand zwischen jeder Stunde von Kurs 1 und jeder von Kurs 2."""

    constraint: Literal["DaysBetweenJoin"] = "DaysBetweenJoin"
    course1: str
    course2: str
    days_between: int = Field(alias="daysBetween")
    consecutive_if_same_day: bool = Field(False, alias="consecutiveIfSameDay")


class NotOnSameDay(_ConstraintBase):
    """Die Stunden dieser Fächer liegen nicht alle am selben Tag."""

    constraint: Literal["NotOnSameDay"] = "NotOnSameDay"
    subjects: list[str] = []


class ParallelCourses(_ConstraintBase):
    """Einander entsprechende Stunden der Kurse liegen im selben Slot."""

    constraint: Literal["ParallelCourses"] = "ParallelCourses"
    courses: list[str] = []      # Courses oder SuperCourses


Constraint = Annotated[
    Union[
        LessonsEndDay,
        BeforeAfterHour,
        AutomaticDifferentDays,
        DaysBetween,
        DaysBetweenJoin,
        NotOnSameDay,
        ParallelCourses,
    ],
    Field(discriminator="constraint"),
]


class ConstraintCollection(RootModel[list[Constraint]]):
    """Geordnete Liste aller Constraints; wird direkt serialisiert.

    Die new_*-Methoden erzeugen eine Variante und hängen sie an.
    """

    root: list[Constraint] = []

    def add(self, constraint: Constraint) -> Constraint:
        self.root.append(constraint)
        return constraint

    def new_lessons_end_day(self, course: str, weight: int = MAXWEIGHT) -> LessonsEndDay:
        return self.add(LessonsEndDay(course=course, weight=weight))

    def new_before_after_hour(
        self, courses: list[str], hour: int, after: bool = False,
        weight: int = MAXWEIGHT,
    ) -> BeforeAfterHour:
        return self.add(BeforeAfterHour(
            courses=list(courses), hour=hour, after=after, weight=weight,
        ))

    def new_automatic_different_days(
        self, consecutive_if_same_day: bool = False, weight: int = MAXWEIGHT,
    ) -> AutomaticDifferentDays:
        return self.add(AutomaticDifferentDays(
            consecutive_if_same_day=consecutive_if_same_day, weight=weight,
        ))

    def new_days_between(
        self, courses: list[str], days_between: int,
        consecutive_if_same_day: bool = False, weight: int = MAXWEIGHT,
    ) -> DaysBetween:
        return self.add(DaysBetween(
            courses=list(courses), days_between=days_between,
            consecutive_if_same_day=consecutive_if_same_day, weight=weight,
        ))

    def new_days_between_join(
        self, course1: str, course2: str, days_between: int,
        consecutive_if_same_day: bool = False, weight: int = MAXWEIGHT,
    ) -> DaysBetweenJoin:
        return self.add(DaysBetweenJoin(
            course1=course1, course2=course2, days_between=days_between,
            consecutive_if_same_day=consecutive_if_same_day, weight=weight,
        ))

    def new_not_on_same_day(self, subjects: list[str], weight: int = MAXWEIGHT) -> NotOnSameDay:
        return self.add(NotOnSameDay(subjects=list(subjects), weight=weight))

    def new_parallel_courses(self, courses: list[str], weight: int = MAXWEIGHT) -> ParallelCourses:
        return self.add(ParallelCourses(courses=list(courses), weight=weight))

    # ─── Abfragen ───

    def of_type(self, tag: str) -> list[Constraint]:
        """Alle Constraints einer Variante (String-Tag, z.B. "DaysBetween")."""
        return [c for c in self.root if c.constraint == tag]

    def automatic_different_days(self) -> Optional[AutomaticDifferentDays]:
        """Die (erste) globale AutomaticDifferentDays-Regel, falls vorhanden."""
        found = self.of_type("AutomaticDifferentDays")
        return found[0] if found else None

    def different_days_is_hard(self) -> bool:
        """Fehlt AutomaticDifferentDays, gilt die Regel als hart."""
        add = self.automatic_different_days()
        return add is None or add.is_hard

    def different_days_exempt(self) -> set[str]:
        """Kurse, deren DaysBetween = 1 die globale Regel ersetzt."""
        exempt: set[str] = set()
        for c in self.of_type("DaysBetween"):
            if c.days_between == 1:
                exempt.update(c.courses)
        return exempt

    def tags(self) -> dict[str, int]:
        """Anzahl Constraints je Variante (für Zusammenfassungen)."""
        counts: dict[str, int] = {}
        for c in self.root:
            counts[c.constraint] = counts.get(c.constraint, 0) + 1
        return counts

    def __iter__(self) -> Iterator[Constraint]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)
