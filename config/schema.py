from pydantic import BaseModel, Field, field_validator


# ─── PLATZIERUNG ───

class PlacementConfig(BaseModel):
    """Optionen für den Aufbau der Aktivitäten und die Platzierung."""
    # Abwesenheiten von Lehrkräften, Räumen und Klassen in der Matrix sperren
    block_absences: bool = Field(True,
        description="Abwesenheiten als gesperrte Zellen eintragen")
    # Kandidaten-Slots für nicht fixierte Aktivitäten aufzählen
    possible_slots: bool = Field(True,
        description="Kandidaten-Slots für nicht fixierte Aktivitäten berechnen")
    # Harte "verschiedene Tage"-Partner je Kurs eintragen
    different_days: bool = Field(True,
        description="Verschiedene-Tage-Partner je Kurs eintragen")


# ─── AUSGABE ───

PRINT_TABLE_TYPES = ("Class", "Teacher", "Room")


class ExportConfig(BaseModel):
    """Ausgabe der Ergebnis- und Druckdaten."""
    # Zielverzeichnis für Ergebnis-JSON und Druckdaten (_data/)
    output_dir: str = Field("output",
        description="Zielverzeichnis")
    # Zu erzeugende Druckdaten; Suffix "_overview" für die Übersicht
    print_tables: list[str] = Field(
        default=[
            "Class", "Teacher", "Room",
            "Class_overview", "Teacher_overview", "Room_overview",
        ],
        description="Druckdaten: Class, Teacher, Room (optional mit _overview)")

    @field_validator("print_tables")
    @classmethod
    def check_print_tables(cls, v: list[str]) -> list[str]:
        for t in v:
            base = t.removesuffix("_overview")
            if base not in PRINT_TABLE_TYPES:
                raise ValueError(
                    f"Unbekannte Druckdaten '{t}' (erlaubt: {', '.join(PRINT_TABLE_TYPES)})"
                )
        return v


# ─── GESAMT-CONFIG ───

class EngineConfig(BaseModel):
    """Gesamtkonfiguration des Platzierungslaufs."""
    # Platzierungsoptionen
    placement: PlacementConfig = Field(default_factory=PlacementConfig)
    # Ausgabeoptionen
    export: ExportConfig = Field(default_factory=ExportConfig)
    # Log-Level (DEBUG, INFO, WARNING, ERROR)
    log_level: str = Field("INFO",
        description="Log-Level")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Ungültiges Log-Level: {v}")
        return v
