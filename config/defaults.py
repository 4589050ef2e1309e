from config.schema import EngineConfig, ExportConfig, PlacementConfig


def default_engine_config() -> EngineConfig:
    """Standard-Konfiguration.

    - Abwesenheiten werden gesperrt
    - Kandidaten-Slots und Verschiedene-Tage-Partner werden eingetragen
    - Druckdaten für Klassen, Lehrkräfte und Räume (je mit Übersicht) nach output/_data/
    """
    return EngineConfig(
        placement=PlacementConfig(
            block_absences=True,
            possible_slots=True,
            different_days=True,
        ),
        export=ExportConfig(
            output_dir="output",
            print_tables=[
                "Class", "Teacher", "Room",
                "Class_overview", "Teacher_overview", "Room_overview",
            ],
        ),
        log_level="INFO",
    )
