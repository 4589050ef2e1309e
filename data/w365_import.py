"""W365-JSON Import.

Liest einen W365-Export (Tage, Stunden, Lehrkräfte, Räume, Klassen, Kurse,
Stunden, Constraints) in ein TimetableData-Objekt und führt die
Eingangsprüfung aus. Fehlt AutomaticDifferentDays, wird die Regel als harte
Standardregel ergänzt.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from models.constraints import MAXWEIGHT
from models.school_data import InputError, TimetableData

logger = logging.getLogger(__name__)


def parse_w365(raw: dict[str, Any]) -> TimetableData:
    """Validiert ein bereits geladenes W365-Objekt und prüft es.

    Raises:
        InputError: Schemafehler oder strukturell fehlerhafte Eingabe.
    """
    try:
        data = TimetableData.model_validate(raw)
    except ValidationError as e:
        raise InputError(f"W365-Daten ungültig:\n{e}") from e

    data.check()

    if data.constraints.automatic_different_days() is None:
        data.constraints.new_automatic_different_days(weight=MAXWEIGHT)
        logger.info("AutomaticDifferentDays fehlt – als harte Standardregel ergänzt")

    logger.info(
        f"W365 geladen: {len(data.lessons)} Stunden, "
        f"{len(data.courses)} Kurse, {len(data.constraints)} Constraints"
    )
    return data


def load_w365(path: Path) -> TimetableData:
    """Lädt und prüft eine W365-JSON-Datei."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Datei nicht gefunden: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise InputError(f"JSON-Parse-Fehler in {path}: {e}") from e
    return parse_w365(raw)
