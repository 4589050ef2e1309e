"""Renderer für die Terminal-Anzeige einer Ressource (Wochenraster).

Wird von cmd_show (Rich) verwendet.
"""

from typing import TYPE_CHECKING

from engine.placement import BLOCKED
from engine.resources import ResourceKind

if TYPE_CHECKING:
    from engine.core import TimetableEngine


def resource_label(engine: "TimetableEngine", index: int) -> str:
    """Kurzbezeichnung einer Ressource mit Art ("L:MÜL", "R:PH1", "G:5A.A")."""
    if engine.resources is None:
        raise RuntimeError("TimetableEngine.build() wurde noch nicht aufgerufen")
    info = engine.resources.info(index)
    prefix = {ResourceKind.TEACHER: "L", ResourceKind.ROOM: "R", ResourceKind.GROUP: "G"}
    return f"{prefix[info.kind]}:{info.label}"


def render_resource_rows(engine: "TimetableEngine", index: int) -> list[list[str]]:
    """Gibt Tabellenzeilen für den Wochenplan einer Ressource zurück.

    Jede Zeile: [stunde, zeit, Mo, Di, ...]. Gesperrte Zellen werden als
    'gesperrt' markiert, Stunden der Mittagspause mit '(Mittag)'.
    """
    if engine.placement is None or engine.ttinfo is None or engine.resources is None:
        raise RuntimeError("TimetableEngine.build() wurde noch nicht aufgerufen")
    data = engine.data
    placement = engine.placement
    ttinfo = engine.ttinfo
    kind = engine.resources.info(index).kind
    row = placement.matrix.row(index)
    midday = set(data.info.midday_break)

    rows: list[list[str]] = []
    for h, hour in enumerate(data.hours):
        label = hour.tag or hour.name
        if h in midday:
            label += " (Mittag)"
        time = f"{hour.start}–{hour.end}" if hour.start else ""
        cells = [label, time]
        for d in range(len(data.days)):
            aix = row[d * placement.hours_per_day + h]
            if aix == 0:
                cells.append("—")
            elif aix == BLOCKED:
                cells.append("gesperrt")
            else:
                cinfo = ttinfo.lessons[aix - 1].course_info
                subj = ttinfo.subject_tag(cinfo.subject)
                if kind == ResourceKind.GROUP:
                    other = ",".join(ttinfo.teacher_tag(t) for t in cinfo.teachers)
                else:
                    other = ",".join(ttinfo.group_labels.get(g, g) for g in cinfo.groups)
                cells.append(f"{subj}\n{other}")
        rows.append(cells)
    return rows
