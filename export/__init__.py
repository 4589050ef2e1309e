"""Export-Modul: Druckdaten (JSON) und Terminal-Anzeige."""

from export.print_data import PrintDataBuilder, PrintTimetable, PrintPage, Tile
from export.tui_renderer import render_resource_rows, resource_label

__all__ = [
    "PrintDataBuilder",
    "PrintTimetable",
    "PrintPage",
    "Tile",
    "render_resource_rows",
    "resource_label",
]
