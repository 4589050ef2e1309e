"""Platzierungskern: Aktivitäten, Ressourcen und Belegungsmatrix."""

from .core import TimetableEngine, EngineResult
from .placement import Activity, PlacementEngine, OccupancyMatrix, UNPLACED, BLOCKED
from .resources import ResourceIndex, ResourceInfo, ResourceKind
from .diagnostics import CollectingDiagnostics, LoggingDiagnostics, Severity

__all__ = [
    "TimetableEngine",
    "EngineResult",
    "Activity",
    "PlacementEngine",
    "OccupancyMatrix",
    "UNPLACED",
    "BLOCKED",
    "ResourceIndex",
    "ResourceInfo",
    "ResourceKind",
    "CollectingDiagnostics",
    "LoggingDiagnostics",
    "Severity",
]
