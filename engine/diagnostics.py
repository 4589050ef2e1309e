"""Diagnose-Senke für den Platzierungskern.

Der Kern schreibt nie direkt auf die Konsole, sondern meldet über eine
injizierte Senke mit drei Stufen. Auch "error" ist hier nicht fatal:
der Lauf geht weiter.
"""

import logging
from enum import Enum
from typing import Optional, Protocol

from pydantic import BaseModel


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Diagnostic(BaseModel):
    """Eine einzelne Meldung."""

    severity: Severity
    message: str


class DiagnosticSink(Protocol):
    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingDiagnostics:
    """Leitet alle Meldungen an einen stdlib-Logger weiter."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger("engine")

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)


class CollectingDiagnostics:
    """Sammelt Meldungen (Tests, CLI-Bericht); optional zusätzlich ins Log."""

    def __init__(self, forward: Optional[DiagnosticSink] = None) -> None:
        self.entries: list[Diagnostic] = []
        self._forward = forward

    def _add(self, severity: Severity, message: str) -> None:
        self.entries.append(Diagnostic(severity=severity, message=message))
        if self._forward is not None:
            getattr(self._forward, severity.value)(message)

    def info(self, message: str) -> None:
        self._add(Severity.INFO, message)

    def warning(self, message: str) -> None:
        self._add(Severity.WARNING, message)

    def error(self, message: str) -> None:
        self._add(Severity.ERROR, message)

    def of(self, severity: Severity) -> list[Diagnostic]:
        return [d for d in self.entries if d.severity == severity]

    @property
    def errors(self) -> list[Diagnostic]:
        return self.of(Severity.ERROR)

    @property
    def warnings(self) -> list[Diagnostic]:
        return self.of(Severity.WARNING)

    def print_rich(self) -> None:
        """Gibt alle Meldungen formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.markup import escape

        console = Console()
        colors = {Severity.INFO: "cyan", Severity.WARNING: "yellow", Severity.ERROR: "red"}
        lines = [
            f"Fehler: {len(self.errors)} | Warnungen: {len(self.warnings)}"
        ]
        for d in self.entries:
            c = colors[d.severity]
            lines.append(f"  [{c}]• {escape(d.message)}[/{c}]")
        if not self.entries:
            lines.append("[dim]Keine Meldungen.[/dim]")
        console.print(Panel("\n".join(lines), title="Platzierung", border_style="cyan"))
