"""Nachträgliche Prüfung der Belegungsmatrix.

Prüft ein EngineResult unabhängig vom Aufbau auf Inkonsistenzen:
Aktivitätszellen, fremde Belegungen, uneingeplante und fixierte Aktivitäten.
"""

from typing import Literal

from pydantic import BaseModel

from engine.core import EngineResult
from engine.placement import BLOCKED


class ValidationViolation(BaseModel):
    """Eine einzelne Inkonsistenz."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "cell_mismatch"
    description: str
    entity: str          # Aktivität oder Ressource


class ValidationReport(BaseModel):
    """Ergebnis der Prüfung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ KONSISTENT[/bold green]"
            if self.is_valid
            else "[bold red]✗ INKONSISTENZEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Belegungs-Prüfung", border_style="cyan"))

        if not self.violations:
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Prüfung", width=22)
        table.add_column("Entität", width=14)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class OccupancyValidator:
    """Prüft ein EngineResult auf Konsistenz von Aktivitäten und Matrix."""

    def validate(self, result: EngineResult) -> ValidationReport:
        violations: list[ValidationViolation] = []

        violations.extend(self._check_placed_cells(result))
        violations.extend(self._check_foreign_cells(result))
        violations.extend(self._check_fixed_placed(result))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _expected_cells(self, result: EngineResult) -> dict[tuple[int, int], int]:
        """(Ressource, Slot) → Aktivität, wie sie aus den Aktivitäten folgt."""
        expected: dict[tuple[int, int], int] = {}
        for a in result.activities:
            if not a.is_placed:
                continue
            for r in a.resources:
                for ix in range(a.duration):
                    expected[(r, a.placement + ix)] = a.index
        return expected

    def _check_placed_cells(self, result: EngineResult) -> list[ValidationViolation]:
        """Jede Zelle einer platzierten Aktivität trägt deren Index."""
        violations: list[ValidationViolation] = []
        hpd = result.hours_per_day
        for a in result.activities:
            if not a.is_placed:
                continue
            if a.placement % hpd + a.duration > hpd:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="day_overflow",
                    entity=f"A{a.index}",
                    description=(
                        f"Slot {a.placement} + Dauer {a.duration} "
                        f"überschreitet das Tagesende."
                    ),
                ))
                continue
            for r in a.resources:
                for ix in range(a.duration):
                    found = result.cell(r, a.placement + ix)
                    if found != a.index:
                        violations.append(ValidationViolation(
                            severity="error",
                            constraint="cell_mismatch",
                            entity=f"A{a.index}",
                            description=(
                                f"Ressource {r}, Slot {a.placement + ix}: "
                                f"erwartet {a.index}, gefunden {found}."
                            ),
                        ))
        return violations

    def _check_foreign_cells(self, result: EngineResult) -> list[ValidationViolation]:
        """Belegte Zellen gehören zu einer platzierten Aktivität mit dieser Ressource."""
        violations: list[ValidationViolation] = []
        expected = self._expected_cells(result)
        spw = result.slots_per_week
        for i, aix in enumerate(result.occupancy):
            if aix == 0 or aix == BLOCKED:
                continue
            r, s = divmod(i, spw)
            if expected.get((r, s)) != aix:
                state = "uneingeplant" if (
                    0 < aix <= len(result.activities)
                    and not result.activity(aix).is_placed
                ) else "nicht zuständig"
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="foreign_cell",
                    entity=f"R{r}",
                    description=f"Slot {s}: Aktivität {aix} belegt die Zelle ({state}).",
                ))
        return violations

    def _check_fixed_placed(self, result: EngineResult) -> list[ValidationViolation]:
        """Fixierte Aktivitäten müssen platziert sein; uneingeplante melden."""
        violations: list[ValidationViolation] = []
        for a in result.activities:
            if a.fixed and not a.is_placed:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="fixed_unplaced",
                    entity=f"A{a.index}",
                    description="Fixierte Aktivität ist nicht platziert.",
                ))
            elif not a.is_placed:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="unplaced",
                    entity=f"A{a.index}",
                    description=f"Aktivität (Stunde {a.lesson}) ist noch nicht eingeplant.",
                ))
        return violations
