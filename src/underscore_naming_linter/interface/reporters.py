"""Interface for diagnostic and fix reporting."""

import json
from collections import Counter
from typing import Protocol

import typer

from underscore_naming_linter.domain.entities import Diagnostic, FixReport


class DiagnosticReporter(Protocol):
    """Protocol for reporting naming diagnostics."""

    def report_diagnostics(self, diagnostics: list[Diagnostic], output_format: str = "text") -> None:
        ...

    def report_fixes(self, report: FixReport) -> None:
        ...


class TerminalDiagnosticReporter:
    """Plain terminal reporter: one line per diagnostic, then a per-rule summary."""

    def report_diagnostics(self, diagnostics: list[Diagnostic], output_format: str = "text") -> None:
        if output_format == "json":
            typer.echo(json.dumps([d.to_dict() for d in diagnostics], indent=2))
            return

        if not diagnostics:
            typer.secho("\n✅ No naming violations detected.", fg=typer.colors.GREEN)
            return

        for d in diagnostics:
            fix = "" if d.fix_available else " (no automatic fix)"
            typer.echo(f"{d.location}: {d.rule_id} [{d.symbol}] {d.message}{fix}")

        typer.echo("")
        counts = Counter(d.rule_id for d in diagnostics)
        for rule_id, count in sorted(counts.items()):
            typer.echo(f"  {rule_id}: {count}")
        typer.secho(f"Found {len(diagnostics)} naming violation(s).", fg=typer.colors.RED)

    def report_fixes(self, report: FixReport) -> None:
        for outcome in report.applied:
            p = outcome.proposal
            typer.echo(f"renamed {p.old_name} -> {p.new_name} ({len(outcome.files_changed)} file(s))")
        for outcome in report.failed:
            p = outcome.proposal
            typer.secho(f"skipped {p.old_name} -> {p.new_name}: {outcome.reason}", fg=typer.colors.YELLOW)
        for d in report.declined:
            typer.secho(f"{d.location}: {d.message} (no automatic fix)", fg=typer.colors.YELLOW)
        typer.echo(
            f"Applied: {len(report.applied)}  Failed: {len(report.failed)}  Declined: {len(report.declined)}"
        )
