"""Use Case: Check Naming - evaluate every symbol in a path and return diagnostics."""

from typing import TYPE_CHECKING

from underscore_naming_linter.domain.entities import Diagnostic
from underscore_naming_linter.domain.protocols import (
    FileSystemProtocol,
    SymbolFactsProtocol,
    TelemetryPort,
)
from underscore_naming_linter.domain.rules.naming import NamingConventionRule

if TYPE_CHECKING:
    from underscore_naming_linter.domain.config import ConfigurationLoader


class CheckNamingUseCase:
    """Orchestrate symbol collection and rule evaluation over a file tree."""

    def __init__(
        self,
        symbol_gateway: SymbolFactsProtocol,
        filesystem: FileSystemProtocol,
        rule: NamingConventionRule,
        telemetry: TelemetryPort,
        config_loader: "ConfigurationLoader",
    ) -> None:
        self.symbol_gateway = symbol_gateway
        self.filesystem = filesystem
        self.rule = rule
        self.telemetry = telemetry
        self.config_loader = config_loader

    def files(self, target_path: str) -> list[str]:
        """Python files under ``target_path`` honouring the configured excludes."""
        return self.filesystem.glob_python_files(target_path, self.config_loader.exclude)

    def execute(self, target_path: str) -> list[Diagnostic]:
        """Return diagnostics for every violating symbol, ordered by location."""
        files = self.files(target_path)
        self.telemetry.step(f"Checking naming in {len(files)} file(s) under {target_path}")

        diagnostics: list[Diagnostic] = []
        for file_path in files:
            for facts in self.symbol_gateway.collect_file(file_path):
                violation = self.rule.check(facts)
                if violation is not None:
                    diagnostics.append(self.rule.to_diagnostic(violation))

        diagnostics.sort(key=lambda d: (d.location.path, d.location.line, d.location.column, d.symbol))
        return diagnostics
