"""Use Case: Apply Fixes - propose canonical renames and dispatch them as one batch."""

from typing import TYPE_CHECKING

from underscore_naming_linter.domain.entities import Diagnostic, FixReport, RenameProposal
from underscore_naming_linter.domain.protocols import (
    FileSystemProtocol,
    RenameDispatcherProtocol,
    SymbolFactsProtocol,
    TelemetryPort,
)
from underscore_naming_linter.domain.rules.naming import NamingConventionRule

if TYPE_CHECKING:
    from underscore_naming_linter.domain.config import ConfigurationLoader


class ApplyFixesUseCase:
    """Orchestrate apply-all renaming of every fixable naming violation."""

    def __init__(
        self,
        symbol_gateway: SymbolFactsProtocol,
        rename_dispatcher: RenameDispatcherProtocol,
        filesystem: FileSystemProtocol,
        rule: NamingConventionRule,
        telemetry: TelemetryPort,
        config_loader: "ConfigurationLoader",
    ) -> None:
        self.symbol_gateway = symbol_gateway
        self.rename_dispatcher = rename_dispatcher
        self.filesystem = filesystem
        self.rule = rule
        self.telemetry = telemetry
        self.config_loader = config_loader

    def execute(self, target_path: str) -> FixReport:
        """
        Collect one proposal per fixable diagnostic and submit them together.

        Violations the canonicalizer declines are returned in ``declined`` and
        never reach the dispatcher.
        """
        self.telemetry.step(f"Starting naming fixes on {target_path}")
        files = self.filesystem.glob_python_files(target_path, self.config_loader.exclude)

        proposals: list[RenameProposal] = []
        declined: list[Diagnostic] = []
        for file_path in files:
            for facts in self.symbol_gateway.collect_file(file_path):
                violation = self.rule.check(facts)
                if violation is None:
                    continue
                proposal = self.rule.fix(violation)
                if proposal is None:
                    declined.append(self.rule.to_diagnostic(violation))
                else:
                    proposals.append(proposal)

        if not proposals:
            self.telemetry.step("No fixable naming violations found.")
            return FixReport(outcomes=(), declined=tuple(declined))

        outcomes = self.rename_dispatcher.apply_all(files, proposals)
        report = FixReport(outcomes=tuple(outcomes), declined=tuple(declined))
        self.telemetry.step(
            f"Renamed {len(report.applied)} symbol(s) in {len(report.files_changed())} file(s)."
        )
        for outcome in report.failed:
            self.telemetry.error(
                f"  {outcome.proposal.old_name} -> {outcome.proposal.new_name}: {outcome.reason}"
            )
        return report
