"""CLI entry points for underscore-lint - Thin Controller using Typer."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from underscore_naming_linter.domain.config import ConfigurationLoader
from underscore_naming_linter.domain.protocols import (
    FileSystemProtocol,
    RenameDispatcherProtocol,
    SymbolFactsProtocol,
    TelemetryPort,
)
from underscore_naming_linter.domain.rules.naming import NamingConventionRule
from underscore_naming_linter.infrastructure.services.git_hook_installer import (
    GitHookInstaller,
    GitHookInstallError,
)
from underscore_naming_linter.interface.reporters import DiagnosticReporter
from underscore_naming_linter.use_cases.apply_fixes import ApplyFixesUseCase
from underscore_naming_linter.use_cases.check_naming import CheckNamingUseCase
from underscore_naming_linter.use_cases.install_hook import InstallHookUseCase


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    symbol_gateway: SymbolFactsProtocol
    rename_dispatcher: RenameDispatcherProtocol
    filesystem: FileSystemProtocol
    rule: NamingConventionRule
    reporter: DiagnosticReporter
    hook_installer: GitHookInstaller


def resolve_target_path(path: Optional[Path]) -> str:
    """Resolve target path: explicit path, else src/ if exists, else '.'."""
    if path and str(path) != ".":
        return str(path)
    src_dir = Path.cwd() / "src"
    if src_dir.is_dir():
        return "src"
    return "."


def create_app(deps: CLIDependencies) -> typer.Typer:
    """Create the Typer app with explicitly injected dependencies."""
    app = typer.Typer(
        name="underscore-lint",
        help="Underscore and prefix naming policy for Python identifiers.",
        add_completion=False,
    )

    @app.callback()
    def main(
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    ) -> None:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )

    @app.command()
    def check(
        path: Optional[Path] = typer.Argument(None, help="File or directory to check (default: src/ or .)"),  # noqa: B008
        output_format: str = typer.Option("text", "--format", help="Output format: text or json"),
    ) -> None:
        """Report naming violations. Exits with status 1 when any are found."""
        target_path = resolve_target_path(path)
        use_case = CheckNamingUseCase(
            symbol_gateway=deps.symbol_gateway,
            filesystem=deps.filesystem,
            rule=deps.rule,
            telemetry=deps.telemetry,
            config_loader=deps.config_loader,
        )
        diagnostics = use_case.execute(target_path)
        deps.reporter.report_diagnostics(diagnostics, output_format=output_format)
        if diagnostics:
            raise typer.Exit(code=1)

    @app.command()
    def fix(
        path: Optional[Path] = typer.Argument(None, help="File or directory to fix (default: src/ or .)"),  # noqa: B008
    ) -> None:
        """Rename every fixable violation and all of its references."""
        deps.telemetry.handshake()
        target_path = resolve_target_path(path)
        use_case = ApplyFixesUseCase(
            symbol_gateway=deps.symbol_gateway,
            rename_dispatcher=deps.rename_dispatcher,
            filesystem=deps.filesystem,
            rule=deps.rule,
            telemetry=deps.telemetry,
            config_loader=deps.config_loader,
        )
        report = use_case.execute(target_path)
        deps.reporter.report_fixes(report)
        if report.failed:
            raise typer.Exit(code=1)

    @app.command("install-hook")
    def install_hook(
        force: bool = typer.Option(
            False, "--force", help="Reinstall; a foreign pre-push hook is moved to pre-push.bak and chained."
        ),
    ) -> None:
        """Install a git pre-push hook that runs the naming check."""
        use_case = InstallHookUseCase(deps.hook_installer, deps.config_loader)
        try:
            use_case.execute(force=force)
        except GitHookInstallError as exc:
            deps.telemetry.error(str(exc))
            raise typer.Exit(code=1) from exc

    return app
