"""Telemetry port implementation: user-facing progress lines plus stdlib logging."""

import logging

import typer

logger = logging.getLogger("underscore_naming_linter")


class ProjectTelemetry:
    """Echo progress to the terminal and mirror it to the package logger."""

    def __init__(self, project_name: str, verbose: bool = True) -> None:
        self.project_name = project_name
        self.verbose = verbose

    def handshake(self) -> None:
        logger.debug("%s telemetry online", self.project_name)
        if self.verbose:
            typer.secho(f"[{self.project_name}] naming policy engaged", fg=typer.colors.CYAN)

    def step(self, message: str) -> None:
        logger.info(message)
        if self.verbose:
            typer.echo(message, err=True)

    def warning(self, message: str) -> None:
        logger.warning(message)
        if self.verbose:
            typer.secho(message, fg=typer.colors.YELLOW, err=True)

    def error(self, message: str) -> None:
        logger.error(message)
        typer.secho(message, fg=typer.colors.RED, err=True)
