"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from underscore_naming_linter.infrastructure.di.container import NamingContainer
from underscore_naming_linter.interface.cli import CLIDependencies, create_app


def build_dependencies(container: NamingContainer) -> CLIDependencies:
    """Resolve CLI dependencies from the container."""
    return CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        symbol_gateway=container.get_symbol_gateway(),
        rename_dispatcher=container.get_rename_dispatcher(),
        filesystem=container.get_filesystem_gateway(),
        rule=container.get_naming_rule(),
        reporter=container.get_reporter(),
        hook_installer=container.get_hook_installer(),
    )


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    app = create_app(build_dependencies(NamingContainer.get_instance()))
    app()


if __name__ == "__main__":
    main()
