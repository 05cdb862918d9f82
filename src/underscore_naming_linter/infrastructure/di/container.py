from typing import TYPE_CHECKING, Any, Optional, cast

from underscore_naming_linter.domain.config import ConfigurationLoader
from underscore_naming_linter.domain.policy import DEFAULT_POLICY
from underscore_naming_linter.domain.rules.naming import NamingConventionRule
from underscore_naming_linter.infrastructure.gateways.astroid_gateway import AstroidSymbolGateway
from underscore_naming_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from underscore_naming_linter.infrastructure.gateways.libcst_rename_gateway import (
    LibCSTRenameGateway,
)
from underscore_naming_linter.infrastructure.services.git_hook_installer import GitHookInstaller
from underscore_naming_linter.interface.reporters import TerminalDiagnosticReporter
from underscore_naming_linter.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from underscore_naming_linter.domain.protocols import (
        FileSystemProtocol,
        RenameDispatcherProtocol,
        TelemetryPort,
    )


class NamingContainer:
    """Dependency Injection Container for the naming linter."""

    _instance: Optional["NamingContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_loader = ConfigurationLoader()
        self.register_singleton("ConfigurationLoader", config_loader)

        telemetry = ProjectTelemetry("UNDERSCORE-NAMING")
        self.register_singleton("TelemetryPort", telemetry)

        self.register_singleton("NamingConventionRule", NamingConventionRule(DEFAULT_POLICY))
        self.register_singleton("AstroidSymbolGateway", AstroidSymbolGateway())
        self.register_singleton("LibCSTRenameGateway", LibCSTRenameGateway())

        filesystem = FileSystemGateway()
        self.register_singleton("FileSystemGateway", filesystem)
        self.register_singleton("GitHookInstaller", GitHookInstaller(filesystem, telemetry))

        self.register_singleton("DiagnosticReporter", TerminalDiagnosticReporter())

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_naming_rule(self) -> NamingConventionRule:
        return cast(NamingConventionRule, self.get("NamingConventionRule"))

    def get_symbol_gateway(self) -> AstroidSymbolGateway:
        """Return the astroid symbol facts gateway."""
        return cast(AstroidSymbolGateway, self.get("AstroidSymbolGateway"))

    def get_rename_dispatcher(self) -> "RenameDispatcherProtocol":
        """Return the LibCST rename gateway."""
        return cast("RenameDispatcherProtocol", self.get("LibCSTRenameGateway"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_hook_installer(self) -> GitHookInstaller:
        return cast(GitHookInstaller, self.get("GitHookInstaller"))

    def get_reporter(self) -> TerminalDiagnosticReporter:
        """Return the diagnostic reporter."""
        return cast(TerminalDiagnosticReporter, self.get("DiagnosticReporter"))

    @classmethod
    def get_instance(cls) -> "NamingContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = NamingContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
