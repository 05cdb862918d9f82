"""Use Case: Install the pre-push git hook."""

from pathlib import Path
from typing import TYPE_CHECKING, Optional

from underscore_naming_linter.infrastructure.services.git_hook_installer import GitHookInstaller

if TYPE_CHECKING:
    from underscore_naming_linter.domain.config import ConfigurationLoader


class InstallHookUseCase:
    """Install the naming check as a git pre-push hook."""

    def __init__(self, installer: GitHookInstaller, config_loader: "ConfigurationLoader") -> None:
        self.installer = installer
        self.config_loader = config_loader

    def execute(self, start: Optional[Path] = None, force: bool = False) -> bool:
        """Install the hook for the repository containing ``start`` (default: CWD)."""
        return self.installer.install(
            start or Path.cwd(), command=self.config_loader.hook_command, force=force
        )
