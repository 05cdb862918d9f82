"""Git hook installer - wires the naming check into ``git push``."""

from pathlib import Path

from underscore_naming_linter.domain.constants import HOOK_MARKER_SUFFIX
from underscore_naming_linter.domain.protocols import FileSystemProtocol, TelemetryPort

HOOK_NAME = "pre-push"
HOOK_SIGNATURE = "Installed by underscore-naming-linter"
BACKUP_SUFFIX = ".bak"

HOOK_TEMPLATE = """#!/bin/sh
# {signature}: block pushes with naming violations.
{chain}{command}
status=$?
if [ $status -ne 0 ]; then
    echo "underscore-naming: fix the naming violations above (or run 'underscore-lint fix') before pushing."
fi
exit $status
"""

# Runs the hook that was in place before ours; its failure blocks the push.
CHAIN_TEMPLATE = """"$(dirname "$0")/{backup}" "$@" || exit $?
"""


class GitHookInstallError(Exception):
    """Raised when the hook cannot be installed (no repository, foreign hook, unwritable hooks dir)."""


class GitHookInstaller:
    """Installs a pre-push hook once per repository, guarded by a marker file."""

    def __init__(self, filesystem: FileSystemProtocol, telemetry: TelemetryPort) -> None:
        self.filesystem = filesystem
        self.telemetry = telemetry

    @staticmethod
    def find_repo_root(start: Path) -> Path:
        """Nearest ancestor of ``start`` (inclusive) holding a .git directory."""
        current = start.resolve()
        for directory in (current, *current.parents):
            if (directory / ".git").is_dir():
                return directory
        raise GitHookInstallError(f"No git repository found above {current}")

    def install(self, start: Path, command: str, force: bool = False) -> bool:
        """
        Write the hook. Returns False when it was already installed.

        The marker file lives next to the hook; ``force`` reinstalls over it.
        A pre-push hook written by someone else is never overwritten silently:
        without ``force`` installation fails, with ``force`` the old hook is
        moved to ``pre-push.bak`` and the new hook runs it first.
        """
        hooks_dir = self.find_repo_root(start) / ".git" / "hooks"
        hook_path = hooks_dir / HOOK_NAME
        marker_path = hooks_dir / f"{HOOK_NAME}{HOOK_MARKER_SUFFIX}"
        backup_path = hooks_dir / f"{HOOK_NAME}{BACKUP_SUFFIX}"

        if self.filesystem.exists(str(marker_path)) and not force:
            self.telemetry.step(f"Hook already installed: {hook_path}")
            return False

        try:
            if self.filesystem.exists(str(hook_path)):
                existing = self.filesystem.read_text(str(hook_path))
                if HOOK_SIGNATURE not in existing:
                    if not force:
                        raise GitHookInstallError(
                            f"{hook_path} was not installed by underscore-naming-linter; "
                            f"rerun with --force to move it to {backup_path.name} and chain to it"
                        )
                    self.filesystem.write_text(str(backup_path), existing)
                    self.filesystem.make_executable(str(backup_path))
                    self.telemetry.step(f"Backed up existing {HOOK_NAME} hook to {backup_path}")

            chain = ""
            if self.filesystem.exists(str(backup_path)):
                chain = CHAIN_TEMPLATE.format(backup=backup_path.name)
            hook = HOOK_TEMPLATE.format(signature=HOOK_SIGNATURE, chain=chain, command=command)
            self.filesystem.write_text(str(hook_path), hook)
            self.filesystem.make_executable(str(hook_path))
            self.filesystem.write_text(str(marker_path), "Git hooks installed\n")
        except (OSError, UnicodeDecodeError) as exc:
            raise GitHookInstallError(f"Cannot write {hook_path}: {exc}") from exc

        self.telemetry.step(f"Installed {HOOK_NAME} hook: {hook_path}")
        return True
