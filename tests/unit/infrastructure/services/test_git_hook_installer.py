"""Unit tests for GitHookInstaller (infrastructure/services/git_hook_installer.py)."""

import os
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from underscore_naming_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from underscore_naming_linter.infrastructure.services.git_hook_installer import (
    HOOK_NAME,
    GitHookInstaller,
    GitHookInstallError,
)


def _repo(tmp_path: Path) -> Path:
    (tmp_path / ".git" / "hooks").mkdir(parents=True)
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)
    return nested


def test_find_repo_root_walks_up(tmp_path: Path) -> None:
    nested = _repo(tmp_path)
    assert GitHookInstaller.find_repo_root(nested) == tmp_path.resolve()


def test_install_writes_executable_hook_and_marker(tmp_path: Path) -> None:
    nested = _repo(tmp_path)
    telemetry = MagicMock()
    installer = GitHookInstaller(FileSystemGateway(), telemetry)

    assert installer.install(nested, command="underscore-lint check src")

    hook = tmp_path / ".git" / "hooks" / HOOK_NAME
    content = hook.read_text(encoding="utf-8")
    assert content.startswith("#!/bin/sh\n")
    assert "underscore-lint check src\n" in content
    assert os.access(hook, os.X_OK)
    assert (tmp_path / ".git" / "hooks" / f"{HOOK_NAME}.underscore-naming-installed").exists()
    telemetry.step.assert_called_once()


def test_second_install_is_skipped_unless_forced(tmp_path: Path) -> None:
    nested = _repo(tmp_path)
    installer = GitHookInstaller(FileSystemGateway(), MagicMock())
    installer.install(nested, command="first")

    assert installer.install(nested, command="second") is False
    hook = tmp_path / ".git" / "hooks" / HOOK_NAME
    assert "first" in hook.read_text(encoding="utf-8")

    assert installer.install(nested, command="second", force=True) is True
    assert "second" in hook.read_text(encoding="utf-8")


def test_missing_repository_raises(tmp_path: Path) -> None:
    installer = GitHookInstaller(FileSystemGateway(), MagicMock())
    with pytest.raises(GitHookInstallError, match="No git repository"):
        installer.install(tmp_path, command="underscore-lint check")


def test_foreign_hook_is_kept_unless_forced(tmp_path: Path) -> None:
    nested = _repo(tmp_path)
    hooks = tmp_path / ".git" / "hooks"
    hook = hooks / HOOK_NAME
    hook.write_text("#!/bin/sh\nrun-my-own-tests\n", encoding="utf-8")
    installer = GitHookInstaller(FileSystemGateway(), MagicMock())

    with pytest.raises(GitHookInstallError, match="--force"):
        installer.install(nested, command="underscore-lint check")

    assert hook.read_text(encoding="utf-8") == "#!/bin/sh\nrun-my-own-tests\n"
    assert not (hooks / f"{HOOK_NAME}.underscore-naming-installed").exists()


def test_forced_install_backs_up_and_chains_foreign_hook(tmp_path: Path) -> None:
    nested = _repo(tmp_path)
    hooks = tmp_path / ".git" / "hooks"
    hook = hooks / HOOK_NAME
    hook.write_text("#!/bin/sh\nrun-my-own-tests\n", encoding="utf-8")
    installer = GitHookInstaller(FileSystemGateway(), MagicMock())

    assert installer.install(nested, command="underscore-lint check", force=True)

    backup = hooks / f"{HOOK_NAME}.bak"
    assert backup.read_text(encoding="utf-8") == "#!/bin/sh\nrun-my-own-tests\n"
    assert os.access(backup, os.X_OK)
    content = hook.read_text(encoding="utf-8")
    assert f'"$(dirname "$0")/{HOOK_NAME}.bak" "$@" || exit $?' in content
    assert "underscore-lint check\n" in content


class TestInstallerWriteFailures(unittest.TestCase):
    def test_write_error_is_wrapped(self) -> None:
        filesystem = MagicMock()
        filesystem.exists.return_value = False
        filesystem.write_text.side_effect = PermissionError("read-only")
        installer = GitHookInstaller(filesystem, MagicMock())
        installer.find_repo_root = MagicMock(return_value=Path("/repo"))  # type: ignore[method-assign]

        with self.assertRaises(GitHookInstallError) as ctx:
            installer.install(Path("/repo"), command="x")

        self.assertIn("read-only", str(ctx.exception))
        filesystem.make_executable.assert_not_called()
