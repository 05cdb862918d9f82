"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import stat
from fnmatch import fnmatch
from pathlib import Path

from underscore_naming_linter.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        return str(Path(path).resolve())

    def glob_python_files(self, path: str, exclude: list[str]) -> list[str]:
        """Get all Python files in path (recursive if directory), sorted, minus excluded globs."""
        path_obj = Path(path).resolve()
        if path_obj.is_dir():
            candidates = sorted(path_obj.glob("**/*.py"))
            return [
                str(p) for p in candidates
                if not self._excluded(p.relative_to(path_obj).as_posix(), exclude)
            ]
        return [str(path_obj)] if path_obj.suffix == ".py" else []

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file, creating parent directories."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding=encoding)

    def make_executable(self, path: str) -> None:
        target = Path(path)
        target.chmod(target.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    @staticmethod
    def _excluded(relative: str, patterns: list[str]) -> bool:
        parts = relative.split("/")
        for pattern in patterns:
            if fnmatch(relative, pattern) or any(fnmatch(part, pattern) for part in parts):
                return True
        return False
