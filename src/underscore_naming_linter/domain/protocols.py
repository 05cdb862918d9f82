from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import astroid  # type: ignore[import-untyped]

    from underscore_naming_linter.domain.entities import (
        RenameOutcome,
        RenameProposal,
        SymbolFacts,
    )


class SymbolFactsProtocol(Protocol):
    """Host front end that turns syntax into already-resolved symbol facts."""

    def collect_file(self, file_path: str) -> list["SymbolFacts"]:
        """Facts for every symbol of interest declared in a file (empty if unparsable)."""
        ...

    def collect_module(self, module: "astroid.nodes.Module") -> list["SymbolFacts"]:
        """Facts for every symbol of interest declared in a parsed module."""
        ...


class RenameDispatcherProtocol(Protocol):
    """Host capability that rewrites a declaration and all of its references."""

    def apply_all(
        self, file_paths: list[str], proposals: list["RenameProposal"]
    ) -> list["RenameOutcome"]:
        """Apply each proposal all-or-nothing across ``file_paths``; report every outcome."""
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        ...

    def glob_python_files(self, path: str, exclude: list[str]) -> list[str]:
        """Get all Python files in path (recursive if directory), minus excluded globs."""
        ...

    def exists(self, path: str) -> bool:
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...

    def make_executable(self, path: str) -> None:
        ...
