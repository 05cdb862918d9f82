"""Configuration loader for linter settings."""

import logging
import tomllib
from pathlib import Path
from typing import ClassVar, Optional

from underscore_naming_linter.domain.constants import DEFAULT_HOOK_COMMAND

TOOL_SECTION = "underscore-naming"


class ConfigurationLoader:
    """
    Singleton that loads linter configuration from pyproject.toml.

    Looks for [tool.underscore-naming]. Only run settings live here; the
    prefix tables and handler allow list are compiled-in policy.
    """

    _instance: ClassVar[Optional["ConfigurationLoader"]] = None
    _config: ClassVar[dict[str, object]] = {}
    _config_path: ClassVar[Optional[Path]] = None

    def __new__(cls) -> "ConfigurationLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.load_config()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded singleton (tests, or after changing directory)."""
        cls._instance = None
        cls._config = {}
        cls._config_path = None

    def load_config(self, start: Optional[Path] = None) -> None:
        """Find and load the nearest pyproject.toml walking up from ``start`` (default: CWD)."""
        current_path = (start or Path.cwd()).resolve()

        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.exists():
                continue
            try:
                with config_file.open("rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logging.warning("Configuration Warning: could not read %s: %s", config_file, exc)
                continue
            section = data.get("tool", {}).get(TOOL_SECTION, {})
            if section:
                ConfigurationLoader._config = section
                ConfigurationLoader._config_path = config_file
                self.validate_config(section)
                return

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about settings that cannot be honoured."""
        exclude = config.get("exclude", [])
        if not isinstance(exclude, list):
            logging.warning("Configuration Warning: 'exclude' must be a list of glob patterns.")
        for key in ("prefixes", "method_prefixes"):
            if key in config:
                logging.warning(
                    "Configuration Warning: '%s' is ignored; the naming policy is not configurable.", key
                )

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return ConfigurationLoader._config

    @property
    def config_path(self) -> Optional[Path]:
        return ConfigurationLoader._config_path

    @property
    def exclude(self) -> list[str]:
        """Glob patterns skipped when walking a directory."""
        raw = self._config.get("exclude", [])
        if not isinstance(raw, list):
            return []
        return [item for item in raw if isinstance(item, str)]

    @property
    def hook_command(self) -> str:
        """Command the installed git hook runs."""
        value = self._config.get("hook_command", DEFAULT_HOOK_COMMAND)
        return value if isinstance(value, str) and value.strip() else DEFAULT_HOOK_COMMAND
