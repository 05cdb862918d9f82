"""Unit tests for ConfigurationLoader (domain/config.py)."""

import logging
from pathlib import Path

from underscore_naming_linter.domain.config import ConfigurationLoader
from underscore_naming_linter.domain.constants import DEFAULT_HOOK_COMMAND


def _write_pyproject(directory: Path, body: str) -> Path:
    path = directory / "pyproject.toml"
    path.write_text(body, encoding="utf-8")
    return path


def test_loads_tool_section_from_nearest_pyproject(tmp_path: Path, monkeypatch) -> None:
    config_file = _write_pyproject(
        tmp_path,
        '[tool.underscore-naming]\nexclude = ["build/*", 3]\nhook_command = "make lint"\n',
    )
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    loader = ConfigurationLoader()

    assert loader.config_path == config_file.resolve()
    assert loader.exclude == ["build/*"]
    assert loader.hook_command == "make lint"


def test_pyproject_without_section_is_skipped(tmp_path: Path, monkeypatch) -> None:
    _write_pyproject(tmp_path, '[tool.underscore-naming]\nexclude = ["gen/*"]\n')
    inner = tmp_path / "inner"
    inner.mkdir()
    _write_pyproject(inner, '[project]\nname = "inner"\n')
    monkeypatch.chdir(inner)

    assert ConfigurationLoader().exclude == ["gen/*"]


def test_blank_hook_command_falls_back_to_default(tmp_path: Path, monkeypatch) -> None:
    _write_pyproject(tmp_path, '[tool.underscore-naming]\nhook_command = "  "\n')
    monkeypatch.chdir(tmp_path)

    assert ConfigurationLoader().hook_command == DEFAULT_HOOK_COMMAND


def test_invalid_exclude_warns_and_is_ignored(tmp_path: Path, monkeypatch, caplog) -> None:
    _write_pyproject(tmp_path, '[tool.underscore-naming]\nexclude = "build"\nprefixes = {}\n')
    monkeypatch.chdir(tmp_path)

    with caplog.at_level(logging.WARNING):
        loader = ConfigurationLoader()

    assert loader.exclude == []
    assert "'exclude' must be a list" in caplog.text
    assert "'prefixes' is ignored" in caplog.text


def test_malformed_pyproject_warns(tmp_path: Path, monkeypatch, caplog) -> None:
    _write_pyproject(tmp_path, "[tool.underscore-naming\n")
    monkeypatch.chdir(tmp_path)

    with caplog.at_level(logging.WARNING):
        ConfigurationLoader()

    assert "could not read" in caplog.text


def test_defaults_without_configuration(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    loader = ConfigurationLoader()

    assert loader.config == {}
    assert loader.config_path is None
    assert loader.exclude == []
    assert loader.hook_command == DEFAULT_HOOK_COMMAND


def test_singleton_and_reset(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    first = ConfigurationLoader()
    assert ConfigurationLoader() is first

    ConfigurationLoader.reset()
    assert ConfigurationLoader() is not first
