"""Pytest configuration.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the project root on sys.path so ``tests.*`` helpers import cleanly.
Singletons are reset around every test so configuration never leaks.
"""

from collections.abc import Iterator

import pytest

from underscore_naming_linter.domain.config import ConfigurationLoader
from underscore_naming_linter.infrastructure.di.container import NamingContainer


@pytest.fixture(autouse=True)
def reset_singletons() -> Iterator[None]:
    ConfigurationLoader.reset()
    NamingContainer.reset()
    yield
    ConfigurationLoader.reset()
    NamingContainer.reset()
