"""Tests for NamingContainer and the CLI composition root."""

import unittest

from underscore_naming_linter.__main__ import build_dependencies
from underscore_naming_linter.domain.rules.naming import NamingConventionRule
from underscore_naming_linter.infrastructure.di.container import NamingContainer
from underscore_naming_linter.infrastructure.gateways.astroid_gateway import AstroidSymbolGateway
from underscore_naming_linter.infrastructure.gateways.libcst_rename_gateway import LibCSTRenameGateway
from underscore_naming_linter.interface.cli import CLIDependencies


class TestNamingContainer(unittest.TestCase):
    def test_get_instance_is_a_singleton(self) -> None:
        first = NamingContainer.get_instance()
        self.assertIs(NamingContainer.get_instance(), first)
        NamingContainer.reset()
        self.assertIsNot(NamingContainer.get_instance(), first)

    def test_unknown_dependency_raises(self) -> None:
        with self.assertRaises(ValueError):
            NamingContainer().get("Nope")

    def test_registered_defaults(self) -> None:
        container = NamingContainer()
        self.assertIsInstance(container.get_naming_rule(), NamingConventionRule)
        self.assertIsInstance(container.get_symbol_gateway(), AstroidSymbolGateway)
        self.assertIsInstance(container.get_rename_dispatcher(), LibCSTRenameGateway)
        self.assertIs(container.get_hook_installer().filesystem, container.get_filesystem_gateway())

    def test_build_dependencies(self) -> None:
        container = NamingContainer()
        deps = build_dependencies(container)
        self.assertIsInstance(deps, CLIDependencies)
        self.assertIs(deps.rule, container.get_naming_rule())
        self.assertIs(deps.reporter, container.get_reporter())
