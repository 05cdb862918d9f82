"""Naming convention checks (E9901-E9903)."""

from typing import TYPE_CHECKING, Optional

import astroid  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from pylint.lint import PyLinter

from pylint.checkers import BaseChecker

from underscore_naming_linter.domain.constants import NAMING_MSGS
from underscore_naming_linter.domain.rules.naming import NamingConventionRule
from underscore_naming_linter.infrastructure.gateways.astroid_gateway import (
    AstroidSymbolGateway,
    NodeFacts,
)


class NamingConventionChecker(BaseChecker):
    """E9901-E9903: Underscore and prefix naming policy enforcement."""

    name: str = "underscore-naming"
    msgs = NAMING_MSGS

    def __init__(
        self,
        linter: "PyLinter",
        symbol_gateway: Optional[AstroidSymbolGateway] = None,
        rule: Optional[NamingConventionRule] = None,
    ) -> None:
        super().__init__(linter)
        self._symbol_gateway = symbol_gateway or AstroidSymbolGateway()
        self._rule = rule or NamingConventionRule()

    def visit_classdef(self, node: astroid.nodes.ClassDef) -> None:
        """Check the class name and its fields."""
        self._report(self._symbol_gateway.facts_for_class(node))

    def visit_functiondef(self, node: astroid.nodes.FunctionDef) -> None:
        """Check the function/method/property name and its parameters."""
        self._report(self._symbol_gateway.facts_for_function(node))

    visit_asyncfunctiondef = visit_functiondef

    def visit_assignname(self, node: astroid.nodes.AssignName) -> None:
        """Check locals and loop variables at their first binding."""
        self._report(self._symbol_gateway.facts_for_assign_name(node))

    def _report(self, symbols: list[NodeFacts]) -> None:
        for node, facts in symbols:
            violation = self._rule.check(facts)
            if violation is None:
                continue
            _, msg_symbol, args = self._rule.message_for(violation)
            self.add_message(msg_symbol, node=node, args=args)
