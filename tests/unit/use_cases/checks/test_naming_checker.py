"""Unit tests for NamingConventionChecker (pylint plugin)."""

import unittest
from unittest.mock import MagicMock

import astroid  # type: ignore[import-untyped]

from tests.linter_test_utils import run_checker
from tests.unit.checker_test_utils import CheckerTestCase
from underscore_naming_linter.infrastructure.checker import register
from underscore_naming_linter.use_cases.checks.naming import NamingConventionChecker


class TestNamingConventionChecker(unittest.TestCase, CheckerTestCase):
    def setUp(self) -> None:
        self.linter = MagicMock()
        self.checker = NamingConventionChecker(self.linter)

    def test_function_and_parameters(self) -> None:
        node = astroid.extract_node("def make_widget(widget_name): pass")
        self.checker.visit_functiondef(node)

        self.assertAddsMessage(self.checker, "underscore-in-identifier", node=node, args=("make_widget",))
        self.assertAddsMessage(self.checker, "underscore-in-identifier", args=("widget_name",))

    def test_compliant_function_reports_nothing(self) -> None:
        node = astroid.extract_node("def OnClick_Submit(event): pass")
        self.checker.visit_functiondef(node)
        self.assertNoMessages(self.checker)

    def test_handler_prefix_message(self) -> None:
        node = astroid.extract_node("def on_click_submit(): pass")
        self.checker.visit_functiondef(node)
        self.assertAddsMessage(
            self.checker, "handler-prefix-violation", node=node, args=("on_click_submit", "OnClick_")
        )


def test_run_checker_reports_every_symbol_kind() -> None:
    code = """
class Button:
    pass


class Panel:
    my_button: Button

    def __init__(self):
        self._close_btn = Button()

    def refresh(self):
        temp_count = 0
        for item_x in range(3):
            temp_count += item_x
        return temp_count
"""
    linter = run_checker(NamingConventionChecker, code, "src/panel.py")

    assert linter.message_args == [
        ("field-prefix-mismatch", ("my_button", "Btn_")),
        ("field-prefix-mismatch", ("_close_btn", "_btn")),
        ("underscore-in-identifier", ("temp_count",)),
        ("underscore-in-identifier", ("item_x",)),
    ]


def test_register_adds_checker() -> None:
    linter = MagicMock()
    register(linter)
    checker = linter.register_checker.call_args.args[0]
    assert isinstance(checker, NamingConventionChecker)
    assert checker.name == "underscore-naming"
