"""Unit tests for NameCanonicalizer (domain/rules/canonicalizer.py)."""

import unittest

import pytest

from tests.naming_test_utils import make_facts
from underscore_naming_linter.domain.entities import Accessibility, SymbolKind, ViolationRule
from underscore_naming_linter.domain.policy import DEFAULT_POLICY
from underscore_naming_linter.domain.rules.canonicalizer import (
    NameCanonicalizer,
    capitalize_first,
    join_lower_camel,
    strip_interior_underscores,
)


class TestHelpers(unittest.TestCase):
    def test_capitalize_first_keeps_the_rest(self) -> None:
        self.assertEqual(capitalize_first("myButton"), "MyButton")
        self.assertEqual(capitalize_first(""), "")

    def test_join_lower_camel(self) -> None:
        self.assertEqual(join_lower_camel("a_bc_d"), "aBcD")
        self.assertEqual(join_lower_camel("_submit"), "Submit")

    def test_strip_interior_underscores_keeps_boundaries(self) -> None:
        self.assertEqual(strip_interior_underscores("_a_b_"), "_ab_")
        self.assertEqual(strip_interior_underscores("a_"), "a_")


class TestNameCanonicalizer(unittest.TestCase):
    """Tests for NameCanonicalizer.repair."""

    def setUp(self) -> None:
        self.canonicalizer = NameCanonicalizer(DEFAULT_POLICY)

    def _repair(self, name, rule, kind=SymbolKind.FIELD, type_name=None, accessibility=None):
        facts = make_facts(name, kind, type_name=type_name, accessibility=accessibility)
        return self.canonicalizer.repair(facts, rule)

    def test_interior_underscores_removed(self) -> None:
        self.assertEqual(
            self._repair("temp_count", ViolationRule.INTERIOR_UNDERSCORE, SymbolKind.LOCAL_VARIABLE),
            "tempcount",
        )
        self.assertEqual(
            self._repair("_private_name", ViolationRule.INTERIOR_UNDERSCORE, SymbolKind.PARAMETER),
            "_privatename",
        )

    def test_static_marker_is_preserved(self) -> None:
        self.assertEqual(
            self._repair("s_my_value", ViolationRule.STATIC_PREFIX_INTERIOR_UNDERSCORE), "s_myvalue"
        )

    def test_handler_casing(self) -> None:
        self.assertEqual(
            self._repair("BtnClick_submit", ViolationRule.ALLOWED_METHOD_PREFIX_CASING, SymbolKind.METHOD),
            "BtnClick_Submit",
        )

    def test_handler_underscore(self) -> None:
        self.assertEqual(
            self._repair(
                "BtnClick_Submit_now", ViolationRule.ALLOWED_METHOD_PREFIX_UNDERSCORE, SymbolKind.METHOD
            ),
            "BtnClick_SubmitNow",
        )

    def test_missing_handler_prefix_is_moved_to_front(self) -> None:
        rule = ViolationRule.MISSING_ALLOWED_METHOD_PREFIX
        self.assertEqual(self._repair("on_click_submit", rule, SymbolKind.METHOD), "OnClick_Submit")
        self.assertEqual(self._repair("handle_on_click", rule, SymbolKind.METHOD), "OnClick_Handle")
        self.assertEqual(self._repair("rpcSync", rule, SymbolKind.METHOD), "RPC_Sync")

    def test_handler_without_remainder_is_declined(self) -> None:
        rule = ViolationRule.MISSING_ALLOWED_METHOD_PREFIX
        self.assertIsNone(self._repair("onclick", rule, SymbolKind.METHOD))
        self.assertIsNone(self._repair("on_click_", rule, SymbolKind.METHOD))

    def test_private_field_prefix(self) -> None:
        self.assertEqual(
            self._repair("_my_button", ViolationRule.FIELD_PREFIX_MISMATCH, type_name="Button"),
            "_btnMyButton",
        )

    def test_public_field_prefix(self) -> None:
        rule = ViolationRule.FIELD_PREFIX_MISMATCH
        self.assertEqual(self._repair("my_button", rule, type_name="Button"), "Btn_MyButton")
        self.assertEqual(self._repair("submitBtn", rule, type_name="Button"), "Btn_Submit")
        self.assertEqual(self._repair("Btn_close_all", rule, type_name="Button"), "Btn_CloseAll")

    def test_misplaced_private_stem_is_moved(self) -> None:
        self.assertEqual(
            self._repair("_submit_btn", ViolationRule.FIELD_PREFIX_MISMATCH, type_name="Button"),
            "_btnSubmit",
        )

    def test_field_with_empty_stem_is_declined(self) -> None:
        rule = ViolationRule.FIELD_PREFIX_MISMATCH
        self.assertIsNone(self._repair("btn", rule, type_name="Button"))
        self.assertIsNone(self._repair("_btn_", rule, type_name="Button"))

    def test_field_with_unresolvable_type_is_declined(self) -> None:
        self.assertIsNone(
            self._repair(
                "my_widget",
                ViolationRule.FIELD_PREFIX_MISMATCH,
                type_name="Widget",
                accessibility=Accessibility.PUBLIC,
            )
        )

    def test_unchanged_name_is_declined(self) -> None:
        self.assertIsNone(self._repair("ab", ViolationRule.INTERIOR_UNDERSCORE, SymbolKind.PARAMETER))

    def test_unknown_rule_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown violation rule"):
            self.canonicalizer.repair(make_facts("a_b"), "not-a-rule")  # type: ignore[arg-type]
