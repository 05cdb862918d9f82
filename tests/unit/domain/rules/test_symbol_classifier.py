"""Unit tests for SymbolClassifier (domain/rules/classifier.py)."""

import unittest

from tests.naming_test_utils import make_facts
from underscore_naming_linter.domain.entities import Category, SymbolKind
from underscore_naming_linter.domain.rules.classifier import SymbolClassifier


class TestSymbolClassifier(unittest.TestCase):
    def setUp(self) -> None:
        self.classifier = SymbolClassifier()

    def test_property_accessor_wins_over_everything(self) -> None:
        facts = make_facts("s_get_Value", SymbolKind.METHOD, accessor=True)
        self.assertEqual(self.classifier.classify(facts), Category.PROPERTY_ACCESSOR)

    def test_locals_keep_their_category_when_static_marked(self) -> None:
        facts = make_facts("s_total", SymbolKind.LOCAL_VARIABLE)
        self.assertEqual(self.classifier.classify(facts), Category.SCOPED_LOCAL)

    def test_loop_variable(self) -> None:
        facts = make_facts("s_item", SymbolKind.LOOP_VARIABLE)
        self.assertEqual(self.classifier.classify(facts), Category.LOOP_VARIABLE)

    def test_static_marker_precedes_method_and_field(self) -> None:
        for kind in (SymbolKind.METHOD, SymbolKind.FIELD, SymbolKind.PARAMETER):
            with self.subTest(kind=kind):
                facts = make_facts("s_cache", kind, type_name="Button")
                self.assertEqual(self.classifier.classify(facts), Category.STATIC_MARKED_SYMBOL)

    def test_methods_are_allow_listable(self) -> None:
        facts = make_facts("OnClick_Submit", SymbolKind.METHOD)
        self.assertEqual(self.classifier.classify(facts), Category.ALLOW_LISTABLE_METHOD)

    def test_reference_typed_field(self) -> None:
        facts = make_facts("Btn_Ok", SymbolKind.FIELD, type_name="Button")
        self.assertEqual(self.classifier.classify(facts), Category.TYPED_FIELD)

    def test_value_typed_field_is_generic(self) -> None:
        facts = make_facts("max_count", SymbolKind.FIELD, type_name="int", reference=False)
        self.assertEqual(self.classifier.classify(facts), Category.GENERIC_SYMBOL)

    def test_other_kinds_are_generic(self) -> None:
        for kind in (SymbolKind.TYPE_DECL, SymbolKind.PROPERTY, SymbolKind.PARAMETER):
            with self.subTest(kind=kind):
                self.assertEqual(
                    self.classifier.classify(make_facts("value", kind)), Category.GENERIC_SYMBOL
                )
