"""Symbol classifier: maps symbol facts to a rule category."""

from underscore_naming_linter.domain.constants import STATIC_MARKER
from underscore_naming_linter.domain.entities import Category, SymbolFacts, SymbolKind


class SymbolClassifier:
    """Pure mapping from SymbolFacts to the Category that decides which checks apply."""

    def classify(self, facts: SymbolFacts) -> Category:
        """
        Classify a symbol.

        Property accessors short-circuit and are never checked. Locals and loop
        variables keep their own categories even when "s_"-marked; the
        evaluator applies the marker rule to locals only.
        """
        if facts.is_property_accessor:
            return Category.PROPERTY_ACCESSOR
        if facts.kind is SymbolKind.LOCAL_VARIABLE:
            return Category.SCOPED_LOCAL
        if facts.kind is SymbolKind.LOOP_VARIABLE:
            return Category.LOOP_VARIABLE
        if facts.name.startswith(STATIC_MARKER):
            return Category.STATIC_MARKED_SYMBOL
        if facts.kind is SymbolKind.METHOD:
            return Category.ALLOW_LISTABLE_METHOD
        if facts.kind is SymbolKind.FIELD and facts.is_reference_type:
            return Category.TYPED_FIELD
        return Category.GENERIC_SYMBOL
