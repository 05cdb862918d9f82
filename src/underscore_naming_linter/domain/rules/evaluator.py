"""Rule evaluator: ordered per-category decision procedure."""

from typing import Callable, Optional

from underscore_naming_linter.domain.constants import STATIC_MARKER
from underscore_naming_linter.domain.entities import (
    Accessibility,
    Category,
    SymbolFacts,
    ViolationRule,
)
from underscore_naming_linter.domain.policy import NamingPolicy


def has_interior_underscore(name: str) -> bool:
    """True when an underscore sits strictly between the first and last character."""
    return len(name) > 2 and "_" in name[1:-1]


class RuleEvaluator:
    """
    Decides, per category, whether a symbol violates the naming policy.

    Precedence is fixed by a single dispatch table so that exactly one
    ViolationRule fires for a violating symbol.
    """

    def __init__(self, policy: NamingPolicy) -> None:
        self._policy = policy
        self._dispatch: dict[Category, Callable[[SymbolFacts], Optional[ViolationRule]]] = {
            Category.PROPERTY_ACCESSOR: lambda facts: None,
            Category.TYPED_FIELD: self._evaluate_typed_field,
            Category.ALLOW_LISTABLE_METHOD: self._evaluate_method,
            Category.STATIC_MARKED_SYMBOL: self._evaluate_static_marked,
            Category.SCOPED_LOCAL: self._evaluate_scoped_local,
            Category.LOOP_VARIABLE: self._evaluate_interior,
            Category.GENERIC_SYMBOL: self._evaluate_interior,
        }

    @property
    def policy(self) -> NamingPolicy:
        return self._policy

    def evaluate(self, facts: SymbolFacts, category: Category) -> Optional[ViolationRule]:
        """Return the violated sub-rule, or None when the name is compliant."""
        if not facts.name:
            return None
        return self._dispatch[category](facts)

    def _evaluate_interior(self, facts: SymbolFacts) -> Optional[ViolationRule]:
        if has_interior_underscore(facts.name):
            return ViolationRule.INTERIOR_UNDERSCORE
        return None

    def _evaluate_static_marked(self, facts: SymbolFacts) -> Optional[ViolationRule]:
        remainder = facts.name[len(STATIC_MARKER):]
        if "_" in remainder:
            return ViolationRule.STATIC_PREFIX_INTERIOR_UNDERSCORE
        return None

    def _evaluate_scoped_local(self, facts: SymbolFacts) -> Optional[ViolationRule]:
        if facts.name.startswith(STATIC_MARKER):
            return self._evaluate_static_marked(facts)
        return self._evaluate_interior(facts)

    def _evaluate_method(self, facts: SymbolFacts) -> Optional[ViolationRule]:
        allow_list = self._policy.method_prefixes
        name = facts.name

        prefix = allow_list.match_exact(name)
        if prefix is not None:
            remainder = name[len(prefix):]
            if remainder[:1].islower():
                return ViolationRule.ALLOWED_METHOD_PREFIX_CASING
            if "_" in remainder:
                return ViolationRule.ALLOWED_METHOD_PREFIX_UNDERSCORE
            return None

        if allow_list.match_fuzzy(name) is not None:
            return ViolationRule.MISSING_ALLOWED_METHOD_PREFIX
        return self._evaluate_interior(facts)

    def _evaluate_typed_field(self, facts: SymbolFacts) -> Optional[ViolationRule]:
        if not facts.declared_type_name:
            # Field record without a declared type: no applicable rule.
            return None
        resolved = self._policy.prefixes.resolve(facts.declared_type_name, facts.accessibility)
        if resolved is None:
            return self._evaluate_interior(facts)

        name = facts.name
        expected = resolved.expected_for(facts.accessibility)
        if name.startswith(expected) and "_" not in name[len(expected):]:
            return None
        if facts.accessibility is Accessibility.PUBLIC and self._tolerated_public(name, expected):
            return None
        return ViolationRule.FIELD_PREFIX_MISMATCH

    @staticmethod
    def _tolerated_public(name: str, expected: str) -> bool:
        """Public names containing the prefix (any case) and no other underscore pass."""
        position = name.lower().find(expected.lower())
        if position < 0:
            return False
        rest = name[:position] + name[position + len(expected):]
        return "_" not in rest
