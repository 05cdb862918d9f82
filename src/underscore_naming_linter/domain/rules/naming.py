"""Naming convention rule (E9901/E9902/E9903) - detection, diagnostics and rename proposals."""

from typing import Optional

from underscore_naming_linter.domain.constants import (
    FIELD_PREFIX_MSG_ID,
    FIELD_PREFIX_MSG_SYMBOL,
    FIELD_PREFIX_MSG_TEMPLATE,
    HANDLER_PREFIX_MSG_ID,
    HANDLER_PREFIX_MSG_SYMBOL,
    HANDLER_PREFIX_MSG_TEMPLATE,
    UNDERSCORE_MSG_ID,
    UNDERSCORE_MSG_SYMBOL,
    UNDERSCORE_MSG_TEMPLATE,
)
from underscore_naming_linter.domain.entities import (
    Category,
    Diagnostic,
    RenameProposal,
    SymbolFacts,
    ViolationRule,
)
from underscore_naming_linter.domain.policy import DEFAULT_POLICY, NamingPolicy
from underscore_naming_linter.domain.rules import Violation
from underscore_naming_linter.domain.rules.canonicalizer import NameCanonicalizer
from underscore_naming_linter.domain.rules.classifier import SymbolClassifier
from underscore_naming_linter.domain.rules.evaluator import RuleEvaluator

_HANDLER_RULES = (
    ViolationRule.ALLOWED_METHOD_PREFIX_CASING,
    ViolationRule.MISSING_ALLOWED_METHOD_PREFIX,
)


class NamingConventionRule:
    """
    Rule for E9901-E9903: underscore and prefix naming policy.

    Chains classifier -> evaluator -> canonicalizer. Every step is pure, so a
    single instance is safe to share between checkers and threads.
    """

    code: str = UNDERSCORE_MSG_ID
    description: str = (
        "Identifiers must not contain interior underscores; component fields "
        "and handler methods must use their allow-listed prefixes."
    )
    fix_type: str = "rename"

    def __init__(self, policy: NamingPolicy = DEFAULT_POLICY) -> None:
        self._classifier = SymbolClassifier()
        self._evaluator = RuleEvaluator(policy)
        self._canonicalizer = NameCanonicalizer(policy)
        self._policy = policy

    def check(self, facts: SymbolFacts) -> Optional[Violation]:
        """Classify and evaluate one symbol. Returns at most one violation."""
        category = self._classifier.classify(facts)
        if category is Category.PROPERTY_ACCESSOR:
            return None
        rule = self._evaluator.evaluate(facts, category)
        if rule is None:
            return None
        return Violation(
            facts=facts,
            category=category,
            rule=rule,
            expected_prefix=self._expected_prefix(facts, rule),
        )

    def canonical_name(self, violation: Violation) -> Optional[str]:
        """The compliant replacement name, or None when no fix is available."""
        return self._canonicalizer.repair(violation.facts, violation.rule)

    def fix(self, violation: Violation) -> Optional[RenameProposal]:
        """Return a rename proposal ONLY if the canonical name is computable."""
        new_name = self.canonical_name(violation)
        if new_name is None:
            return None
        return RenameProposal(
            old_name=violation.facts.name,
            new_name=new_name,
            location=violation.facts.location,
            rule=violation.rule,
        )

    def to_diagnostic(self, violation: Violation) -> Diagnostic:
        """Build the reported diagnostic; message names the offending identifier."""
        msg_id, symbol, args = self.message_for(violation)
        return Diagnostic(
            rule_id=msg_id,
            symbol=symbol,
            message=self._template(msg_id) % args,
            location=violation.facts.location,
            rule=violation.rule,
            fix_available=self.canonical_name(violation) is not None,
        )

    def message_for(self, violation: Violation) -> tuple[str, str, tuple[str, ...]]:
        """(message id, message symbol, template args) for a violation."""
        name = violation.facts.name
        if violation.rule is ViolationRule.FIELD_PREFIX_MISMATCH:
            return FIELD_PREFIX_MSG_ID, FIELD_PREFIX_MSG_SYMBOL, (name, violation.expected_prefix or "")
        if violation.rule in _HANDLER_RULES:
            return HANDLER_PREFIX_MSG_ID, HANDLER_PREFIX_MSG_SYMBOL, (name, violation.expected_prefix or "")
        return UNDERSCORE_MSG_ID, UNDERSCORE_MSG_SYMBOL, (name,)

    def get_fix_instructions(self, violation: Violation) -> str:
        """Provide human instructions for a manual fix."""
        new_name = self.canonical_name(violation)
        if new_name is None:
            return (
                f"Rename '{violation.facts.name}' by hand: no compliant name can be "
                "derived automatically."
            )
        return f"Rename '{violation.facts.name}' to '{new_name}' and update every reference."

    def _expected_prefix(self, facts: SymbolFacts, rule: ViolationRule) -> Optional[str]:
        if rule is ViolationRule.FIELD_PREFIX_MISMATCH:
            resolved = self._policy.prefixes.resolve(facts.declared_type_name, facts.accessibility)
            return resolved.expected_for(facts.accessibility) if resolved else None
        if rule in (ViolationRule.ALLOWED_METHOD_PREFIX_CASING, ViolationRule.ALLOWED_METHOD_PREFIX_UNDERSCORE):
            return self._policy.method_prefixes.match_exact(facts.name)
        if rule is ViolationRule.MISSING_ALLOWED_METHOD_PREFIX:
            return self._policy.method_prefixes.match_fuzzy(facts.name)
        return None

    @staticmethod
    def _template(msg_id: str) -> str:
        return {
            UNDERSCORE_MSG_ID: UNDERSCORE_MSG_TEMPLATE,
            FIELD_PREFIX_MSG_ID: FIELD_PREFIX_MSG_TEMPLATE,
            HANDLER_PREFIX_MSG_ID: HANDLER_PREFIX_MSG_TEMPLATE,
        }[msg_id]
