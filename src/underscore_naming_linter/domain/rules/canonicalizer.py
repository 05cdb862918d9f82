"""Name canonicalizer: computes the single compliant replacement for a violating name."""

from typing import Optional

from underscore_naming_linter.domain.constants import STATIC_MARKER
from underscore_naming_linter.domain.entities import SymbolFacts, ViolationRule
from underscore_naming_linter.domain.policy import NamingPolicy, prefix_stem_pattern


def capitalize_first(text: str) -> str:
    """Upper-case only the first character ('myButton' -> 'MyButton')."""
    return text[:1].upper() + text[1:]


def join_lower_camel(text: str) -> str:
    """Split on underscores; keep the first segment, capitalize the rest ('a_bc_d' -> 'aBcD')."""
    segments = text.split("_")
    return segments[0] + "".join(capitalize_first(segment) for segment in segments[1:])


def strip_interior_underscores(name: str) -> str:
    """Keep first and last character, drop every underscore between them."""
    if len(name) <= 2:
        return name
    return name[0] + name[1:-1].replace("_", "") + name[-1]


class NameCanonicalizer:
    """
    Pure, deterministic repair of violating names.

    ``repair`` returns None when it declines to produce a rename: the stem
    would be empty, or the result would equal the original name.
    """

    def __init__(self, policy: NamingPolicy) -> None:
        self._policy = policy

    def repair(self, facts: SymbolFacts, rule: ViolationRule) -> Optional[str]:
        """Compute the canonical replacement for ``facts.name`` under ``rule``."""
        if rule is ViolationRule.INTERIOR_UNDERSCORE:
            candidate: Optional[str] = strip_interior_underscores(facts.name)
        elif rule is ViolationRule.STATIC_PREFIX_INTERIOR_UNDERSCORE:
            candidate = STATIC_MARKER + facts.name[len(STATIC_MARKER):].replace("_", "")
        elif rule in (
            ViolationRule.ALLOWED_METHOD_PREFIX_CASING,
            ViolationRule.ALLOWED_METHOD_PREFIX_UNDERSCORE,
        ):
            prefix = self._policy.method_prefixes.match_exact(facts.name)
            candidate = self._repair_handler(facts.name, prefix)
        elif rule is ViolationRule.MISSING_ALLOWED_METHOD_PREFIX:
            prefix = self._policy.method_prefixes.match_fuzzy(facts.name)
            candidate = self._repair_handler(facts.name, prefix)
        elif rule is ViolationRule.FIELD_PREFIX_MISMATCH:
            candidate = self._repair_field(facts)
        else:
            raise ValueError(f"Unknown violation rule: {rule}")

        if not candidate or candidate == facts.name:
            return None
        return candidate

    def _repair_handler(self, name: str, prefix: Optional[str]) -> Optional[str]:
        if prefix is None:
            return None
        match = self._policy.method_prefixes.locate(name, prefix)
        if match is None:
            return None
        remainder = join_lower_camel(name[:match.start()] + name[match.end():])
        if not remainder:
            return None
        return prefix + capitalize_first(remainder)

    def _repair_field(self, facts: SymbolFacts) -> Optional[str]:
        resolved = self._policy.prefixes.resolve(facts.declared_type_name, facts.accessibility)
        if resolved is None:
            return None
        without_prefix = prefix_stem_pattern(resolved.stem).sub("", facts.name)
        stem = "".join(capitalize_first(segment) for segment in without_prefix.split("_"))
        if not stem:
            return None
        return resolved.expected_for(facts.accessibility) + stem
