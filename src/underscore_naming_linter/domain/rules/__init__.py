"""Domain models for naming rules and violations."""

from dataclasses import dataclass
from typing import Optional, Protocol

from underscore_naming_linter.domain.entities import (
    Category,
    Diagnostic,
    RenameProposal,
    SymbolFacts,
    ViolationRule,
)


@dataclass(frozen=True)
class Violation:
    """A naming violation: which sub-rule fired for which symbol."""

    facts: SymbolFacts
    category: Category
    rule: ViolationRule
    expected_prefix: Optional[str] = None
    """Literal prefix the name should start with (field and handler rules only)."""


class BaseRule(Protocol):
    """A naming rule that can report and repair violations."""

    code: str
    description: str

    def check(self, facts: SymbolFacts) -> Optional[Violation]:
        """Decide whether the symbol violates the rule."""
        ...

    def fix(self, violation: Violation) -> Optional[RenameProposal]:
        """
        Return a rename ONLY if the canonical name is computable.

        Returns None when the canonicalizer declines (e.g. empty stem).
        """
        ...

    def to_diagnostic(self, violation: Violation) -> Diagnostic:
        """Build the reported diagnostic for a violation."""
        ...
