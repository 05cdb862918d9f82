"""Symbol facts, categories, rules and fix results shared across layers."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class SymbolKind(Enum):
    """Kinds of named program entities supplied by the host front end."""
    TYPE_DECL = "type"
    METHOD = "method"
    FIELD = "field"
    PROPERTY = "property"
    PARAMETER = "parameter"
    LOCAL_VARIABLE = "local"
    LOOP_VARIABLE = "loop_variable"


class Accessibility(Enum):
    """Declared accessibility of a symbol."""
    PUBLIC = "public"
    NON_PUBLIC = "non_public"


class Category(Enum):
    """Rule category a symbol is classified into before evaluation."""
    PROPERTY_ACCESSOR = "property_accessor"
    ALLOW_LISTABLE_METHOD = "allow_listable_method"
    TYPED_FIELD = "typed_field"
    STATIC_MARKED_SYMBOL = "static_marked_symbol"
    GENERIC_SYMBOL = "generic_symbol"
    SCOPED_LOCAL = "scoped_local"
    LOOP_VARIABLE = "loop_variable"


class ViolationRule(Enum):
    """The sub-rule that fired for a violating symbol. Exactly one per symbol."""
    INTERIOR_UNDERSCORE = "interior_underscore"
    STATIC_PREFIX_INTERIOR_UNDERSCORE = "static_prefix_interior_underscore"
    ALLOWED_METHOD_PREFIX_CASING = "allowed_method_prefix_casing"
    ALLOWED_METHOD_PREFIX_UNDERSCORE = "allowed_method_prefix_underscore"
    MISSING_ALLOWED_METHOD_PREFIX = "missing_allowed_method_prefix"
    FIELD_PREFIX_MISMATCH = "field_prefix_mismatch"


@dataclass(frozen=True)
class SourceLocation:
    """Declaration site of a symbol. Opaque to the rule engine."""
    path: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class SymbolFacts:
    """
    Already-resolved facts about one analyzed symbol.

    ``declared_type_name`` is only meaningful for fields. ``is_reference_type``
    is False when the declared type is a primitive/value type.
    """
    kind: SymbolKind
    name: str
    location: SourceLocation
    declared_type_name: Optional[str] = None
    accessibility: Accessibility = Accessibility.PUBLIC
    is_property_accessor: bool = False
    is_reference_type: bool = True

    def with_name(self, name: str) -> "SymbolFacts":
        """Return the same facts under a different identifier."""
        return replace(self, name=name)


@dataclass(frozen=True)
class Diagnostic:
    """A reported naming violation at a declaration site."""
    rule_id: str
    symbol: str
    message: str
    location: SourceLocation
    rule: ViolationRule
    fix_available: bool
    severity: str = "error"

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for reporters."""
        return {
            "rule_id": self.rule_id,
            "symbol": self.symbol,
            "message": self.message,
            "severity": self.severity,
            "location": str(self.location),
            "rule": self.rule.value,
            "fix_available": self.fix_available,
        }


@dataclass(frozen=True)
class RenameProposal:
    """A single (old name, new name) pair submitted to the rename dispatcher."""
    old_name: str
    new_name: str
    location: SourceLocation
    rule: ViolationRule


@dataclass(frozen=True)
class RenameOutcome:
    """Result of applying one rename proposal. Nothing is written when applied is False."""
    proposal: RenameProposal
    applied: bool
    reason: Optional[str] = None
    files_changed: tuple[str, ...] = ()


@dataclass(frozen=True)
class FixReport:
    """Summary of an apply-all run."""
    outcomes: tuple[RenameOutcome, ...] = ()
    declined: tuple[Diagnostic, ...] = ()

    @property
    def applied(self) -> list[RenameOutcome]:
        return [o for o in self.outcomes if o.applied]

    @property
    def failed(self) -> list[RenameOutcome]:
        return [o for o in self.outcomes if not o.applied]

    def files_changed(self) -> list[str]:
        """Sorted, de-duplicated paths touched by applied renames."""
        return sorted({path for o in self.applied for path in o.files_changed})
