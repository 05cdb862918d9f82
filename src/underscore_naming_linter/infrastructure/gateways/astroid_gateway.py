"""Symbol facts gateway: maps astroid declarations onto SymbolFacts."""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

import astroid  # type: ignore[import-untyped]

from underscore_naming_linter.domain.constants import FALLBACK_TYPE_NAME, VALUE_TYPE_NAMES
from underscore_naming_linter.domain.entities import (
    Accessibility,
    SourceLocation,
    SymbolFacts,
    SymbolKind,
)
from underscore_naming_linter.domain.protocols import SymbolFactsProtocol

logger = logging.getLogger(__name__)

NodeFacts = tuple[astroid.nodes.NodeNG, SymbolFacts]

# Subscript wrappers whose first argument is the real declared type.
_TRANSPARENT_WRAPPERS = frozenset({"Optional", "ClassVar", "Final", "Annotated"})
_UNION_WRAPPER = "Union"
_PROPERTY_DECORATORS = frozenset({"property", "cached_property"})
_ACCESSOR_DECORATORS = frozenset({"setter", "getter", "deleter"})


def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def accessibility_of(name: str) -> Accessibility:
    """Python convention: a leading underscore means non-public."""
    return Accessibility.NON_PUBLIC if name.startswith("_") else Accessibility.PUBLIC


def _is_none(node: astroid.nodes.NodeNG) -> bool:
    return isinstance(node, astroid.nodes.Const) and node.value is None


def _preferred_name(names: list[str]) -> Optional[str]:
    """First class-type name of a union, else its first member."""
    for name in names:
        if name not in VALUE_TYPE_NAMES:
            return name
    return names[0] if names else None


def _union_members(annotation: astroid.nodes.NodeNG) -> list[astroid.nodes.NodeNG]:
    if isinstance(annotation, astroid.nodes.BinOp) and annotation.op == "|":
        return _union_members(annotation.left) + _union_members(annotation.right)
    return [annotation]


def _forward_ref_type_name(text: str) -> Optional[str]:
    head = text.split("[", 1)[0].split(".")[-1]
    if "[" in text and (head in _TRANSPARENT_WRAPPERS or head == _UNION_WRAPPER):
        parts = text.split("[", 1)[1].rstrip("]").split(",")
        if head != _UNION_WRAPPER:
            parts = parts[:1]
    else:
        parts = text.split("|")
    names = [part.strip().split("[", 1)[0].split(".")[-1] for part in parts]
    return _preferred_name([name for name in names if name and name != "None"])


def annotation_type_name(annotation: Optional[astroid.nodes.NodeNG]) -> Optional[str]:
    """
    Bare type name of an annotation, unwrapping Optional/ClassVar/Final/Annotated.

    Unions (``Union[...]``, ``X | Y``) resolve to their first class-type
    member, falling back to the first non-None member.
    """
    if annotation is None:
        return None
    if isinstance(annotation, astroid.nodes.Name):
        return annotation.name
    if isinstance(annotation, astroid.nodes.Attribute):
        return annotation.attrname
    if isinstance(annotation, astroid.nodes.Const) and isinstance(annotation.value, str):
        # String forward reference: "ui.Button" / "Optional[Button]"
        return _forward_ref_type_name(annotation.value.strip())
    if isinstance(annotation, astroid.nodes.Subscript):
        wrapper = annotation_type_name(annotation.value)
        inner = annotation.slice
        members = list(inner.elts) if isinstance(inner, astroid.nodes.Tuple) else [inner]
        members = [member for member in members if not _is_none(member)]
        if wrapper == _UNION_WRAPPER:
            return _preferred_name([n for n in map(annotation_type_name, members) if n])
        if wrapper not in _TRANSPARENT_WRAPPERS:
            return wrapper
        return annotation_type_name(members[0]) if members else None
    if isinstance(annotation, astroid.nodes.BinOp) and annotation.op == "|":
        members = [member for member in _union_members(annotation) if not _is_none(member)]
        return _preferred_name([n for n in map(annotation_type_name, members) if n])
    return None


def inferred_type_name(value: Optional[astroid.nodes.NodeNG]) -> Optional[str]:
    """Type name of the instance a value expression evaluates to, if astroid can tell."""
    if value is None:
        return None
    try:
        inferred = next(value.infer())
    except (astroid.InferenceError, StopIteration):
        return None
    if inferred is astroid.Uninferable or not isinstance(inferred, astroid.bases.Instance):
        return None
    return inferred.pytype().rsplit(".", 1)[-1]


class AstroidSymbolGateway(SymbolFactsProtocol):
    """
    Python front end for the naming rules.

    Emits facts for classes, functions/methods, properties, parameters,
    class and instance fields, function locals bound by a plain assignment,
    and ``for`` loop variables. Dunder names and methods overriding an
    inherited definition are left alone: their names are owned elsewhere.
    """

    def parse_file(self, file_path: str) -> Optional[astroid.nodes.Module]:
        """Parse a file and return the astroid Module node (None when unreadable)."""
        path = Path(file_path)
        try:
            source = path.read_text(encoding="utf-8")
            return astroid.parse(source, module_name=path.stem, path=str(path))
        except (OSError, UnicodeDecodeError, astroid.AstroidSyntaxError) as exc:
            logger.warning("Skipping %s: %s", file_path, exc)
            return None

    def collect_file(self, file_path: str) -> list[SymbolFacts]:
        module = self.parse_file(file_path)
        if module is None:
            return []
        return self.collect_module(module)

    def collect_module(self, module: astroid.nodes.Module) -> list[SymbolFacts]:
        return [facts for _, facts in self.iter_module(module)]

    def iter_module(self, module: astroid.nodes.Module) -> Iterator[NodeFacts]:
        """Every symbol of interest in source order, paired with its declaring node."""
        for node in module.nodes_of_class(
            (astroid.nodes.ClassDef, astroid.nodes.FunctionDef, astroid.nodes.AssignName)
        ):
            if isinstance(node, astroid.nodes.ClassDef):
                yield from self.facts_for_class(node)
            elif isinstance(node, astroid.nodes.FunctionDef):
                yield from self.facts_for_function(node)
            else:
                yield from self.facts_for_assign_name(node)

    def facts_for_class(self, node: astroid.nodes.ClassDef) -> list[NodeFacts]:
        """The class itself, then its class-body fields, then its instance fields."""
        results: list[NodeFacts] = [(node, self._facts(node, node.name, SymbolKind.TYPE_DECL))]
        declared: set[str] = set()

        for statement in node.body:
            if isinstance(statement, astroid.nodes.AnnAssign):
                targets = [statement.target]
                type_name = annotation_type_name(statement.annotation)
            elif isinstance(statement, astroid.nodes.Assign):
                targets = statement.targets
                type_name = inferred_type_name(statement.value)
            else:
                continue
            for target in targets:
                if not isinstance(target, astroid.nodes.AssignName):
                    continue
                if is_dunder(target.name) or target.name in declared:
                    continue
                declared.add(target.name)
                results.append((target, self._field_facts(target, target.name, type_name)))

        for name, attr_nodes in node.instance_attrs.items():
            own_nodes = [attr for attr in attr_nodes if attr.frame().parent is node]
            if is_dunder(name) or name in declared or not own_nodes:
                continue
            declared.add(name)
            first = own_nodes[0]
            results.append((first, self._field_facts(first, name, self._instance_attr_type(first))))
        return results

    def facts_for_function(self, node: astroid.nodes.FunctionDef) -> list[NodeFacts]:
        """The function (method, property or accessor) followed by its parameters."""
        if is_dunder(node.name) or self._overrides_inherited(node):
            return self._parameter_facts(node)

        kind = SymbolKind.METHOD
        is_accessor = False
        for decorator in node.decorators.nodes if node.decorators else []:
            if isinstance(decorator, astroid.nodes.Attribute) and decorator.attrname in _ACCESSOR_DECORATORS:
                is_accessor = True
            elif self._decorator_name(decorator) in _PROPERTY_DECORATORS:
                kind = SymbolKind.PROPERTY

        facts = self._facts(node, node.name, kind, is_property_accessor=is_accessor)
        return [(node, facts), *self._parameter_facts(node)]

    def facts_for_assign_name(self, node: astroid.nodes.AssignName) -> list[NodeFacts]:
        """A function local or loop variable, reported at its first binding only."""
        scope = node.scope()
        if not isinstance(scope, astroid.nodes.FunctionDef):
            return []
        bindings = scope.locals.get(node.name, [])
        if not bindings or bindings[0] is not node:
            return []

        if isinstance(node.parent, (astroid.nodes.Assign, astroid.nodes.AnnAssign)):
            return [(node, self._facts(node, node.name, SymbolKind.LOCAL_VARIABLE))]
        if self._is_loop_target(node):
            return [(node, self._facts(node, node.name, SymbolKind.LOOP_VARIABLE))]
        return []

    def _parameter_facts(self, node: astroid.nodes.FunctionDef) -> list[NodeFacts]:
        arguments = node.args
        positional = list(arguments.posonlyargs or []) + list(arguments.args or [])
        if positional and node.is_method() and node.type in ("method", "classmethod"):
            positional = positional[1:]

        results: list[NodeFacts] = []
        for arg in positional + list(arguments.kwonlyargs or []):
            results.append((arg, self._facts(arg, arg.name, SymbolKind.PARAMETER)))
        for star_name in (arguments.vararg, arguments.kwarg):
            if star_name:
                results.append((node, self._facts(node, star_name, SymbolKind.PARAMETER)))
        return results

    def _field_facts(
        self, node: astroid.nodes.NodeNG, name: str, type_name: Optional[str]
    ) -> SymbolFacts:
        declared = type_name or FALLBACK_TYPE_NAME
        return self._facts(
            node,
            name,
            SymbolKind.FIELD,
            declared_type_name=declared,
            is_reference_type=declared not in VALUE_TYPE_NAMES,
        )

    @staticmethod
    def _facts(
        node: astroid.nodes.NodeNG,
        name: str,
        kind: SymbolKind,
        declared_type_name: Optional[str] = None,
        is_property_accessor: bool = False,
        is_reference_type: bool = True,
    ) -> SymbolFacts:
        location = SourceLocation(
            path=node.root().file or "<unknown>",
            line=node.lineno or 0,
            column=node.col_offset or 0,
        )
        return SymbolFacts(
            kind=kind,
            name=name,
            location=location,
            declared_type_name=declared_type_name,
            accessibility=accessibility_of(name),
            is_property_accessor=is_property_accessor,
            is_reference_type=is_reference_type,
        )

    @staticmethod
    def _instance_attr_type(node: astroid.nodes.AssignAttr) -> Optional[str]:
        parent = node.parent
        if isinstance(parent, astroid.nodes.AnnAssign):
            return annotation_type_name(parent.annotation) or inferred_type_name(parent.value)
        if isinstance(parent, astroid.nodes.Assign):
            return inferred_type_name(parent.value)
        return None

    @staticmethod
    def _decorator_name(decorator: astroid.nodes.NodeNG) -> Optional[str]:
        if isinstance(decorator, astroid.nodes.Name):
            return decorator.name
        if isinstance(decorator, astroid.nodes.Attribute):
            return decorator.attrname
        return None

    @staticmethod
    def _is_loop_target(node: astroid.nodes.AssignName) -> bool:
        child: astroid.nodes.NodeNG = node
        parent = node.parent
        while isinstance(parent, (astroid.nodes.Tuple, astroid.nodes.List, astroid.nodes.Starred)):
            child, parent = parent, parent.parent
        return isinstance(parent, astroid.nodes.For) and parent.target is child

    @staticmethod
    def _overrides_inherited(node: astroid.nodes.FunctionDef) -> bool:
        if not node.is_method():
            return False
        klass = node.parent.frame()
        try:
            return any(node.name in ancestor.locals for ancestor in klass.ancestors())
        except astroid.InferenceError:
            return False
