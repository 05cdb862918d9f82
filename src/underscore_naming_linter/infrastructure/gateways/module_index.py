"""Resolved view of one parsed module: scopes, positions and parents from libcst metadata."""

from pathlib import Path
from typing import Iterator, Optional

import libcst as cst
from libcst.metadata import (
    Assignment,
    ClassScope,
    MetadataWrapper,
    ParentNodeProvider,
    PositionProvider,
    Scope,
    ScopeProvider,
)

from underscore_naming_linter.infrastructure.gateways.transformers import ReferenceSiteCollector


def dotted_name(node: Optional[cst.CSTNode]) -> Optional[str]:
    """``a.b.c`` for a Name/Attribute chain, None for anything else."""
    if isinstance(node, cst.Name):
        return node.value
    if isinstance(node, cst.Attribute):
        base = dotted_name(node.value)
        return f"{base}.{node.attr.value}" if base else None
    return None


def binding_anchor(node: cst.CSTNode, name: str) -> Optional[cst.Name]:
    """The Name token through which an assignment node binds ``name``."""
    if isinstance(node, cst.Name):
        return node if node.value == name else None
    if isinstance(node, (cst.FunctionDef, cst.ClassDef, cst.Param)):
        return node.name if node.name.value == name else None
    if isinstance(node, (cst.Import, cst.ImportFrom)) and not isinstance(node.names, cst.ImportStar):
        for alias in node.names:
            bound = alias.asname.name if alias.asname is not None else alias.name
            if isinstance(bound, cst.Name) and bound.value == name:
                return bound
    return None


class ModuleIndex:
    """A parsed module together with the libcst metadata the rename resolver needs."""

    def __init__(self, path: str, module: cst.Module) -> None:
        self.path = path
        self.stem = Path(path).stem
        wrapper = MetadataWrapper(module, unsafe_skip_copy=True)
        self.module = wrapper.module
        self.scopes = wrapper.resolve(ScopeProvider)
        self.positions = wrapper.resolve(PositionProvider)
        self.parents = wrapper.resolve(ParentNodeProvider)

    def line(self, node: cst.CSTNode) -> int:
        return self.positions[node].start.line

    def column(self, node: cst.CSTNode) -> int:
        return self.positions[node].start.column

    def parent(self, node: cst.CSTNode) -> Optional[cst.CSTNode]:
        return self.parents.get(node)

    def scope_of(self, node: cst.CSTNode) -> Optional[Scope]:
        return self.scopes.get(node)

    def all_scopes(self) -> list[Scope]:
        unique: dict[int, Scope] = {}
        for scope in self.scopes.values():
            if scope is not None:
                unique.setdefault(id(scope), scope)
        return list(unique.values())

    def class_scope(self, owner: cst.ClassDef) -> Optional[ClassScope]:
        for scope in self.all_scopes():
            if isinstance(scope, ClassScope) and scope.node is owner:
                return scope
        return None

    def sites(self, name: str) -> ReferenceSiteCollector:
        collector = ReferenceSiteCollector(name)
        self.module.visit(collector)
        return collector

    def bindings(self, name: str) -> Iterator[tuple[Scope, Assignment]]:
        """Every (scope, assignment) pair that binds ``name`` in this module."""
        for scope in self.all_scopes():
            for assignment in scope.assignments[name]:
                if isinstance(assignment, Assignment):
                    yield scope, assignment

    def owning_function(self, param: cst.Param) -> Optional[cst.FunctionDef]:
        parameters = self.parent(param)
        function = self.parent(parameters) if parameters is not None else None
        return function if isinstance(function, cst.FunctionDef) else None

    def method_class(self, function: cst.FunctionDef) -> Optional[cst.ClassDef]:
        block = self.parent(function)
        owner = self.parent(block) if block is not None else None
        return owner if isinstance(owner, cst.ClassDef) else None

    def statement_class(self, statement: cst.BaseSmallStatement) -> Optional[cst.ClassDef]:
        """Class whose body directly holds ``statement``."""
        line = self.parent(statement)
        block = self.parent(line) if line is not None else None
        owner = self.parent(block) if block is not None else None
        return owner if isinstance(owner, cst.ClassDef) else None

    def receiver_of(self, param: cst.Param) -> Optional[cst.ClassDef]:
        """Class whose instance (or class object) ``param`` receives as a method's first parameter."""
        function = self.owning_function(param)
        if function is None:
            return None
        positional = [*function.params.posonly_params, *function.params.params]
        if not positional or positional[0] is not param:
            return None
        if any(dotted_name(d.decorator) == "staticmethod" for d in function.decorators):
            return None
        return self.method_class(function)

    def receiver_class(self, value: cst.BaseExpression) -> Optional[cst.ClassDef]:
        """The class of this module that ``value`` denotes: ``self``/``cls`` inside it, or its name."""
        if not isinstance(value, cst.Name):
            return None
        scope = self.scope_of(value)
        if scope is None:
            return None
        for assignment in scope[value.value]:
            if not isinstance(assignment, Assignment):
                continue
            if isinstance(assignment.node, cst.Param):
                owner = self.receiver_of(assignment.node)
                if owner is not None:
                    return owner
            if isinstance(assignment.node, cst.ClassDef):
                return assignment.node
        return None

    def imports_name(self, value: cst.BaseExpression, stem: str, name: str) -> bool:
        """Whether ``value`` is a Name bound by ``from <...stem> import name``."""
        if not isinstance(value, cst.Name):
            return False
        scope = self.scope_of(value)
        if scope is None:
            return False
        for assignment in scope[value.value]:
            statement = getattr(assignment, "node", None)
            if not isinstance(statement, cst.ImportFrom) or not self.from_module(statement, stem):
                continue
            anchor = binding_anchor(statement, value.value)
            for alias in statement.names:
                bound = alias.asname.name if alias.asname is not None else alias.name
                if bound is anchor and dotted_name(alias.name) == name:
                    return True
        return False

    @staticmethod
    def from_module(statement: cst.ImportFrom, stem: str) -> bool:
        if statement.module is None or isinstance(statement.names, cst.ImportStar):
            return False
        module_name = dotted_name(statement.module)
        return module_name is not None and module_name.split(".")[-1] == stem

    def module_aliases(self, sites: ReferenceSiteCollector) -> dict[str, str]:
        """Local names (or dotted paths) that denote an imported module, mapped to its dotted name."""
        aliases: dict[str, str] = {}
        for statement in sites.imports:
            for alias in statement.names:
                full = dotted_name(alias.name)
                if full is None:
                    continue
                if alias.asname is not None and isinstance(alias.asname.name, cst.Name):
                    aliases[alias.asname.name.value] = full
                else:
                    aliases[full] = full
        for statement in sites.import_froms:
            if isinstance(statement.names, cst.ImportStar):
                continue
            for alias in statement.names:
                bound = alias.asname.name if alias.asname is not None else alias.name
                if isinstance(bound, cst.Name) and isinstance(alias.name, cst.Name):
                    aliases[bound.value] = alias.name.value
        return aliases


def nested_in(inner: Scope, outer: Scope) -> bool:
    """Whether ``inner`` is ``outer`` or one of its descendants."""
    current = inner
    while current is not None:
        if current is outer:
            return True
        if current.parent is current:
            return False
        current = current.parent
    return False
