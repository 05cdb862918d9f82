"""LibCST based Rename Gateway."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import libcst as cst
from libcst.metadata import Access, Assignment, ClassScope, GlobalScope, Scope

from underscore_naming_linter.domain.entities import RenameOutcome, RenameProposal
from underscore_naming_linter.domain.protocols import RenameDispatcherProtocol
from underscore_naming_linter.infrastructure.gateways.module_index import (
    ModuleIndex,
    binding_anchor,
    dotted_name,
    nested_in,
)
from underscore_naming_linter.infrastructure.gateways.transformers import (
    DynamicLookupCollector,
    RenameIdentifierTransformer,
)

logger = logging.getLogger(__name__)

Targets = dict[str, list[cst.Name]]


def _normalize(path: str) -> str:
    return str(Path(path).resolve())


def _proposal_key(proposal: RenameProposal) -> tuple[str, str, str, int, int]:
    location = proposal.location
    return (
        proposal.old_name,
        proposal.new_name,
        _normalize(location.path),
        location.line,
        location.column,
    )


class RenameBlocked(Exception):
    """A rename cannot be applied without risking a broken reference."""


@dataclass(frozen=True)
class Declaration:
    """The binding a proposal points at, in its declaring module."""

    index: ModuleIndex
    anchor: cst.Name
    scope: Optional[Scope] = None
    owner: Optional[cst.ClassDef] = None
    is_field: bool = False
    parameter: Optional[cst.Param] = None


class LibCSTRenameGateway(RenameDispatcherProtocol):
    """
    Rename dispatcher for Python sources.

    Each proposal is one transaction over the whole file set: the declared
    binding and every reference that resolves to it are rewritten, or
    nothing is. Local names follow libcst scope analysis; fields and
    methods follow ``self.``/``cls.``/class-qualified attribute accesses.
    Any same-named keyword argument or attribute whose target cannot be
    resolved blocks the transaction. Proposals run in sorted order so a
    batch is deterministic; files are written once at the end.
    """

    def __init__(self) -> None:
        self._indexes: dict[str, ModuleIndex] = {}

    def apply_all(
        self, file_paths: list[str], proposals: list[RenameProposal]
    ) -> list[RenameOutcome]:
        """Apply all proposals to ``file_paths``. Returns one outcome per proposal, in input order."""
        originals, modules, unparsable = self._load(file_paths)
        self._indexes = {}

        declared: dict[tuple[str, int, str], set[str]] = defaultdict(set)
        for proposal in proposals:
            path, line = _normalize(proposal.location.path), proposal.location.line
            declared[(path, line, proposal.old_name)].add(proposal.new_name)

        results: dict[tuple, tuple[bool, Optional[str], tuple[str, ...]]] = {}
        applied_pairs: set[tuple[str, str]] = set()
        for proposal in sorted(proposals, key=_proposal_key):
            key = _proposal_key(proposal)
            if key in results:
                continue
            try:
                changed = self._apply_one(proposal, declared, modules, unparsable, applied_pairs)
            except RenameBlocked as exc:
                results[key] = (False, str(exc), ())
                continue
            applied_pairs.add((proposal.old_name, proposal.new_name))
            results[key] = (True, None, changed)

        failed_writes = self._write(originals, modules)

        outcomes: list[RenameOutcome] = []
        for proposal in proposals:
            applied, reason, changed = results[_proposal_key(proposal)]
            broken = [path for path in changed if path in failed_writes]
            if applied and broken:
                applied, reason = False, f"could not write {', '.join(broken)}"
            outcomes.append(
                RenameOutcome(proposal=proposal, applied=applied, reason=reason, files_changed=changed)
            )
        return outcomes

    def _load(
        self, file_paths: list[str]
    ) -> tuple[dict[str, str], dict[str, cst.Module], dict[str, Optional[str]]]:
        """Parse every file. Unparsable files map to their raw text (None if unreadable)."""
        originals: dict[str, str] = {}
        modules: dict[str, cst.Module] = {}
        unparsable: dict[str, Optional[str]] = {}
        for path in sorted({_normalize(p) for p in file_paths}):
            try:
                with open(path, encoding="utf-8") as f:
                    source = f.read()
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Cannot read %s: %s", path, exc)
                unparsable[path] = None
                continue
            try:
                modules[path] = cst.parse_module(source)
                originals[path] = source
            except cst.ParserSyntaxError as exc:
                logger.warning("Cannot parse %s: %s", path, exc.message)
                unparsable[path] = source
        return originals, modules, unparsable

    def _apply_one(
        self,
        proposal: RenameProposal,
        declared: dict[tuple[str, int, str], set[str]],
        modules: dict[str, cst.Module],
        unparsable: dict[str, Optional[str]],
        applied_pairs: set[tuple[str, str]],
    ) -> tuple[str, ...]:
        """Rename one declaration in ``modules``. Returns the changed paths or raises RenameBlocked."""
        old_name, new_name = proposal.old_name, proposal.new_name
        path, line = _normalize(proposal.location.path), proposal.location.line

        new_names = declared[(path, line, old_name)]
        if len(new_names) > 1:
            raise RenameBlocked(
                f"conflicting new names proposed for '{old_name}': {', '.join(sorted(new_names))}"
            )
        for other, raw in sorted(unparsable.items()):
            if raw is None or old_name in raw:
                raise RenameBlocked(f"cannot resolve references in unparsable file {other}")
        if path not in modules:
            raise RenameBlocked(f"declaration file not in the project: {path}")

        indexes = self._refresh(modules)
        for other, index in indexes.items():
            lookups = DynamicLookupCollector()
            index.module.visit(lookups)
            if old_name in lookups.names:
                raise RenameBlocked(f"'{old_name}' is referenced via dynamic lookup in {other}")

        declaration = self._locate(indexes[path], old_name, line)
        if declaration is None:
            # An earlier transaction in this batch already renamed this binding
            # (a property setter shares its getter's name).
            if (old_name, new_name) in applied_pairs and self._locate(indexes[path], new_name, line):
                return ()
            raise RenameBlocked(f"declaration of '{old_name}' not found in {path}")

        if declaration.owner is not None:
            targets = self._member_targets(declaration, old_name, new_name, indexes)
        else:
            targets = self._binding_targets(declaration, old_name, new_name, indexes)

        changed: list[str] = []
        for target_path, names in sorted(targets.items()):
            if not names:
                continue
            transformer = RenameIdentifierTransformer(
                {"new_name": new_name, "targets": frozenset(id(name) for name in names)}
            )
            modules[target_path] = indexes[target_path].module.visit(transformer)
            changed.append(target_path)
        return tuple(changed)

    def _refresh(self, modules: dict[str, cst.Module]) -> dict[str, ModuleIndex]:
        """Indexes for ``modules``, re-resolving only the modules an earlier transaction rewrote."""
        for path, module in sorted(modules.items()):
            cached = self._indexes.get(path)
            if cached is None or cached.module is not module:
                self._indexes[path] = ModuleIndex(path, module)
        return {path: self._indexes[path] for path in sorted(modules)}

    def _locate(self, index: ModuleIndex, name: str, line: int) -> Optional[Declaration]:
        """Find the binding of ``name`` reported at ``line``."""
        candidates: list[tuple[int, Scope, Assignment, cst.Name]] = []
        for scope, assignment in index.bindings(name):
            anchor = binding_anchor(assignment.node, name)
            if anchor is None:
                continue
            if index.line(anchor) == line or self._signature_line(index, assignment.node) == line:
                candidates.append((index.column(anchor), scope, assignment, anchor))
        if candidates:
            _, scope, assignment, anchor = min(candidates, key=lambda candidate: candidate[0])
            if isinstance(scope, ClassScope):
                return Declaration(
                    index,
                    anchor,
                    scope=scope,
                    owner=scope.node,
                    is_field=not isinstance(assignment.node, cst.FunctionDef),
                )
            parameter = assignment.node if isinstance(assignment.node, cst.Param) else None
            return Declaration(index, anchor, scope=scope, parameter=parameter)

        sites = index.sites(name)
        for name_node in sites.names:
            statement = index.parent(name_node)
            if index.line(name_node) != line or not isinstance(statement, cst.AnnAssign):
                continue
            owner = index.statement_class(statement)
            if statement.target is name_node and owner is not None:
                return Declaration(index, name_node, owner=owner, is_field=True)
        for attribute in sites.attributes:
            if index.line(attribute) != line or not self._is_assign_target(index, attribute):
                continue
            owner = index.receiver_class(attribute.value)
            if owner is not None:
                return Declaration(index, attribute.attr, owner=owner, is_field=True)
        return None

    @staticmethod
    def _signature_line(index: ModuleIndex, node: cst.CSTNode) -> Optional[int]:
        """Line of the owning ``def`` for a parameter; ``*args``/``**kwargs`` are reported there."""
        if not isinstance(node, cst.Param):
            return None
        function = index.owning_function(node)
        return index.line(function.name) if function is not None else None

    @staticmethod
    def _is_assign_target(index: ModuleIndex, node: cst.CSTNode) -> bool:
        child, parent = node, index.parent(node)
        while isinstance(parent, (cst.Element, cst.StarredElement, cst.Tuple, cst.List)):
            child, parent = parent, index.parent(parent)
        if isinstance(parent, (cst.AssignTarget, cst.AnnAssign, cst.AugAssign)):
            return parent.target is child
        return False

    def _reference(self, index: ModuleIndex, access: Access, name: str) -> Optional[cst.Name]:
        """The Name token of a scope access, None for tokens that are not references."""
        node = access.node
        parent = index.parent(node)
        if isinstance(parent, cst.Arg) and parent.keyword is node:
            return None
        if isinstance(parent, cst.Attribute) and parent.attr is node:
            return None
        if isinstance(node, cst.Name) and node.value == name:
            return node
        raise RenameBlocked(
            f"reference to '{name}' at {index.path}:{index.line(node)} cannot be resolved"
        )

    def _binding_references(
        self, index: ModuleIndex, assignments: list[Assignment], name: str
    ) -> list[cst.Name]:
        names: list[cst.Name] = []
        for assignment in assignments:
            anchor = binding_anchor(assignment.node, name)
            if anchor is None:
                raise RenameBlocked(
                    f"binding of '{name}' at {index.path}:{index.line(assignment.node)} cannot be renamed"
                )
            names.append(anchor)
            for access in assignment.references:
                reference = self._reference(index, access, name)
                if reference is not None:
                    names.append(reference)
        return names

    def _binding_targets(
        self, declaration: Declaration, old_name: str, new_name: str, indexes: dict[str, ModuleIndex]
    ) -> Targets:
        """Targets for a module, function or comprehension binding and its references."""
        home, scope = declaration.index, declaration.scope
        if self._taken(home, scope, new_name):
            raise RenameBlocked(f"'{new_name}' already names another symbol in {home.path}")

        assignments = [a for a in scope.assignments[old_name] if isinstance(a, Assignment)]
        targets: Targets = defaultdict(list)
        targets[home.path].extend(self._binding_references(home, assignments, old_name))
        if declaration.parameter is not None:
            self._keyword_targets(declaration, old_name, indexes, targets)
        if isinstance(scope, GlobalScope):
            self._import_targets(declaration, old_name, new_name, indexes, targets)
        return targets

    @staticmethod
    def _taken(home: ModuleIndex, scope: Scope, new_name: str) -> bool:
        """``new_name`` is visible from ``scope`` or used anywhere inside it."""
        if new_name in scope:
            return True
        for node in home.sites(new_name).names:
            node_scope = home.scope_of(node)
            if node_scope is not None and nested_in(node_scope, scope):
                return True
        return False

    def _keyword_targets(
        self, declaration: Declaration, old_name: str, indexes: dict[str, ModuleIndex], targets: Targets
    ) -> None:
        """Rename ``old_name=`` in calls that resolve to the parameter's function; block on the rest."""
        home, param = declaration.index, declaration.parameter
        function = home.owning_function(param)
        if function is None or param is function.params.star_arg or param is function.params.star_kwarg:
            return
        callees = self._callees(declaration, function)
        for path, index in indexes.items():
            for arg in index.sites(old_name).keywords:
                call = index.parent(arg)
                if path == home.path and isinstance(call, cst.Call) and id(call.func) in callees:
                    targets[path].append(arg.keyword)
                    continue
                raise RenameBlocked(
                    f"keyword argument '{old_name}=' at {path}:{index.line(arg)} cannot be resolved"
                )

    @staticmethod
    def _callees(declaration: Declaration, function: cst.FunctionDef) -> set[int]:
        """Identities of the expressions in the declaring module that name ``function``."""
        home = declaration.index
        owner = home.method_class(function)
        if owner is not None:
            return {
                id(attribute)
                for attribute in home.sites(function.name.value).attributes
                if home.receiver_class(attribute.value) is owner
            }
        callees: set[int] = set()
        outer = declaration.scope.parent
        for assignment in outer.assignments[function.name.value]:
            if isinstance(assignment, Assignment) and assignment.node is function:
                callees.update(id(access.node) for access in assignment.references)
        return callees

    def _import_targets(
        self,
        declaration: Declaration,
        old_name: str,
        new_name: str,
        indexes: dict[str, ModuleIndex],
        targets: Targets,
    ) -> None:
        """Follow ``from <module> import name`` and ``module.name`` into the other files."""
        stem = declaration.index.stem
        for path, index in indexes.items():
            if path == declaration.index.path:
                continue
            sites = index.sites(old_name)
            for statement in sites.import_froms:
                if not index.from_module(statement, stem):
                    continue
                for alias in statement.names:
                    if not isinstance(alias.name, cst.Name) or alias.name.value != old_name:
                        continue
                    targets[path].append(alias.name)
                    if alias.asname is None:
                        targets[path].extend(
                            self._imported_references(index, statement, old_name, new_name)
                        )
            aliases = index.module_aliases(sites)
            for attribute in sites.attributes:
                module_name = aliases.get(dotted_name(attribute.value) or "")
                if module_name and module_name.split(".")[-1] == stem:
                    targets[path].append(attribute.attr)

    def _imported_references(
        self, index: ModuleIndex, statement: cst.ImportFrom, old_name: str, new_name: str
    ) -> list[cst.Name]:
        scope = index.scope_of(statement)
        if scope is None:
            return []
        if new_name in scope:
            raise RenameBlocked(f"'{new_name}' already names another symbol in {index.path}")
        references: list[cst.Name] = []
        for assignment in scope.assignments[old_name]:
            if not isinstance(assignment, Assignment) or assignment.node is not statement:
                continue
            for access in assignment.references:
                reference = self._reference(index, access, old_name)
                if reference is not None:
                    references.append(reference)
        return references

    def _member_targets(
        self, declaration: Declaration, old_name: str, new_name: str, indexes: dict[str, ModuleIndex]
    ) -> Targets:
        """Targets for a field or method: class-body bindings plus resolved attribute accesses."""
        home, owner = declaration.index, declaration.owner
        targets: Targets = defaultdict(list)
        targets[home.path].append(declaration.anchor)

        class_scope = home.class_scope(owner)
        if class_scope is not None:
            if class_scope.assignments[new_name]:
                raise RenameBlocked(
                    f"'{new_name}' already names another member of {owner.name.value} in {home.path}"
                )
            assignments = [a for a in class_scope.assignments[old_name] if isinstance(a, Assignment)]
            targets[home.path].extend(self._binding_references(home, assignments, old_name))

        for path, index in indexes.items():
            for attribute in index.sites(new_name).attributes:
                if self._is_member_access(index, attribute, declaration):
                    raise RenameBlocked(
                        f"'{new_name}' already names another member of {owner.name.value} in {path}"
                    )
            sites = index.sites(old_name)
            for attribute in sites.attributes:
                if not self._is_member_access(index, attribute, declaration):
                    raise RenameBlocked(
                        f"'.{old_name}' at {path}:{index.line(attribute)} is on a receiver "
                        "that cannot be resolved"
                    )
                targets[path].append(attribute.attr)
            if declaration.is_field and sites.keywords:
                raise RenameBlocked(
                    f"keyword argument '{old_name}=' at {path}:{index.line(sites.keywords[0])} "
                    "cannot be resolved"
                )
        return targets

    @staticmethod
    def _is_member_access(index: ModuleIndex, attribute: cst.Attribute, declaration: Declaration) -> bool:
        if index is declaration.index:
            return index.receiver_class(attribute.value) is declaration.owner
        return index.imports_name(attribute.value, declaration.index.stem, declaration.owner.name.value)

    def _write(self, originals: dict[str, str], modules: dict[str, cst.Module]) -> set[str]:
        """Write modified modules. Returns the paths that failed to write."""
        failed: set[str] = set()
        for path, module in sorted(modules.items()):
            if module.code == originals[path]:
                continue
            try:
                with open(path, "w", encoding="utf-8") as f:
                    f.write(module.code)
            except OSError as exc:
                logger.error("Cannot write %s: %s", path, exc)
                failed.add(path)
        return failed
