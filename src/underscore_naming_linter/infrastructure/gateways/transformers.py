"""LibCST transformers and visitors for identifier renames."""

from typing import TypedDict

import libcst as cst

# Builtins that reach an attribute through a string literal.
DYNAMIC_LOOKUP_FUNCTIONS = frozenset({"getattr", "setattr", "hasattr", "delattr"})


class RenameContext(TypedDict):
    """Context for RenameIdentifierTransformer."""

    new_name: str
    targets: frozenset[int]


class RenameIdentifierTransformer(cst.CSTTransformer):
    """
    Rename exactly the Name nodes listed in ``targets`` (by node identity).

    Callers resolve which tokens belong to the symbol; other tokens with the
    same text, strings and comments are untouched.
    """

    def __init__(self, context: RenameContext) -> None:
        super().__init__()
        self.new_name = context["new_name"]
        self.targets = context["targets"]
        self.renamed: int = 0

    def leave_Name(self, original_node: cst.Name, updated_node: cst.Name) -> cst.Name:
        if id(original_node) not in self.targets:
            return updated_node
        self.renamed += 1
        return updated_node.with_changes(value=self.new_name)


class ReferenceSiteCollector(cst.CSTVisitor):
    """
    Collect the places where ``name`` appears as a token.

    ``names`` holds plain identifier tokens, ``attributes`` the ``x.name``
    accesses and ``keywords`` the ``name=`` call arguments. Import statements
    are kept whole in ``imports``/``import_froms`` regardless of ``name``.
    """

    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name
        self.names: list[cst.Name] = []
        self.attributes: list[cst.Attribute] = []
        self.keywords: list[cst.Arg] = []
        self.imports: list[cst.Import] = []
        self.import_froms: list[cst.ImportFrom] = []

    def visit_Name(self, node: cst.Name) -> None:
        if node.value == self.name:
            self.names.append(node)

    def visit_Attribute(self, node: cst.Attribute) -> bool:
        if node.attr.value == self.name:
            self.attributes.append(node)
        node.value.visit(self)
        return False

    def visit_Arg(self, node: cst.Arg) -> bool:
        if node.keyword is not None and node.keyword.value == self.name:
            self.keywords.append(node)
        node.value.visit(self)
        return False

    def visit_Import(self, node: cst.Import) -> bool:
        self.imports.append(node)
        return False

    def visit_ImportFrom(self, node: cst.ImportFrom) -> bool:
        self.import_froms.append(node)
        return False


class DynamicLookupCollector(cst.CSTVisitor):
    """Collect attribute names passed as string literals to getattr/setattr/hasattr/delattr."""

    def __init__(self) -> None:
        super().__init__()
        self.names: set[str] = set()

    def visit_Call(self, node: cst.Call) -> None:
        if not isinstance(node.func, cst.Name) or node.func.value not in DYNAMIC_LOOKUP_FUNCTIONS:
            return
        if len(node.args) < 2:
            return
        literal = node.args[1].value
        if isinstance(literal, cst.SimpleString):
            value = literal.evaluated_value
            if isinstance(value, str):
                self.names.add(value)
