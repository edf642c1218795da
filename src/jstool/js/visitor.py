"""Tree traversal over tree-sitter nodes.

Nodes are classified into a closed set of kinds; every kind has a visitor
method, so dispatch is exhaustive. Traversal is iterative (explicit stack) so
deeply nested bundles do not hit the interpreter's recursion limit, and visits
named nodes in pre-order, which is source order.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, Optional

from tree_sitter import Node


class NodeKind(enum.Enum):
    IMPORT_DECLARATION = "import_statement"
    CALL_EXPRESSION = "call_expression"
    VARIABLE_DECLARATOR = "variable_declarator"
    OTHER = "other"


_KINDS_BY_TYPE = {k.value: k for k in NodeKind if k is not NodeKind.OTHER}

# Node types whose children form a statement list.
LIST_PARENTS = frozenset({"program", "statement_block", "switch_case", "switch_default"})


def kind_of(node: Node) -> NodeKind:
    return _KINDS_BY_TYPE.get(node.type, NodeKind.OTHER)


def is_statement(node: Node) -> bool:
    t = node.type
    return t.endswith("_statement") or t.endswith("_declaration")


@dataclass(frozen=True)
class NodePath:
    """A node together with its position in the tree.

    `key` is the grammar field name under the parent ("" for unnamed
    positions); `index` counts the parent's named children.
    """

    node: Node
    parent: Optional["NodePath"] = None
    key: str = ""
    index: Optional[int] = None

    @property
    def kind(self) -> NodeKind:
        return kind_of(self.node)

    @property
    def in_list(self) -> bool:
        """True if the node is an element of a statement list (e.g. a block body)."""
        return self.parent is not None and self.parent.node.type in LIST_PARENTS

    def statement_parent(self) -> Optional["NodePath"]:
        """Nearest enclosing statement, including this node itself."""
        p: Optional[NodePath] = self
        while p is not None:
            if is_statement(p.node):
                return p
            p = p.parent
        return None


def _children(node: Node) -> Iterator[tuple[str, int, Node]]:
    named = 0
    for i, child in enumerate(node.children):
        if not child.is_named:
            continue
        yield node.field_name_for_child(i) or "", named, child
        named += 1


class Visitor:
    """Base visitor; override the methods for the kinds of interest."""

    def visit_import_declaration(self, path: NodePath) -> None:
        pass

    def visit_call_expression(self, path: NodePath) -> None:
        pass

    def visit_variable_declarator(self, path: NodePath) -> None:
        pass

    def visit_other(self, path: NodePath) -> None:
        pass


_DISPATCH = {
    NodeKind.IMPORT_DECLARATION: "visit_import_declaration",
    NodeKind.CALL_EXPRESSION: "visit_call_expression",
    NodeKind.VARIABLE_DECLARATOR: "visit_variable_declarator",
    NodeKind.OTHER: "visit_other",
}


def walk(root: Node) -> Iterator[NodePath]:
    """Yield a NodePath for every named node under (and including) `root`, in pre-order."""
    stack: list[NodePath] = [NodePath(root)]
    while stack:
        path = stack.pop()
        yield path
        children = [NodePath(child, path, key, index) for key, index, child in _children(path.node)]
        stack.extend(reversed(children))


def traverse(root: Node, visitor: Visitor) -> None:
    for path in walk(root):
        getattr(visitor, _DISPATCH[path.kind])(path)
