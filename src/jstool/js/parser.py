"""Structural parsing of JavaScript source via tree-sitter.

The tree-sitter JavaScript grammar covers current ECMAScript (optional
chaining, class fields, top-level await) and JSX in a single grammar. The TSX
grammar adds TypeScript syntax on top of that.

tree-sitter never raises on bad input; it marks ERROR and MISSING nodes
instead. `parse` turns the first of those into a `ParseError` so callers deal
with a single failure type.

Nodes carry UTF-8 byte offsets. `SourceTree.range_of` maps them back to
character offsets into the original `str`.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Optional

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser

from jstool.core.errors import ParseError

_parsers: dict[str, Parser] = {}


def _parser(typescript: bool) -> Parser:
    name = "tsx" if typescript else "javascript"
    if name not in _parsers:
        if typescript:
            language = Language(tstypescript.language_tsx())
        else:
            language = Language(tsjavascript.language())
        _parsers[name] = Parser(language)
    return _parsers[name]


class SourceTree:
    """A parsed source: the tree-sitter root node plus the text it came from."""

    def __init__(self, text: str, root: Node) -> None:
        self.text = text
        self.root = root
        self._ascii = text.isascii()
        self._char_starts: Optional[list[int]] = None

    def char_offset(self, byte_offset: int) -> int:
        if self._ascii:
            return byte_offset
        if self._char_starts is None:
            starts = []
            pos = 0
            for ch in self.text:
                starts.append(pos)
                pos += len(ch.encode("utf-8"))
            starts.append(pos)
            self._char_starts = starts
        return bisect_left(self._char_starts, byte_offset)

    def range_of(self, node: Node) -> tuple[int, int]:
        return self.char_offset(node.start_byte), self.char_offset(node.end_byte)

    def text_of(self, node: Node) -> str:
        start, end = self.range_of(node)
        return self.text[start:end]


def parse(code: str, *, typescript: bool = False) -> SourceTree:
    """Parse `code` (JSX always accepted; TypeScript syntax with `typescript=True`).

    Raises:
        ParseError: if the tree contains any syntax error.
    """
    tree = _parser(typescript).parse(code.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        raise ParseError(_describe(first_error(root)))
    return SourceTree(code, root)


def first_error(root: Node) -> Optional[Node]:
    """First ERROR or MISSING node in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _describe(node: Optional[Node]) -> str:
    if node is None:  # pragma: no cover
        return "unknown parse error"
    line = node.start_point[0] + 1
    if node.is_missing:
        return f'Line {line}: Unexpected token, expected "{node.type}"'
    token = node
    while token.child_count:
        token = token.children[0]
    text = (token.text or b"").decode("utf-8", "replace").split("\n", 1)[0][:40]
    return f"Line {line}: Unexpected token {text}".rstrip()


def string_value(node: Optional[Node]) -> Optional[str]:
    """Contents of a string literal node, without the quotes."""
    if node is None or node.type != "string":
        return None
    return (node.text or b"").decode("utf-8")[1:-1]


def require_argument(node: Optional[Node]) -> Optional[str]:
    """Return the string passed to `require(...)`, or None if `node` is not such a call."""
    if node is None or node.type != "call_expression":
        return None
    callee = node.child_by_field_name("function")
    if callee is None or callee.type != "identifier" or callee.text != b"require":
        return None
    args = node.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
        return None
    values = [a for a in args.named_children if a.type != "comment"]
    if not values:
        return None
    return string_value(values[0])


def import_source(node: Optional[Node]) -> Optional[str]:
    """Return the module specifier of an import statement."""
    if node is None or node.type != "import_statement":
        return None
    return string_value(node.child_by_field_name("source"))
