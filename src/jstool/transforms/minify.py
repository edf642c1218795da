"""Minification: tree-driven statement elimination followed by `rjsmin`.

rjsmin strips comments and whitespace but does not understand the program, so
the compress-style steps (debugger removal, console dropping, dead code) are
done first on the syntax tree. Each pass re-parses the output of the previous
one, since removing a branch can expose more dead code.
"""

from __future__ import annotations

import rjsmin
from tree_sitter import Node

from jstool.core.config import DEFAULT_MINIFY, MinifyOptions
from jstool.core.errors import MinifyError, ParseError
from jstool.js import splice
from jstool.js.parser import SourceTree, parse
from jstool.js.visitor import NodePath, walk

_TERMINATORS = frozenset({"return_statement", "throw_statement", "break_statement", "continue_statement"})
_FALSY_LITERALS = {
    "false": {b"false"},
    "null": {b"null"},
    "number": {b"0"},
    "string": {b"''", b'""'},
}
_HOISTED = frozenset({"function_declaration", "generator_function_declaration", "variable_declaration"})


def _is_console_call(node: Node) -> bool:
    if node.type != "expression_statement" or not node.named_children:
        return False
    expr = node.named_children[0]
    if expr.type != "call_expression":
        return False
    callee = expr.child_by_field_name("function")
    if callee is None or callee.type != "member_expression":
        return False
    obj = callee.child_by_field_name("object")
    return obj is not None and obj.type == "identifier" and obj.text == b"console"


def _is_dead_if(node: Node) -> bool:
    if node.type != "if_statement" or node.child_by_field_name("alternative") is not None:
        return False
    test = node.child_by_field_name("condition")
    while test is not None and test.type == "parenthesized_expression" and test.named_child_count == 1:
        test = test.named_children[0]
    return test is not None and test.text in _FALSY_LITERALS.get(test.type, ())


def _statements(block: Node) -> list[Node]:
    return [c for c in block.named_children if c.type != "comment"]


def _drop(tree: SourceTree, path: NodePath) -> splice.Span:
    start, end = tree.range_of(path.node)
    # A statement in a body list can vanish; elsewhere it must leave an empty statement.
    return splice.Span(start, end, "" if path.in_list else ";")


def _unreachable(tree: SourceTree, block: Node) -> list[splice.Span]:
    spans: list[splice.Span] = []
    terminated = False
    for stmt in _statements(block):
        if terminated and stmt.type not in _HOISTED:
            start, end = tree.range_of(stmt)
            spans.append(splice.Span(start, end))
        if stmt.type in _TERMINATORS:
            terminated = True
    return spans


def _collect(tree: SourceTree, options: MinifyOptions) -> list[splice.Span]:
    spans: list[splice.Span] = []
    for path in walk(tree.root):
        node = path.node
        if options.drop_debugger and node.type == "debugger_statement":
            spans.append(_drop(tree, path))
        elif options.drop_console and _is_console_call(node):
            spans.append(_drop(tree, path))
        elif options.dead_code and _is_dead_if(node):
            spans.append(_drop(tree, path))
        elif options.dead_code and node.type == "statement_block":
            spans.extend(_unreachable(tree, node))
    return spans


def compress(code: str, options: MinifyOptions = DEFAULT_MINIFY) -> str:
    """Run the statement-elimination passes and return the rewritten source."""
    for _ in range(max(1, options.passes)):
        try:
            tree = parse(code)
        except ParseError as e:
            raise MinifyError(f"Minifier error: {e}") from e
        spans = _collect(tree, options)
        if not spans:
            break
        code = splice.apply(code, spans)
    return code


def minify(code: str, options: MinifyOptions = DEFAULT_MINIFY) -> str:
    """Minify JavaScript source.

    Raises:
        MinifyError: if the source does not parse.
    """
    compressed = compress(code, options)
    try:
        return rjsmin.jsmin(compressed, keep_bang_comments=options.comments)
    except Exception as e:
        raise MinifyError(f"Minifier error: {e}") from e
