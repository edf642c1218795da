"""Remove references to a package from a JavaScript file.

Default mode edits the syntax tree: import statements whose source equals
the package, and the statements holding `require('<package>')`, are spliced
out. Nothing else in the file changes. Parsing uses the TSX grammar, so
TypeScript and JSX sources are accepted alongside plain JavaScript.

Force mode is meant for bundled/minified files. It backs the file up, then
tries in order, stopping at the first that removes anything:

1. tree removal with substring matching;
2. conservative regexes that comment matched statements out;
3. (only with `aggressive`) deletion regexes that may break the code.

If nothing is removed, or anything raises, the backup is restored, so the file
ends up either edited or byte-identical to what it was.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from jstool.core.errors import ParseError
from jstool.core.model import REMOVAL_AGGRESSIVE, REMOVAL_CONSERVATIVE, REMOVAL_TREE, RemovalResult, text_size
from jstool.io.files import create_backup, discard_backup, read_text_exact, restore_backup, write_text_exact
from jstool.js import patterns, splice
from jstool.js.parser import SourceTree, import_source, parse, require_argument
from jstool.js.visitor import NodePath, Visitor, traverse

AGGRESSIVE_WARNING = "Using AGGRESSIVE mode - this may break your code!"
NOTHING_FOUND_WARNING = "Conservative removal found nothing. Use --aggressive for more thorough removal."
EMBEDDED_TIP = "Tip: The package might be deeply embedded in minified code."

Matcher = Callable[[str], bool]


def removal_target(path: NodePath) -> NodePath:
    """The statement to delete for `path`; an exported declaration takes its `export` along."""
    while path.key == "declaration" and path.parent is not None and path.parent.node.type == "export_statement":
        path = path.parent
    return path


def statement_span(tree: SourceTree, path: NodePath) -> splice.Span:
    """Span deleting the statement at `path`.

    Statements in a body list take their whole line when alone on it. Any other
    statement position (a brace-less `if` body, a `for` initializer) is replaced
    by `;`. Declaration and expression statement nodes include their own
    semicolon, so `for (var m = require('a'); m;)` becomes `for (; m;)`.
    """
    path = removal_target(path)
    start, end = tree.range_of(path.node)
    if path.in_list:
        start, end = splice.expand_to_lines(tree.text, start, end)
        return splice.Span(start, end)
    return splice.Span(start, end, ";")


def _enclosing_span(tree: SourceTree, path: NodePath) -> splice.Span:
    stmt = path.statement_parent()
    if stmt is None:
        start, end = tree.range_of(path.node)
        return splice.Span(start, end, "void 0")
    return statement_span(tree, stmt)


def _declarators(decl: NodePath) -> list[Any]:
    return [c for c in decl.node.named_children if c.type == "variable_declarator"]


@dataclass
class _Remover(Visitor):
    tree: SourceTree
    matches: Matcher
    declarators: bool = False
    spans: list[splice.Span] = field(default_factory=list)
    count: int = 0
    # (start, end) of a declaration -> (its path, start bytes of matched declarators)
    groups: dict[tuple[int, int], tuple[NodePath, set[int]]] = field(default_factory=dict)

    def visit_import_declaration(self, path: NodePath) -> None:
        source = import_source(path.node)
        if source is not None and self.matches(source):
            self.spans.append(statement_span(self.tree, path))
            self.count += 1

    def visit_call_expression(self, path: NodePath) -> None:
        arg = require_argument(path.node)
        if arg is None or not self.matches(arg):
            return
        if self.declarators and path.key == "value" and path.parent is not None:
            if path.parent.node.type == "variable_declarator":
                return  # handled by visit_variable_declarator
        self.spans.append(_enclosing_span(self.tree, path))
        self.count += 1

    def visit_variable_declarator(self, path: NodePath) -> None:
        if not self.declarators or path.parent is None:
            return
        arg = require_argument(path.node.child_by_field_name("value"))
        if arg is None or not self.matches(arg):
            return
        decl = path.parent
        key = (decl.node.start_byte, decl.node.end_byte)
        _, matched = self.groups.setdefault(key, (decl, set()))
        matched.add(path.node.start_byte)
        self.count += 1

    def declarator_spans(self) -> list[splice.Span]:
        out: list[splice.Span] = []
        for decl, matched in self.groups.values():
            declarations = _declarators(decl)
            if len(matched) == len(declarations):
                out.append(statement_span(self.tree, decl))
                continue
            first, _ = self.tree.range_of(declarations[0])
            _, last = self.tree.range_of(declarations[-1])
            kept = [self.tree.text_of(d) for d in declarations if d.start_byte not in matched]
            out.append(splice.Span(first, last, ", ".join(kept)))
        return out


def _remove_with_tree(tree: SourceTree, matches: Matcher, *, declarators: bool) -> tuple[str, int]:
    remover = _Remover(tree=tree, matches=matches, declarators=declarators)
    traverse(tree.root, remover)
    if not remover.count:
        return tree.text, 0
    return splice.apply(tree.text, [*remover.spans, *remover.declarator_spans()]), remover.count


def remove_exact(code: str, package: str) -> tuple[str, int]:
    """Remove import/require references whose specifier equals `package`.

    Raises:
        ParseError: if the code does not parse.
    """
    try:
        tree = parse(code, typescript=True)
    except ParseError as e:
        raise ParseError(f"Failed to parse JavaScript: {e}") from e
    return _remove_with_tree(tree, lambda source: source == package, declarators=False)


def remove_matching(code: str, package: str) -> tuple[str, int]:
    """Remove import/require references whose specifier contains `package`.

    Raises:
        ParseError: if the code does not parse.
    """
    tree = parse(code, typescript=True)
    return _remove_with_tree(tree, lambda source: package in source, declarators=True)


def _not_removed(path: Path, package: str, size: int, **kwargs: Any) -> RemovalResult:
    return RemovalResult(path=path, package=package, removed=False, original_size=size, new_size=size, **kwargs)


def _force_remove(path: Path, original: str, package: str, aggressive: bool) -> RemovalResult:
    backup = create_backup(path)
    notes = [f"Backup created: {backup}"]
    warnings: list[str] = []

    try:
        code, count, strategy = original, 0, None
        try:
            code, count = remove_matching(original, package)
            strategy = REMOVAL_TREE
        except ParseError as e:
            warnings.append(f"AST parse failed in force mode: {e}")

        if not count:
            notes.append("Using conservative regex patterns...")
            code, count = patterns.comment_out(original, package)
            strategy = REMOVAL_CONSERVATIVE

        if not count and aggressive:
            warnings.append(AGGRESSIVE_WARNING)
            code, count = patterns.delete_aggressively(original, package)
            strategy = REMOVAL_AGGRESSIVE

        if not count:
            restore_backup(backup, path)
            if not aggressive:
                warnings.append(NOTHING_FOUND_WARNING)
                notes.append(EMBEDDED_TIP)
            return _not_removed(path, package, text_size(original), warnings=tuple(warnings), notes=tuple(notes))

        write_text_exact(path, code)
    except BaseException:
        if backup.exists():
            restore_backup(backup, path)
        raise

    discard_backup(backup)
    return RemovalResult(
        path=path,
        package=package,
        removed=True,
        count=count,
        strategy=strategy,
        original_size=text_size(original),
        new_size=text_size(code),
        warnings=tuple(warnings),
        notes=tuple(notes),
    )


def remove_package(
    path: str | Path,
    package: str,
    *,
    force: bool = False,
    aggressive: bool = False,
) -> RemovalResult:
    """Remove references to `package` from the file at `path`.

    Raises:
        FileNotFoundError: if `path` is not a file.
        ParseError: in default mode, if the file does not parse.
    """
    p = Path(path)
    original = read_text_exact(p)

    if force:
        return _force_remove(p, original, package, aggressive)

    code, count = remove_exact(original, package)
    if not count:
        return _not_removed(p, package, text_size(original))

    write_text_exact(p, code)
    return RemovalResult(
        path=p,
        package=package,
        removed=True,
        count=count,
        strategy=REMOVAL_TREE,
        original_size=text_size(original),
        new_size=text_size(code),
    )
