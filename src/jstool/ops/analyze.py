"""Detect the packages a JavaScript file imports or requires.

Strategy:
- short files mentioning webpack are treated as pre-bundled and never parsed;
- otherwise the syntax tree is walked for import statements and
  `require('<literal>')` calls;
- when parsing fails or is skipped, regex extraction takes over, plus the
  webpack module-map extractor for suspected bundles.
"""

from __future__ import annotations

from pathlib import Path

from tree_sitter import Node

from jstool.core.errors import ParseError
from jstool.core.model import STRATEGY_AST, STRATEGY_BUNDLER, STRATEGY_REGEX, AnalysisReport, unique_in_order
from jstool.io.files import read_text_lossy
from jstool.js import patterns
from jstool.js.parser import import_source, parse, require_argument
from jstool.js.visitor import NodePath, Visitor, traverse

FALLBACK_WARNING = "AST parsing failed, using regex/webpack fallback"


class _ReferenceCollector(Visitor):
    def __init__(self) -> None:
        self.imports: list[str] = []
        self.requires: list[str] = []

    def visit_import_declaration(self, path: NodePath) -> None:
        source = import_source(path.node)
        if source is not None:
            self.imports.append(source)

    def visit_call_expression(self, path: NodePath) -> None:
        arg = require_argument(path.node)
        if arg is not None:
            self.requires.append(arg)


def collect_references(root: Node) -> tuple[str, ...]:
    """Import sources then require arguments found in a parsed tree, deduplicated."""
    collector = _ReferenceCollector()
    traverse(root, collector)
    return unique_in_order([*collector.imports, *collector.requires])


def count_lines(code: str) -> int:
    return len(code.split("\n"))


def analyze_source(code: str, *, path: str | Path = "<string>") -> AnalysisReport:
    lines = count_lines(code)
    bundled = patterns.looks_like_bundle(code, lines)

    if not bundled:
        try:
            tree = parse(code)
        except ParseError:
            pass
        else:
            return AnalysisReport(
                path=Path(path),
                lines=lines,
                packages=collect_references(tree.root),
                strategy=STRATEGY_AST,
            )

    packages = patterns.extract_references(code)
    if bundled:
        packages = unique_in_order([*packages, *patterns.extract_webpack_modules(code)])

    return AnalysisReport(
        path=Path(path),
        lines=lines,
        packages=packages,
        strategy=STRATEGY_BUNDLER if bundled else STRATEGY_REGEX,
        warnings=(FALLBACK_WARNING,),
    )


def analyze_file(path: str | Path) -> AnalysisReport:
    """Analyze the file at `path`. Bytes that are not UTF-8 are read as U+FFFD.

    Raises:
        FileNotFoundError: if `path` is not a file.
    """
    code = read_text_lossy(path)
    return analyze_source(code, path=path)
