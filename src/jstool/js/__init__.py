"""JavaScript source analysis helpers.

- `parser`: tree-sitter wrapper producing source trees and `ParseError`s
- `visitor`: exhaustive visitor over a closed set of node kinds
- `splice`: range-based text rewriting (stands in for a code generator)
- `patterns`: regex fallbacks for code that does not parse
"""

from __future__ import annotations

from .parser import SourceTree, import_source, parse, require_argument
from .visitor import NodeKind, NodePath, Visitor, traverse, walk

__all__ = [
    "NodeKind",
    "NodePath",
    "SourceTree",
    "Visitor",
    "import_source",
    "parse",
    "require_argument",
    "traverse",
    "walk",
]
