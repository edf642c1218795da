"""Source formatting by dialect.

Each dialect takes source text plus `StyleOptions` and returns formatted text
or raises `TransformError`:

- babel: syntax-checked with tree-sitter, quotes normalised, then jsbeautifier
- typescript: jsbeautifier only
- json: re-serialised with the json module
- css: cssbeautifier

Parser names follow Prettier's, with a few aliases mapped onto these four.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import cssbeautifier
import jsbeautifier

from jstool.core.config import StyleOptions
from jstool.core.errors import ParseError, TransformError
from jstool.js import splice
from jstool.js.parser import parse
from jstool.js.visitor import walk

GENERAL_PARSER = "babel"

_PARSER_BY_SUFFIX = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".json": "json",
    ".css": "css",
    ".scss": "css",
    ".less": "css",
}

_PARSER_ALIASES = {
    "babel": "babel",
    "babel-flow": "babel",
    "flow": "babel",
    "espree": "babel",
    "acorn": "babel",
    "meriyah": "babel",
    "typescript": "typescript",
    "babel-ts": "typescript",
    "json": "json",
    "json-stringify": "json",
    "css": "css",
    "scss": "css",
    "less": "css",
}

_JSX_SUFFIXES = frozenset({".jsx", ".tsx"})


def parser_for_path(path: str | Path) -> str:
    """Pick a parser name from the file extension."""
    return _PARSER_BY_SUFFIX.get(Path(path).suffix.lower(), GENERAL_PARSER)


def _js_options(style: StyleOptions, *, jsx: bool) -> "jsbeautifier.BeautifierOptions":
    opts = jsbeautifier.default_options()
    opts.indent_size = style.tab_width
    opts.indent_with_tabs = style.use_tabs
    opts.indent_char = "\t" if style.use_tabs else " "
    opts.wrap_line_length = style.print_width
    opts.preserve_newlines = True
    opts.max_preserve_newlines = 2
    opts.end_with_newline = True
    opts.e4x = jsx
    return opts


def _requote(raw: str, quote: str) -> str:
    current = raw[:1]
    if current == quote or current not in ("'", '"') or quote in raw[1:-1]:
        return raw
    return quote + raw[1:-1] + quote


def normalize_quotes(code: str, *, single_quote: bool) -> str:
    """Rewrite string literals to the preferred quote where no escaping is needed.

    Raises:
        ParseError: if the code does not parse.
    """
    quote = "'" if single_quote else '"'
    tree = parse(code)
    spans = []
    for path in walk(tree.root):
        if path.node.type != "string":
            continue
        raw = tree.text_of(path.node)
        new = _requote(raw, quote)
        if new != raw:
            start, end = tree.range_of(path.node)
            spans.append(splice.Span(start, end, new))
    return splice.apply(code, spans)


def _beautify_js(code: str, style: StyleOptions, *, jsx: bool) -> str:
    try:
        return jsbeautifier.beautify(code, _js_options(style, jsx=jsx))
    except Exception as e:
        raise TransformError(f"jsbeautifier failed: {e}") from e


def format_babel(code: str, style: StyleOptions, *, jsx: bool = False) -> str:
    try:
        code = normalize_quotes(code, single_quote=style.single_quote)
    except ParseError as e:
        raise TransformError(str(e)) from e
    return _beautify_js(code, style, jsx=jsx)


def format_typescript(code: str, style: StyleOptions, *, jsx: bool = False) -> str:
    return _beautify_js(code, style, jsx=jsx)


def format_json(code: str, style: StyleOptions, *, jsx: bool = False) -> str:
    try:
        data = json.loads(code)
    except json.JSONDecodeError as e:
        raise TransformError(f"Unexpected token in JSON: {e}") from e
    indent: int | str = "\t" if style.use_tabs else style.tab_width
    return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"


def format_css(code: str, style: StyleOptions, *, jsx: bool = False) -> str:
    opts = cssbeautifier.default_options()
    opts.indent_size = style.tab_width
    opts.indent_char = "\t" if style.use_tabs else " "
    opts.end_with_newline = True
    try:
        return cssbeautifier.beautify(code, opts)
    except Exception as e:
        raise TransformError(f"cssbeautifier failed: {e}") from e


_DIALECTS: dict[str, Callable[..., str]] = {
    "babel": format_babel,
    "typescript": format_typescript,
    "json": format_json,
    "css": format_css,
}


def format_source(code: str, style: StyleOptions, *, path: str | Path | None = None) -> str:
    """Format `code` with the dialect named by `style.parser`.

    Raises:
        TransformError: for unknown parsers and for dialect failures.
    """
    name = style.parser or (parser_for_path(path) if path is not None else GENERAL_PARSER)
    dialect = _PARSER_ALIASES.get(name)
    if dialect is None:
        raise TransformError(f"Couldn't resolve parser \"{name}\"")
    jsx = path is not None and Path(path).suffix.lower() in _JSX_SUFFIXES
    return _DIALECTS[dialect](code, style, jsx=jsx)
