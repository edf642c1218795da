"""Format or minify a file in place.

Formatting resolves the project's Prettier config (falling back to the jstool
default style), picks a dialect from the config or the file extension, and
retries once with the general-purpose `babel` dialect if the first attempt
fails. Minification uses the fixed `DEFAULT_MINIFY` settings. No backup is
taken: the file is only written once the transform has succeeded.
"""

from __future__ import annotations

from pathlib import Path

from jstool.core.config import DEFAULT_MINIFY, DEFAULT_STYLE, MinifyOptions, StyleOptions
from jstool.core.errors import TransformError
from jstool.core.model import FormatResult, text_size
from jstool.io.files import read_text_exact, write_text_exact
from jstool.io.styleconfig import find_config
from jstool.transforms.beautify import GENERAL_PARSER, format_source, parser_for_path
from jstool.transforms.minify import minify

CONFIG_WARNING = "Could not resolve prettier config, using defaults"
RETRY_WARNING = "Parser failed, trying babel parser..."

SYNTAX_HINT = "Tip: Make sure the file contains valid JavaScript/TypeScript syntax"
PARSER_HINT = "Tip: Try specifying a different parser or check file extension"


def resolve_style(path: str | Path, warnings: list[str]) -> StyleOptions:
    """Style for `path`: project Prettier config if any, else the default style.

    A config that exists but cannot be read adds a warning and yields the default.
    """
    try:
        found = find_config(path)
    except TransformError:
        warnings.append(CONFIG_WARNING)
        found = None

    style = DEFAULT_STYLE if found is None else StyleOptions.from_prettier(found[1])
    if not style.parser:
        style = style.with_parser(parser_for_path(path))
    return style


def format_text(code: str, path: str | Path, warnings: list[str]) -> tuple[str, str]:
    """Format `code` as if it lived at `path`; return (text, parser used)."""
    style = resolve_style(path, warnings)
    try:
        return format_source(code, style, path=path), str(style.parser)
    except TransformError:
        warnings.append(RETRY_WARNING)
        fallback = style.with_parser(GENERAL_PARSER)
        return format_source(code, fallback, path=path), GENERAL_PARSER


def format_file(
    path: str | Path,
    *,
    minify_output: bool = False,
    minify_options: MinifyOptions = DEFAULT_MINIFY,
) -> FormatResult:
    """Format (or minify) the file at `path` in place.

    Raises:
        FileNotFoundError: if `path` is not a file.
        TransformError: if formatting fails after the retry.
        MinifyError: if minification fails.
    """
    p = Path(path)
    original = read_text_exact(p)
    warnings: list[str] = []

    if minify_output:
        processed = minify(original, minify_options)
        parser = None
    else:
        processed, parser = format_text(original, p, warnings)

    write_text_exact(p, processed)
    return FormatResult(
        path=p,
        minified=minify_output,
        original_size=text_size(original),
        new_size=text_size(processed),
        parser=parser,
        warnings=tuple(warnings),
    )


def failure_hint(message: str) -> str | None:
    """Remediation hint for common formatting failures."""
    if "Unexpected token" in message:
        return SYNTAX_HINT
    if "parser" in message:
        return PARSER_HINT
    return None
