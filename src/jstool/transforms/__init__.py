"""Text transforms: formatting (jsbeautifier/cssbeautifier) and minification (rjsmin)."""

from __future__ import annotations

from .beautify import format_source, parser_for_path
from .minify import minify

__all__ = [
    "format_source",
    "minify",
    "parser_for_path",
]
