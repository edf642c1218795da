"""Rewrite source text by splicing out node ranges.

tree-sitter has no code generator, so edits are applied to the original text using
the character ranges of each node. Text outside the edited spans is
preserved exactly (comments, formatting, line endings).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    replacement: str = ""


def expand_to_lines(code: str, start: int, end: int) -> tuple[int, int]:
    """Grow [start, end) to whole lines if nothing else shares those lines.

    Leading indentation and the trailing newline are included only when the
    span is the only non-whitespace content on its first and last line.
    """
    line_start = code.rfind("\n", 0, start) + 1
    if code[line_start:start].strip():
        return start, end

    line_end = code.find("\n", end)
    if line_end == -1:
        line_end = len(code)
    if code[end:line_end].strip():
        return start, end

    if line_end < len(code):
        line_end += 1  # include the newline itself
    return line_start, line_end


def merge(spans: Iterable[Span]) -> list[Span]:
    """Sort spans and drop any span nested inside (or overlapping) an earlier one."""
    out: list[Span] = []
    for span in sorted(spans, key=lambda s: (s.start, -s.end)):
        if out and span.start < out[-1].end:
            continue
        out.append(span)
    return out


def apply(code: str, spans: Iterable[Span]) -> str:
    """Apply non-overlapping spans to `code` and return the new text."""
    pieces: list[str] = []
    pos = 0
    for span in merge(spans):
        pieces.append(code[pos : span.start])
        pieces.append(span.replacement)
        pos = span.end
    pieces.append(code[pos:])
    return "".join(pieces)
