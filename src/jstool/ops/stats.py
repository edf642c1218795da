"""File statistics and a cheap bracket balance check."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jstool.core.model import FileStats, ValidationReport, text_size
from jstool.io.files import read_text_lossy

MINIFIED_AVG_LINE = 200
MINIFIED_MAX_LINES = 50
MINIFIED_MIN_CHARS = 10_000


def is_minified(code: str) -> bool:
    """Long average lines, or very few lines for a lot of code."""
    lines = code.split("\n")
    avg = len(code) / len(lines)
    return avg > MINIFIED_AVG_LINE or (len(lines) < MINIFIED_MAX_LINES and len(code) > MINIFIED_MIN_CHARS)


def file_stats(path: str | Path) -> FileStats:
    p = Path(path)
    code = read_text_lossy(p)
    st = p.stat()
    return FileStats(
        path=p,
        size=st.st_size,
        lines=len(code.split("\n")),
        characters=len(code),
        last_modified=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        is_minified=is_minified(code),
    )


def validate_balance(code: str) -> ValidationReport:
    """Compare counts of `{`/`}` and `(`/`)`. Characters in strings and comments count too."""
    issues: list[str] = []
    open_braces, close_braces = code.count("{"), code.count("}")
    open_parens, close_parens = code.count("("), code.count(")")
    if open_braces != close_braces:
        issues.append(f"Mismatched braces: {open_braces} open, {close_braces} close")
    if open_parens != close_parens:
        issues.append(f"Mismatched parentheses: {open_parens} open, {close_parens} close")
    return ValidationReport(
        valid=not issues,
        issues=tuple(issues),
        size=text_size(code),
        lines=len(code.split("\n")),
    )


def validate_file(path: str | Path) -> ValidationReport:
    return validate_balance(read_text_lossy(path))
