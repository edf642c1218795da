"""Regular-expression heuristics for code that does not parse.

Everything here is best effort: the patterns may produce false positives and
false negatives, and they never raise on odd input.
"""

from __future__ import annotations

import re

from jstool.core.config import BUNDLER_LINE_THRESHOLD, BUNDLER_MARKER
from jstool.core.model import unique_in_order

IMPORT_RE = re.compile(r"""import\s+(?:[^'"]*\s+from\s+)?['"]([^'"]+)['"]""")
REQUIRE_RE = re.compile(r"""require\(\s*['"]([^'"]+)['"]\s*\)""")
WEBPACK_MODULE_RE = re.compile(r"""["']\./node_modules/([^"']+)["']\s*:""")

_DOT_WORD_RE = re.compile(r"^\.\w")

# Collapsing after aggressive deletion.
_BLANK_RUNS_RE = re.compile(r"\n\s*\n\s*\n")
_EMPTY_LINES_RE = re.compile(r"^\s*\n", re.MULTILINE)
_TRAILING_WS_RE = re.compile(r"\s+$", re.MULTILINE)

_QUOTE = "[\"'`]"
_NOT_QUOTE = "[^\"'`]*"


def looks_like_bundle(code: str, lines: int) -> bool:
    return lines < BUNDLER_LINE_THRESHOLD and BUNDLER_MARKER in code.lower()


def is_valid_reference(ref: str) -> bool:
    """Reject regex hits that are unlikely to be module specifiers."""
    if not ref:
        return False
    if any(ch in ref for ch in "(+{}"):
        return False
    if len(ref) < 2:
        return False
    if _DOT_WORD_RE.match(ref) and not ref.startswith(("./", "../")):
        return False
    return True


def extract_references(code: str) -> tuple[str, ...]:
    """Module specifiers from import-style then require-style matches."""
    found = [m.group(1) for m in IMPORT_RE.finditer(code)]
    found += [m.group(1) for m in REQUIRE_RE.finditer(code)]
    return unique_in_order(ref for ref in found if is_valid_reference(ref))


def extract_webpack_modules(code: str) -> tuple[str, ...]:
    """Package names from a webpack module map (`"./node_modules/<pkg>/...": ...`)."""
    found: list[str] = []
    for m in WEBPACK_MODULE_RE.finditer(code):
        parts = m.group(1).split("/")
        if parts[0].startswith("@"):
            found.append("/".join(parts[:2]))
        else:
            found.append(parts[0])
    return unique_in_order(found)


def conservative_pattern(package: str) -> re.Pattern[str]:
    """Import statements, `x = require(...)` statements and bare `require(...)` calls
    whose specifier contains `package`.

    A single alternation is used so each match is commented out once; applying
    the alternatives one after another would nest comments.
    """
    name = re.escape(package)
    quoted = f"{_QUOTE}{_NOT_QUOTE}{name}{_NOT_QUOTE}{_QUOTE}"
    alternatives = [
        rf"import\s+[^\"']*from\s+{quoted}[\s;]?",
        rf"(?:var|let|const)\s+[^=]*=\s*require\s*\(\s*{quoted}\s*\)[\s;]?",
        rf"require\s*\(\s*{quoted}\s*\)",
    ]
    return re.compile("(" + "|".join(alternatives) + ")", re.IGNORECASE)


def comment_out(code: str, package: str) -> tuple[str, int]:
    """Wrap conservative matches in `/* removed ... */`. Returns (code, matches).

    The count is the number of statements or calls commented out, so it is
    comparable with the tree strategy's count of removed references.
    """
    return conservative_pattern(package).subn(r"/* removed \1 */", code)


def aggressive_patterns(package: str) -> list[re.Pattern[str]]:
    name = re.escape(package)
    return [
        # whole lines containing the name
        re.compile(rf"^.*{name}.*$", re.MULTILINE | re.IGNORECASE),
        # quoted strings containing the name
        re.compile(rf"{_QUOTE}{_NOT_QUOTE}{name}{_NOT_QUOTE}{_QUOTE}", re.IGNORECASE),
        # calls with the name in the argument list
        re.compile(rf"\b\w*\([^)]*{name}[^)]*\)", re.IGNORECASE),
        # object properties whose string value contains the name
        re.compile(rf"\b\w*\s*:\s*{_QUOTE}{_NOT_QUOTE}{name}{_NOT_QUOTE}{_QUOTE}", re.IGNORECASE),
    ]


def delete_aggressively(code: str, package: str) -> tuple[str, int]:
    """Apply every aggressive pattern in order, then tidy blank lines.

    Returns the new text and the number of patterns that changed it. The line
    pattern also deletes unrelated code that shares a line with the name.
    """
    changed = 0
    for pattern in aggressive_patterns(package):
        code, n = pattern.subn("", code)
        if n:
            changed += 1
    code = _BLANK_RUNS_RE.sub("\n\n", code)
    code = _EMPTY_LINES_RE.sub("", code)
    code = _TRAILING_WS_RE.sub("", code)
    return code, changed
