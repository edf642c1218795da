"""Installed package version lookup.

Names may come from noisy regex detection, so implausible names are rejected
before touching the filesystem. The lookup never raises; every failure path
yields `UNKNOWN_VERSION`.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Iterator, Mapping, Optional

from jstool.core.config import MODULE_PATH_ENV, UNKNOWN_VERSION

_MAX_NAME_LEN = 214

_SYMBOLS_ONLY_RE = re.compile(r"^[0-9+\-*/=<>!&|^%(){}\[\],.;:?~`#$\\]+$")
_NPM_NAME_RE = re.compile(r"^(?:@[a-z0-9][a-z0-9._~-]*/)?[a-z0-9][a-z0-9._~-]*$")

KNOWN_PATTERNS = (
    re.compile(r"^(jquery|lodash|moment|react|vue|angular|bootstrap|express|axios|webpack|babel|eslint)", re.I),
    re.compile(r"^@(babel|types|typescript|angular|vue|react)"),
    re.compile(r"\.(js|ts|css|scss|less|net)$"),
    re.compile(r"-(js|ts|css|scss|plugin|loader|cli|core|utils|dom|api|net|bs4|buttons|autofill|responsive)$"),
    re.compile(r"^(datatables|popper|util|stream|prism)", re.I),
)


def is_likely_package_name(name: object) -> bool:
    if not isinstance(name, str) or not name:
        return False
    if len(name) < 2 or len(name) > _MAX_NAME_LEN:
        return False
    if re.search(r"\s", name):
        return False
    if _SYMBOLS_ONLY_RE.match(name):
        return False
    if _NPM_NAME_RE.match(name):
        return True
    return any(p.search(name) for p in KNOWN_PATTERNS)


def candidate_manifests(
    name: str,
    *,
    cwd: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Iterator[Path]:
    """package.json locations to try, in priority order."""
    cwd = Path.cwd() if cwd is None else Path(cwd)
    env = os.environ if environ is None else environ

    yield cwd / "node_modules" / name / "package.json"
    yield cwd / "node_modules" / "@types" / name / "package.json"

    for entry in env.get(MODULE_PATH_ENV, "").split(os.pathsep):
        if entry:
            yield Path(entry) / name / "package.json"

    for parent in cwd.parents:
        yield parent / "node_modules" / name / "package.json"


def get_package_version(
    name: str,
    *,
    cwd: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Return the installed version of `name`, or "unknown version"."""
    if not is_likely_package_name(name):
        return UNKNOWN_VERSION
    try:
        for manifest in candidate_manifests(name, cwd=cwd, environ=environ):
            if manifest.is_file():
                data = json.loads(manifest.read_text(encoding="utf-8"))
                version = data.get("version") if isinstance(data, dict) else None
                return str(version) if version else UNKNOWN_VERSION
    except (OSError, ValueError):
        return UNKNOWN_VERSION
    return UNKNOWN_VERSION
