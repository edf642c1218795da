"""Resolve a project's Prettier configuration.

Searched from the file's directory upwards; the first directory holding one of
these wins:
- `.prettierrc` (JSON content)
- `.prettierrc.json`
- `package.json` with an object under the `"prettier"` key

A `"prettier"` key holding a string (a shared-config module name) cannot be
resolved without Node and is skipped.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from jstool.core.errors import TransformError

RC_NAMES = (".prettierrc", ".prettierrc.json")


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise TransformError(f"Could not read style config {path}: {e}") from e


def find_config(path: str | Path) -> Optional[tuple[Path, dict[str, Any]]]:
    """Return (config file, options) for `path`, or None if nothing applies.

    Raises:
        TransformError: if a config file exists but cannot be read as a JSON object.
    """
    start = Path(path).resolve().parent
    for directory in (start, *start.parents):
        for name in RC_NAMES:
            rc = directory / name
            if rc.is_file():
                obj = _load_json(rc)
                if not isinstance(obj, dict):
                    raise TransformError(f"Could not read style config {rc}: expected a JSON object")
                return rc, obj
        pkg = directory / "package.json"
        if pkg.is_file():
            obj = _load_json(pkg)
            if isinstance(obj, dict) and isinstance(obj.get("prettier"), dict):
                return pkg, obj["prettier"]
    return None
