"""Whole-file text I/O and timestamped backups.

Sources are read and written in full as UTF-8 with newline translation
disabled, so a rewrite changes only the bytes an operation meant to change.
"""

from __future__ import annotations

import shutil
import time
from pathlib import Path

from jstool.core.config import BACKUP_INFIX
from jstool.core.errors import SourceEncodingError


def require_file(path: str | Path) -> Path:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"File not found: {p}")
    return p


def read_text_exact(path: str | Path) -> str:
    """Read a file that may be rewritten.

    Raises:
        FileNotFoundError: if `path` is not a file.
        SourceEncodingError: if the content is not valid UTF-8.
    """
    p = require_file(path)
    try:
        with p.open("r", encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise SourceEncodingError(f"File is not valid UTF-8 text: {p} ({e.reason} at byte {e.start})") from e


def read_text_lossy(path: str | Path) -> str:
    """Read a file for inspection only; invalid UTF-8 bytes become U+FFFD."""
    p = require_file(path)
    with p.open("r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


def write_text_exact(path: str | Path, text: str) -> None:
    # newline="" prevents Python from translating newlines on write
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8", newline="") as f:
        f.write(text)


def backup_path_for(path: str | Path, *, timestamp_ms: int | None = None) -> Path:
    """`<path>.backup.<ms since epoch>`."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    p = Path(path)
    return p.with_name(f"{p.name}{BACKUP_INFIX}{timestamp_ms}")


def create_backup(path: str | Path) -> Path:
    """Copy `path` byte-for-byte to a fresh timestamped backup and return its path."""
    src = require_file(path)
    dst = backup_path_for(src)
    while dst.exists():
        dst = backup_path_for(src, timestamp_ms=int(dst.name.rsplit(".", 1)[1]) + 1)
    shutil.copyfile(src, dst)
    return dst


def restore_backup(backup: str | Path, path: str | Path) -> None:
    """Copy the backup over `path`, then delete the backup."""
    shutil.copyfile(backup, path)
    Path(backup).unlink()


def discard_backup(backup: str | Path) -> None:
    Path(backup).unlink(missing_ok=True)
