"""jstool I/O helpers: source files and backups, package versions, style config."""

from __future__ import annotations

from .files import create_backup, read_text_exact, read_text_lossy, restore_backup, write_text_exact
from .styleconfig import find_config
from .versions import get_package_version, is_likely_package_name

__all__ = [
    "create_backup",
    "find_config",
    "get_package_version",
    "is_likely_package_name",
    "read_text_exact",
    "read_text_lossy",
    "restore_backup",
    "write_text_exact",
]
