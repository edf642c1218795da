"""User-facing operations.

Each operation reads its inputs, delegates to one external capability and
returns a result record. Operations raise; the CLI decides what to print.
"""

from __future__ import annotations

from .analyze import analyze_file, analyze_source
from .bundle import bundle_packages, describe_packages
from .format import format_file
from .remove import remove_package
from .stats import file_stats, is_minified, validate_balance, validate_file

__all__ = [
    "analyze_file",
    "analyze_source",
    "bundle_packages",
    "describe_packages",
    "file_stats",
    "format_file",
    "is_minified",
    "remove_package",
    "validate_balance",
    "validate_file",
]
