"""jstool: inspect, edit, format and bundle JavaScript/TypeScript files.

The heavy lifting is delegated: tree-sitter parses, jsbeautifier/cssbeautifier
format, rjsmin minifies and esbuild bundles. jstool adds the detection and
removal heuristics, the backup/fallback policy and the console reporting.
"""

from __future__ import annotations

from jstool.ops import analyze_file, bundle_packages, file_stats, format_file, remove_package

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "analyze_file",
    "bundle_packages",
    "file_stats",
    "format_file",
    "remove_package",
]
