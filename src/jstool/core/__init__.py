"""jstool core: configuration, result records and error types.

This package is intentionally standalone and must not import js/transforms/
bundle/cli to avoid circular dependencies.
"""

from __future__ import annotations

from .config import DEFAULT_MINIFY, DEFAULT_STYLE, BundleOptions, MinifyOptions, StyleOptions
from .errors import BundleError, JsToolError, MinifyError, ParseError, SourceEncodingError, TransformError
from .model import (
    AnalysisReport,
    BundleResult,
    FileStats,
    FormatResult,
    PackageInfo,
    RemovalResult,
    ValidationReport,
    unique_in_order,
)

__all__ = [
    "DEFAULT_MINIFY",
    "DEFAULT_STYLE",
    "BundleOptions",
    "MinifyOptions",
    "StyleOptions",
    "BundleError",
    "JsToolError",
    "MinifyError",
    "ParseError",
    "SourceEncodingError",
    "TransformError",
    "AnalysisReport",
    "BundleResult",
    "FileStats",
    "FormatResult",
    "PackageInfo",
    "RemovalResult",
    "ValidationReport",
    "unique_in_order",
]
