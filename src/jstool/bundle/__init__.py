"""Vendor bundle creation.

- `manifest`: ordered package list rendered as an entry module
- `build`: esbuild invocation (browser platform, IIFE exposing a global)
"""

from __future__ import annotations

from .build import esbuild_command, run_bundle
from .manifest import BundleManifest

__all__ = [
    "BundleManifest",
    "esbuild_command",
    "run_bundle",
]
