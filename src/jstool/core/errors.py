"""Error types raised by jstool operations.

All domain errors derive from `JsToolError` (a `ValueError`) so that the CLI can
catch them at the command boundary. Missing input files are reported with the
built-in `FileNotFoundError`.
"""

from __future__ import annotations

from typing import Sequence


class JsToolError(ValueError):
    """Base class for jstool failures."""


class ParseError(JsToolError):
    """Structural parse failed and no fallback applies."""


class SourceEncodingError(JsToolError):
    """A source file that would be rewritten is not valid UTF-8."""


class TransformError(JsToolError):
    """A formatting transform failed."""


class MinifyError(TransformError):
    """The minification transform failed."""


class BundleError(JsToolError):
    """The bundler exited with an error or could not be started.

    Attributes:
        command: the argv that was executed (empty if it never started).
        stderr: captured bundler diagnostics, stripped.
    """

    def __init__(self, message: str, *, command: Sequence[str] = (), stderr: str = "") -> None:
        self.command = tuple(command)
        self.stderr = stderr.strip()
        if self.stderr:
            message = f"{message}\n{self.stderr}"
        super().__init__(message)


__all__ = [
    "BundleError",
    "JsToolError",
    "MinifyError",
    "ParseError",
    "SourceEncodingError",
    "TransformError",
]
