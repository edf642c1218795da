"""`jstool format` command.

Formats a file in place with the project's Prettier settings (or the jstool
default style), or minifies it to a single line with `--minify`.
"""

from __future__ import annotations

from pathlib import Path

import typer

from jstool.cli import console
from jstool.core.errors import JsToolError
from jstool.core.model import FormatResult
from jstool.ops.format import failure_hint, format_file


def _report(result: FormatResult) -> None:
    if result.minified:
        console.success(f"File minified successfully: {result.path}")
        if result.size_diff > 0:
            console.info(
                f"Size reduced by {result.size_diff / 1024:.2f} KB "
                f"({result.compression_ratio:.1f}% compression)"
            )
        console.detail(
            f"Original: {result.original_size / 1024:.2f} KB -> Minified: {result.new_size / 1024:.2f} KB"
        )
        return

    console.success(f"File formatted successfully: {result.path}")
    if result.size_diff != 0:
        change = "reduced" if result.size_diff > 0 else "increased"
        console.info(f"Size {change} by {abs(result.size_diff)} bytes")


def register(app: typer.Typer) -> None:
    @app.command("format")
    def format_(
        file: str = typer.Argument(..., help="File to format in place."),
        minify: bool = typer.Option(False, "-m", "--minify", help="Minify file into 1 line."),
    ) -> None:
        """Format or minify a JS file."""
        verb = "minify" if minify else "format"
        console.info(f"{'Minifying' if minify else 'Formatting'} {Path(file)}...")
        try:
            result = format_file(file, minify_output=minify)
        except (JsToolError, OSError) as e:
            console.error(f"Failed to {verb} file: {e}")
            hint = failure_hint(str(e))
            if hint:
                console.warn(hint)
            return

        console.warnings(result.warnings)
        _report(result)
