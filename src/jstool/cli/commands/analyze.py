"""`jstool analyze` command.

Prints the file path, line count and the packages it imports/requires.
"""

from __future__ import annotations

import typer

from jstool.cli import console
from jstool.core.errors import JsToolError
from jstool.ops.analyze import analyze_file


def register(app: typer.Typer) -> None:
    @app.command("analyze")
    def analyze(
        file: str = typer.Argument(..., help="JavaScript/TypeScript file to analyze."),
    ) -> None:
        """Analyze a JS file for package usage and statistics."""
        try:
            report = analyze_file(file)
        except (JsToolError, OSError) as e:
            console.error(f"Failed to analyze file: {e}")
            return

        console.warnings(report.warnings)
        console.header(f"File: {report.path}")
        console.header(f"Lines: {report.lines}")
        typer.secho("Packages detected:", fg=typer.colors.YELLOW)
        if not report.packages:
            console.detail(" (none found)")
            return
        for pkg in report.packages:
            typer.echo(" - " + typer.style(pkg, fg=typer.colors.GREEN))
