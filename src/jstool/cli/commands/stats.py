"""`jstool stats` command: size, line count, minified heuristic and bracket balance."""

from __future__ import annotations

import typer

from jstool.cli import console
from jstool.core.errors import JsToolError
from jstool.ops.stats import file_stats, validate_file


def register(app: typer.Typer) -> None:
    @app.command("stats")
    def stats(
        file: str = typer.Argument(..., help="File to inspect."),
    ) -> None:
        """Show file statistics and check bracket balance."""
        try:
            st = file_stats(file)
            report = validate_file(file)
        except (JsToolError, OSError) as e:
            console.error(f"Failed to read file stats: {e}")
            return

        console.header(f"File: {st.path}")
        typer.echo(f"Size: {st.size_kb} KB ({st.size} bytes)")
        typer.echo(f"Lines: {st.lines}")
        typer.echo(f"Characters: {st.characters}")
        typer.echo(f"Last modified: {st.last_modified.isoformat()}")
        typer.echo(f"Minified: {'yes' if st.is_minified else 'no'}")

        if report.valid:
            console.success("Brackets balanced")
            return
        for issue in report.issues:
            console.warn(issue)
