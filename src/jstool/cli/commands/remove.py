"""`jstool remove` command.

Modes:
- default: exact-match tree removal; not-found leaves the file untouched
- `--force`: substring matching, backup, conservative regex fallback
- `--force --aggressive`: deletion regexes as a last resort (may break code)

Logical success or failure is printed; the exit code is always 0.
"""

from __future__ import annotations

import typer

from jstool.cli import console
from jstool.core.errors import JsToolError
from jstool.ops.remove import remove_package


def register(app: typer.Typer) -> None:
    @app.command("remove")
    def remove(
        file: str = typer.Argument(..., help="File to edit in place."),
        package: str = typer.Argument(..., help="Package name to remove."),
        force: bool = typer.Option(
            False,
            "-f",
            "--force",
            help="Force remove (works for bundled/minified files).",
        ),
        aggressive: bool = typer.Option(
            False,
            "-a",
            "--aggressive",
            help="Aggressive removal (removes any reference, may break code).",
        ),
    ) -> None:
        """Remove a package from a file."""
        if force:
            console.info(f"Force mode enabled - deep scanning for '{package}'...")
        try:
            result = remove_package(file, package, force=force, aggressive=aggressive)
        except (JsToolError, OSError) as e:
            console.error(f"Failed to remove package: {e}")
            return

        for note in result.notes:
            console.detail(note)
        console.warnings(result.warnings)

        if not result.removed:
            if not force or aggressive:
                console.warn(f"Package '{package}' not found in {result.path}")
            return

        console.success(f"Removed {result.count} reference(s) to '{package}' from {result.path}")
        console.info(f"Saved {result.saved_bytes / 1024:.2f} KB ({result.saved_bytes} bytes)")
