"""`jstool bundle` command.

Bundles npm packages into one browser IIFE exposing `VendorBundle`. Exits 1
when no package is given; build failures are reported and exit 0.
"""

from __future__ import annotations

from typing import List, Optional

import typer

from jstool.cli import console
from jstool.core.config import DEFAULT_BUNDLE_OUT, UNKNOWN_VERSION
from jstool.core.errors import JsToolError
from jstool.ops.bundle import bundle_packages, describe_packages


def register(app: typer.Typer) -> None:
    @app.command("bundle")
    def bundle(
        packages: Optional[List[str]] = typer.Argument(None, help="npm package names, bundled in order."),
        out: str = typer.Option(DEFAULT_BUNDLE_OUT, "-o", "--out", help="Output file name."),
        minify: bool = typer.Option(False, "--minify", help="Minify the bundle."),
    ) -> None:
        """Create a bundle containing the specified npm packages."""
        if not packages:
            console.error("You must specify at least one package.")
            raise typer.Exit(code=1)

        console.header("Preparing bundle for packages:")
        for info in describe_packages(packages):
            version = info.version if info.version == UNKNOWN_VERSION else f"v{info.version}"
            typer.echo(f" - {typer.style(info.name, fg=typer.colors.GREEN)} ({version})")

        try:
            result = bundle_packages(packages, out=out, minify=minify)
        except (JsToolError, OSError) as e:
            console.error(f"Failed to create bundle: {e}")
            return

        console.success(f"Bundle created successfully: {result.out}")
