"""jstool CLI entrypoint.

Every command catches tool errors at its boundary and reports them, so the
process exits 0 except when `bundle` is given no packages.
"""

from __future__ import annotations

import typer

app = typer.Typer(
    name="jstool",
    add_completion=False,
    no_args_is_help=True,
    help="JS utilities: analyze, remove packages, format/minify and bundle JavaScript files.",
)


@app.callback()
def _callback() -> None:
    """JS Utilities CLI."""
    return


@app.command("version")
def version() -> None:
    """Print the installed jstool version."""
    from jstool import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `jstool --help` is fast.
    """
    from jstool.cli.commands import analyze as analyze_cmd
    from jstool.cli.commands import bundle as bundle_cmd
    from jstool.cli.commands import format as format_cmd
    from jstool.cli.commands import remove as remove_cmd
    from jstool.cli.commands import stats as stats_cmd

    analyze_cmd.register(app)
    remove_cmd.register(app)
    format_cmd.register(app)
    bundle_cmd.register(app)
    stats_cmd.register(app)


_register_commands()
