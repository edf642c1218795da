"""Coloured console output shared by the commands."""

from __future__ import annotations

import typer


def header(message: str) -> None:
    typer.secho(message, fg=typer.colors.CYAN)


def info(message: str) -> None:
    typer.secho(message, fg=typer.colors.BLUE)


def success(message: str) -> None:
    typer.secho(f"✔ {message}", fg=typer.colors.GREEN)


def warn(message: str) -> None:
    typer.secho(f"⚠ {message}", fg=typer.colors.YELLOW)


def detail(message: str) -> None:
    typer.secho(message, fg=typer.colors.BRIGHT_BLACK)


def error(message: str) -> None:
    typer.secho(f"✖ {message}", fg=typer.colors.RED, err=True)


def warnings(messages: tuple[str, ...]) -> None:
    for m in messages:
        warn(m)
