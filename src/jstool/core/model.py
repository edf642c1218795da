"""Result records returned by jstool operations.

Operations never print. They return these frozen records (including any
warnings raised along the way) and the CLI renders them.

This module must not import js/transforms/bundle/cli.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable

# Detection strategies reported by analyze.
STRATEGY_AST = "ast"
STRATEGY_REGEX = "regex"
STRATEGY_BUNDLER = "bundler"

# Removal strategies reported by remove.
REMOVAL_TREE = "tree"
REMOVAL_CONSERVATIVE = "conservative"
REMOVAL_AGGRESSIVE = "aggressive"


def unique_in_order(values: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate, keeping the first occurrence of each value."""
    return tuple(dict.fromkeys(values))


def text_size(text: str) -> int:
    """Size of `text` in bytes once written as UTF-8."""
    return len(text.encode("utf-8"))


@dataclass(frozen=True)
class AnalysisReport:
    path: Path
    lines: int
    packages: tuple[str, ...]
    strategy: str = STRATEGY_AST
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class RemovalResult:
    """Outcome of a removal.

    Force mode names its backup in `notes`; by the time the result is returned
    that backup has been deleted (on success) or restored and deleted.
    """

    path: Path
    package: str
    removed: bool
    count: int = 0
    strategy: str | None = None
    original_size: int = 0
    new_size: int = 0
    warnings: tuple[str, ...] = ()
    notes: tuple[str, ...] = ()

    @property
    def saved_bytes(self) -> int:
        return self.original_size - self.new_size


@dataclass(frozen=True)
class FormatResult:
    path: Path
    minified: bool
    original_size: int
    new_size: int
    parser: str | None = None
    warnings: tuple[str, ...] = ()

    @property
    def size_diff(self) -> int:
        return self.original_size - self.new_size

    @property
    def compression_ratio(self) -> float:
        """Percentage of the original size saved (0.0 for empty input)."""
        if self.original_size == 0:
            return 0.0
        return self.size_diff / self.original_size * 100


@dataclass(frozen=True)
class PackageInfo:
    name: str
    version: str


@dataclass(frozen=True)
class BundleResult:
    out: Path
    packages: tuple[str, ...]
    minified: bool = False
    command: tuple[str, ...] = ()


@dataclass(frozen=True)
class FileStats:
    path: Path
    size: int
    lines: int
    characters: int
    last_modified: datetime
    is_minified: bool

    @property
    def size_kb(self) -> str:
        return f"{self.size / 1024:.2f}"


@dataclass(frozen=True)
class ValidationReport:
    valid: bool
    issues: tuple[str, ...] = field(default_factory=tuple)
    size: int = 0
    lines: int = 0
