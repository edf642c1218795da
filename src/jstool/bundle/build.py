"""Run esbuild over a bundle manifest.

The entry file lives in the working directory so esbuild resolves packages from
the project's `node_modules`. It is removed on every path. A failed build also
removes an output file it left behind, if that file did not exist before.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import Mapping, Optional

from jstool.core.config import ESBUILD_ENV, BundleOptions
from jstool.core.errors import BundleError
from jstool.io.files import write_text_exact

from .manifest import BundleManifest


def esbuild_command(
    *,
    cwd: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> list[str]:
    """Locate esbuild: $JSTOOL_ESBUILD, PATH, ./node_modules/.bin, then npx."""
    cwd = Path.cwd() if cwd is None else Path(cwd)
    env = os.environ if environ is None else environ

    override = env.get(ESBUILD_ENV)
    if override:
        return [override]
    found = shutil.which("esbuild")
    if found:
        return [found]
    local = cwd / "node_modules" / ".bin" / "esbuild"
    if local.is_file():
        return [str(local)]
    return ["npx", "--yes", "esbuild"]


def build_argv(entry: Path, options: BundleOptions, *, executable: list[str]) -> list[str]:
    argv = [
        *executable,
        str(entry),
        "--bundle",
        f"--platform={options.platform}",
        f"--format={options.format}",
        f"--global-name={options.global_name}",
        f"--outfile={options.out}",
    ]
    if options.minify:
        argv.append("--minify")
    return argv


def run_bundle(
    manifest: BundleManifest,
    options: BundleOptions,
    *,
    cwd: Optional[Path] = None,
    executable: Optional[list[str]] = None,
) -> list[str]:
    """Build `options.out` from `manifest`; return the argv that was run.

    Raises:
        BundleError: if esbuild cannot be started or exits non-zero.
    """
    cwd = Path.cwd() if cwd is None else Path(cwd)
    entry = cwd / options.entry_name
    out = Path(options.out)
    if not out.is_absolute():
        out = cwd / out
    out_existed = out.exists()

    argv = build_argv(entry, options, executable=executable or esbuild_command(cwd=cwd))
    write_text_exact(entry, manifest.entry_source())
    try:
        try:
            result = subprocess.run(argv, cwd=str(cwd), capture_output=True, text=True, check=False)
        except OSError as e:
            raise BundleError(f"could not run esbuild: {e}", command=argv) from e
        if result.returncode != 0:
            raise BundleError(
                f"esbuild exited with code {result.returncode}",
                command=argv,
                stderr=result.stderr or "",
            )
    except BundleError:
        if not out_existed:
            out.unlink(missing_ok=True)
        raise
    finally:
        entry.unlink(missing_ok=True)
    return argv
