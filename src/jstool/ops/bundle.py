"""Build a browser vendor bundle from package names."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from jstool.bundle.build import run_bundle
from jstool.bundle.manifest import BundleManifest
from jstool.core.config import DEFAULT_BUNDLE_OUT, BundleOptions
from jstool.core.errors import BundleError
from jstool.core.model import BundleResult, PackageInfo
from jstool.io.versions import get_package_version


def describe_packages(names: Iterable[str], *, cwd: Optional[Path] = None) -> tuple[PackageInfo, ...]:
    return tuple(PackageInfo(name=n, version=get_package_version(n, cwd=cwd)) for n in names)


def bundle_packages(
    packages: Iterable[str],
    *,
    out: str = DEFAULT_BUNDLE_OUT,
    minify: bool = False,
    cwd: Optional[Path] = None,
    executable: Optional[list[str]] = None,
) -> BundleResult:
    """Bundle `packages` into `out` as an IIFE exposing `VendorBundle`.

    Raises:
        BundleError: for an empty/invalid package list or a failed build.
    """
    try:
        manifest = BundleManifest.from_names(packages)
    except ValueError as e:
        raise BundleError(str(e)) from e

    options = BundleOptions(out=out, minify=minify)
    argv = run_bundle(manifest, options, cwd=cwd, executable=executable)
    return BundleResult(
        out=Path(out),
        packages=manifest.packages,
        minified=minify,
        command=tuple(argv),
    )
