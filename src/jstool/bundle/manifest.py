"""Bundle manifest: the ordered package list behind a vendor bundle.

The manifest is rendered as a throwaway entry module with one side-effect
import per package, in input order, which the bundler then follows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class BundleManifest:
    packages: tuple[str, ...]

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "BundleManifest":
        packages = tuple(str(n).strip() for n in names)
        if not packages:
            raise ValueError("bundle manifest: at least one package is required")
        for i, name in enumerate(packages):
            if not name:
                raise ValueError(f"bundle manifest: packages[{i}] must be a non-empty string")
            if "'" in name or "\n" in name:
                raise ValueError(f"bundle manifest: packages[{i}] is not a valid module specifier: {name!r}")
        return cls(packages=packages)

    def entry_source(self) -> str:
        return "\n".join(f"import '{name}';" for name in self.packages)
