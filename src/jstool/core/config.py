"""Static configuration for jstool.

jstool owns no configuration file. Behaviour is controlled by CLI options, the
constants below, and the frozen option dataclasses. The only external
configuration read is a project's Prettier config (see `jstool.io.styleconfig`).
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

# ---- analyze ----
# Short files mentioning the bundler are assumed to be pre-bundled output.
BUNDLER_LINE_THRESHOLD = 100
BUNDLER_MARKER = "webpack"

# ---- remove ----
BACKUP_INFIX = ".backup."

# ---- bundle ----
BUNDLE_GLOBAL_NAME = "VendorBundle"
TEMP_ENTRY_NAME = "__temp_entry.js"
DEFAULT_BUNDLE_OUT = "bundle.js"

# ---- environment ----
MODULE_PATH_ENV = "NODE_PATH"
ESBUILD_ENV = "JSTOOL_ESBUILD"

UNKNOWN_VERSION = "unknown version"


@dataclass(frozen=True)
class StyleOptions:
    """Formatting style, using Prettier's option names (snake_cased)."""

    tab_width: int = 2
    use_tabs: bool = False
    semi: bool = True
    single_quote: bool = True
    quote_props: str = "as-needed"
    trailing_comma: str = "es5"
    bracket_spacing: bool = True
    arrow_parens: str = "avoid"
    print_width: int = 100
    parser: Optional[str] = None

    @classmethod
    def from_prettier(cls, config: Mapping[str, Any]) -> "StyleOptions":
        """Build options from a Prettier config dict.

        Keys the config does not set take Prettier's own defaults, not the
        jstool default style. Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        overrides: dict[str, Any] = {}
        for key, value in config.items():
            name = _snake(str(key))
            if name in known:
                overrides[name] = value
        return replace(PRETTIER_BUILTIN_STYLE, **overrides)

    def with_parser(self, parser: str) -> "StyleOptions":
        return replace(self, parser=parser)


def _snake(name: str) -> str:
    out = []
    for ch in name:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


# Fallback used when no project config resolves.
DEFAULT_STYLE = StyleOptions()

# Prettier's built-in defaults, used to fill keys missing from a project config.
PRETTIER_BUILTIN_STYLE = StyleOptions(
    tab_width=2,
    use_tabs=False,
    semi=True,
    single_quote=False,
    quote_props="as-needed",
    trailing_comma="all",
    bracket_spacing=True,
    arrow_parens="always",
    print_width=80,
)


@dataclass(frozen=True)
class MinifyOptions:
    """Minification settings (fixed for the `format --minify` command)."""

    dead_code: bool = True
    drop_console: bool = False
    drop_debugger: bool = True
    keep_infinity: bool = True
    passes: int = 2
    mangle_toplevel: bool = False
    keep_fnames: bool = False
    beautify: bool = False
    comments: bool = False


DEFAULT_MINIFY = MinifyOptions()


@dataclass(frozen=True)
class BundleOptions:
    out: str = DEFAULT_BUNDLE_OUT
    minify: bool = False
    platform: str = "browser"
    format: str = "iife"
    global_name: str = BUNDLE_GLOBAL_NAME
    entry_name: str = TEMP_ENTRY_NAME
