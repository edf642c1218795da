from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import write_source
from jstool.cli.main import app
from jstool.core.model import STRATEGY_AST, STRATEGY_BUNDLER, STRATEGY_REGEX
from jstool.ops.analyze import FALLBACK_WARNING, analyze_file, analyze_source


def test_analyze_detects_import_and_require(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", "import 'jquery';\nrequire('moment');\n")

    report = analyze_file(p)

    assert report.lines == 3
    assert set(report.packages) == {"jquery", "moment"}
    assert report.strategy == STRATEGY_AST
    assert report.warnings == ()


def test_analyze_empty_file_finds_nothing(tmp_path: Path) -> None:
    p = write_source(tmp_path / "empty.js", "")

    report = analyze_file(p)

    assert report.packages == ()
    assert report.lines == 1


def test_analyze_deduplicates_and_ignores_dynamic_specifiers() -> None:
    code = (
        "const a = require('x');\n"
        "const b = require('x');\n"
        "const c = require(name);\n"
        "import y from 'y';\n"
    )

    report = analyze_source(code)

    assert report.packages == ("y", "x")


def test_analyze_falls_back_to_regex_when_parse_fails() -> None:
    code = "import x from 'lib';\nconst m = require('moment');\nthis is not js {\n"

    report = analyze_source(code)

    assert report.strategy == STRATEGY_REGEX
    assert report.packages == ("lib", "moment")
    assert report.warnings == (FALLBACK_WARNING,)


def test_analyze_skips_parsing_for_suspected_bundles() -> None:
    code = (
        "/* webpack bundle */\n"
        'var m = {"./node_modules/lodash/index.js": function(){ require(\'react\'); }};\n'
    )

    report = analyze_source(code)

    assert report.strategy == STRATEGY_BUNDLER
    assert report.packages == ("react", "lodash")


def test_analyze_parses_long_files_even_with_marker() -> None:
    code = "// webpack\n" + "var a = require('left');\n" * 99

    report = analyze_source(code)

    assert report.lines == 101
    assert report.strategy == STRATEGY_AST
    assert report.packages == ("left",)


def test_analyze_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        analyze_file(tmp_path / "missing.js")


def test_cli_analyze_prints_packages(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", "import 'jquery';\nrequire('moment');\n")

    res = CliRunner().invoke(app, ["analyze", str(p)])

    assert res.exit_code == 0
    assert "Lines: 3" in res.output
    assert " - jquery" in res.output
    assert " - moment" in res.output


def test_cli_analyze_reports_none_found(tmp_path: Path) -> None:
    p = write_source(tmp_path / "empty.js", "")

    res = CliRunner().invoke(app, ["analyze", str(p)])

    assert res.exit_code == 0
    assert "(none found)" in res.output


def test_cli_analyze_missing_file_exits_zero(tmp_path: Path) -> None:
    res = CliRunner().invoke(app, ["analyze", str(tmp_path / "missing.js")])

    assert res.exit_code == 0
    assert "Failed to analyze file" in res.output


def test_cli_analyze_reads_non_utf8_file_lossily(tmp_path: Path) -> None:
    p = tmp_path / "latin1.js"
    p.write_bytes(b"// caf\xe9\nrequire('moment');\n")

    res = CliRunner().invoke(app, ["analyze", str(p)])

    assert res.exit_code == 0
    assert " - moment" in res.output
