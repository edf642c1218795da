from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import backups_of, read_source, write_source
from jstool.cli.main import app
from jstool.core.errors import ParseError, SourceEncodingError
from jstool.core.model import REMOVAL_AGGRESSIVE, REMOVAL_CONSERVATIVE, REMOVAL_TREE
from jstool.ops import remove as remove_mod
from jstool.ops.remove import AGGRESSIVE_WARNING, NOTHING_FOUND_WARNING, remove_package

SOURCE = "import $ from 'jquery';\nconst moment = require('moment');\nconsole.log($, moment);\n"


# =============================================================================
# default (exact-match tree) mode
# =============================================================================


def test_remove_import_declaration(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", SOURCE)

    result = remove_package(p, "jquery")

    assert result.removed
    assert result.count == 1
    assert result.strategy == REMOVAL_TREE
    assert read_source(p) == "const moment = require('moment');\nconsole.log($, moment);\n"
    assert result.saved_bytes == len("import $ from 'jquery';\n")


def test_remove_require_statement(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", SOURCE)

    result = remove_package(p, "moment")

    assert result.removed
    assert read_source(p) == "import $ from 'jquery';\nconsole.log($, moment);\n"


def test_remove_is_idempotent(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", SOURCE)
    remove_package(p, "jquery")
    after_first = read_source(p)

    second = remove_package(p, "jquery")

    assert not second.removed
    assert read_source(p) == after_first


def test_remove_exact_match_only(tmp_path: Path) -> None:
    text = "import 'jquery-ui';\nrequire('jquery/dist');\n"
    p = write_source(tmp_path / "app.js", text)

    result = remove_package(p, "jquery")

    assert not result.removed
    assert read_source(p) == text


def test_remove_keeps_syntax_for_braceless_statements(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", "if (x) require('a');\nrequire('a');\nfoo();\n")

    result = remove_package(p, "a")

    assert result.count == 2
    assert read_source(p) == "if (x) ;\nfoo();\n"


def test_remove_preserves_crlf_and_comments(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", "// header\r\nimport a from 'a';\r\nimport b from 'b';\r\n")

    remove_package(p, "a")

    assert read_source(p) == "// header\r\nimport b from 'b';\r\n"


def test_remove_accepts_modern_syntax(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", "import a from 'a';\nconst v = obj?.b ?? 1;\nclass A { x = 1; }\n")

    result = remove_package(p, "a")

    assert result.count == 1
    assert read_source(p) == "const v = obj?.b ?? 1;\nclass A { x = 1; }\n"


def test_remove_accepts_typescript(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.ts", "import a from 'a';\nlet n: number = 1;\n")

    remove_package(p, "a")

    assert read_source(p) == "let n: number = 1;\n"


def test_remove_exported_declaration_takes_export(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", "export const x = require('a');\nrun();\n")

    result = remove_package(p, "a")

    assert result.count == 1
    assert read_source(p) == "run();\n"


def test_remove_for_initializer_leaves_empty_init(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", "for (var m = require('a'); m; m = 0) {}\n")

    remove_package(p, "a")

    assert read_source(p) == "for (; m; m = 0) {}\n"


def test_remove_default_mode_parse_error(tmp_path: Path) -> None:
    text = "import a from 'a';\nfunction ( {\n"
    p = write_source(tmp_path / "broken.js", text)

    with pytest.raises(ParseError, match="Failed to parse JavaScript"):
        remove_package(p, "a")
    assert read_source(p) == text


def test_remove_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        remove_package(tmp_path / "missing.js", "a")


# =============================================================================
# force mode
# =============================================================================


def test_force_tree_removal_uses_substring_match(tmp_path: Path) -> None:
    p = write_source(
        tmp_path / "app.js",
        "import map from 'lodash/map';\nconst a = require('lodash/fp'), b = require('other');\nuse(a, b);\n",
    )

    result = remove_package(p, "lodash", force=True)

    assert result.removed
    assert result.strategy == REMOVAL_TREE
    assert result.count == 2
    assert read_source(p) == "const b = require('other');\nuse(a, b);\n"
    assert backups_of(p) == []


def test_force_success_deletes_backup_named_in_notes(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", "const x = require('lodash');\nrun();\n")

    result = remove_package(p, "lodash", force=True)

    backup = Path(result.notes[0].replace("Backup created: ", "", 1))
    assert backup.name.startswith("app.js.backup.")
    assert not backup.exists()


def test_force_removes_declaration_when_all_declarators_match(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", "var a = require('x1'), b = require('x2');\nrun();\n")

    result = remove_package(p, "x", force=True)

    assert result.count == 2
    assert read_source(p) == "run();\n"


def test_force_falls_back_to_conservative_patterns(tmp_path: Path) -> None:
    p = write_source(tmp_path / "min.js", "const x = require('lodash');\nfunction ( {\n")

    result = remove_package(p, "lodash", force=True)

    assert result.removed
    assert result.strategy == REMOVAL_CONSERVATIVE
    assert read_source(p) == "/* removed const x = require('lodash'); */\nfunction ( {\n"
    assert any(w.startswith("AST parse failed in force mode") for w in result.warnings)
    assert backups_of(p) == []


def test_force_nothing_found_restores_original(tmp_path: Path) -> None:
    text = "var a = 1;\n"
    p = write_source(tmp_path / "app.js", text)

    result = remove_package(p, "lodash", force=True)

    assert not result.removed
    assert NOTHING_FOUND_WARNING in result.warnings
    assert read_source(p) == text
    assert backups_of(p) == []


def test_force_aggressive_not_used_when_conservative_matches(tmp_path: Path) -> None:
    p = write_source(tmp_path / "min.js", "function ( {\nvar x = require('lodash');\nlodash.map();\n")

    result = remove_package(p, "lodash", force=True, aggressive=True)

    assert result.strategy == REMOVAL_CONSERVATIVE
    assert AGGRESSIVE_WARNING not in result.warnings
    assert "lodash.map();" in read_source(p)


def test_force_aggressive_deletes_lines(tmp_path: Path) -> None:
    p = write_source(tmp_path / "min.js", "function ( {\nwindow.lodash = 1;\nkeep();\n")

    result = remove_package(p, "lodash", force=True, aggressive=True)

    assert result.removed
    assert result.strategy == REMOVAL_AGGRESSIVE
    assert AGGRESSIVE_WARNING in result.warnings
    assert read_source(p) == "function ( {\nkeep();"


def test_force_aggressive_nothing_found_restores_original(tmp_path: Path) -> None:
    text = "function ( {\nkeep();\n"
    p = write_source(tmp_path / "min.js", text)

    result = remove_package(p, "lodash", force=True, aggressive=True)

    assert not result.removed
    assert read_source(p) == text
    assert backups_of(p) == []


def test_force_restores_file_when_write_fails(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    text = "const x = require('lodash');\nrun();\n"
    p = write_source(tmp_path / "app.js", text)

    def broken_write(path, new_text) -> None:
        Path(path).write_text(new_text[:5], encoding="utf-8")
        raise OSError("disk full")

    monkeypatch.setattr(remove_mod, "write_text_exact", broken_write)

    with pytest.raises(OSError, match="disk full"):
        remove_package(p, "lodash", force=True)

    assert read_source(p) == text
    assert backups_of(p) == []


# =============================================================================
# CLI
# =============================================================================


def test_cli_remove_reports_success(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", SOURCE)

    res = CliRunner().invoke(app, ["remove", str(p), "jquery"])

    assert res.exit_code == 0
    assert "Removed 1 reference(s) to 'jquery'" in res.output


def test_cli_remove_not_found_exits_zero(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", SOURCE)

    res = CliRunner().invoke(app, ["remove", str(p), "react"])

    assert res.exit_code == 0
    assert "Package 'react' not found" in res.output


def test_cli_remove_force_prints_backup_and_hint(tmp_path: Path) -> None:
    p = write_source(tmp_path / "app.js", "var a = 1;\n")

    res = CliRunner().invoke(app, ["remove", str(p), "lodash", "-f"])

    assert res.exit_code == 0
    assert "Backup created:" in res.output
    assert "--aggressive" in res.output


def test_cli_remove_parse_error_exits_zero(tmp_path: Path) -> None:
    p = write_source(tmp_path / "broken.js", "function ( {\n")

    res = CliRunner().invoke(app, ["remove", str(p), "a"])

    assert res.exit_code == 0
    assert "Failed to remove package" in res.output


def test_remove_refuses_non_utf8_file(tmp_path: Path) -> None:
    p = tmp_path / "latin1.js"
    p.write_bytes(b"// caf\xe9\nrequire('x');\n")

    with pytest.raises(SourceEncodingError, match="not valid UTF-8"):
        remove_package(p, "x", force=True)

    assert p.read_bytes() == b"// caf\xe9\nrequire('x');\n"
    assert backups_of(p) == []


def test_cli_remove_non_utf8_file_exits_zero(tmp_path: Path) -> None:
    p = tmp_path / "latin1.js"
    p.write_bytes(b"// caf\xe9\nrequire('x');\n")

    res = CliRunner().invoke(app, ["remove", str(p), "x"])

    assert res.exit_code == 0
    assert "Failed to remove package" in res.output
    assert "not valid UTF-8" in res.output
