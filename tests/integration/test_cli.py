"""
Test: Command line replay of a doclet dump.
"""

import json

import pytest
from click.testing import CliRunner

from docalias.cli import main


def write_project(tmp_path, param_type="Widget"):
    (tmp_path / "widget.js").write_text(
        "function Widget() {}\n"
        "module.exports = Widget;\n"
    )
    (tmp_path / "app.js").write_text(
        "const Widget = require('./widget');\n"
        "/** @param {Widget} w */\n"
        "function show(w) {}\n"
    )

    doclets = [
        {
            "kind": "function", "name": "Widget", "longname": "module:widget~Widget",
            "scope": "global",
            "meta": {"path": str(tmp_path), "filename": "widget.js", "lineno": 1,
                     "code": {"name": "Widget", "type": "FunctionDeclaration"}}
        },
        {
            "kind": "member", "name": "exports", "longname": "module.exports",
            "scope": "static", "undocumented": True,
            "meta": {"path": str(tmp_path), "filename": "widget.js", "lineno": 2,
                     "code": {"name": "module.exports", "type": "Identifier", "value": "Widget"}}
        },
        {
            "kind": "function", "name": "show", "longname": "show", "scope": "global",
            "comment": "/** @param {Widget} w */",
            "meta": {"path": str(tmp_path), "filename": "app.js", "lineno": 3,
                     "code": {"name": "show", "type": "FunctionDeclaration"}},
            "params": [{"type": {"names": [param_type]}, "name": "w"}]
        },
        {"kind": "package", "longname": "package:undefined"}
    ]
    doclets_path = tmp_path / "doclets.json"
    doclets_path.write_text(json.dumps(doclets))
    return doclets_path


class TestCli:
    @pytest.fixture
    def runner(self):
        return CliRunner()

    def test_resolves_and_exports(self, runner, tmp_path):
        doclets_path = write_project(tmp_path)
        out = tmp_path / "out" / "doclets.json"

        result = runner.invoke(main, ["--doclets", str(doclets_path), "--out", str(out)])

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        show = next(d for d in data["doclets"] if d["longname"] == "show")
        assert show["params"][0]["type"]["names"] == ["module:widget~Widget"]
        assert show["comment"] == "/** @param {Widget} w */"
        assert data["metadata"]["resolved"] == 1
        assert data["metadata"]["total_doclets"] == 4
        assert data["files"][str(tmp_path / "app.js")]["local_aliases"]["Widget"]["state"] == "RESOLVED"

    def test_accepts_wrapped_dump(self, runner, tmp_path):
        doclets_path = write_project(tmp_path)
        wrapped = tmp_path / "wrapped.json"
        wrapped.write_text(json.dumps({"doclets": json.loads(doclets_path.read_text())}))
        out = tmp_path / "doclets.out.json"

        result = runner.invoke(main, ["--doclets", str(wrapped), "--out", str(out)])

        assert result.exit_code == 0, result.output
        assert len(json.loads(out.read_text())["doclets"]) == 4

    def test_malformed_type_exits_with_error(self, runner, tmp_path):
        doclets_path = write_project(tmp_path, param_type="Array.<Widget")

        result = runner.invoke(main, ["--doclets", str(doclets_path), "--out", str(tmp_path / "o.json")])

        assert result.exit_code == 1
        assert "app.js:3" in result.output

    def test_missing_sources_are_skipped(self, runner, tmp_path):
        doclets_path = write_project(tmp_path)
        (tmp_path / "app.js").unlink()
        out = tmp_path / "o.json"

        result = runner.invoke(main, ["--doclets", str(doclets_path), "--out", str(out)])

        assert result.exit_code == 0, result.output
        assert "Warning" in result.output
        show = next(d for d in json.loads(out.read_text())["doclets"] if d["longname"] == "show")
        assert show["params"][0]["type"]["names"] == ["Widget"]

    def test_bad_config(self, runner, tmp_path):
        doclets_path = write_project(tmp_path)
        config = tmp_path / "bad.yaml"
        config.write_text("indexed_scopes: 3\n")

        result = runner.invoke(main, ["--doclets", str(doclets_path), "--config", str(config)])

        assert result.exit_code == 1
        assert "Error" in result.output
