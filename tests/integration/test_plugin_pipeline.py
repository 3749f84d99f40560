"""
Test: End-to-end alias resolution through the plugin.
Feeds sources and doclets the way a documentation host would and checks the
rewritten types.
"""

import random
from pathlib import Path

import pytest

from docalias import ImportAliasPlugin
from docalias.config import ResolverConfig
from docalias.errors import TypeExpressionError
from docalias.models import Doclet, ParseEvent
from docalias.resolution import SlotState

MOCKS = (Path(__file__).parent.parent / "mocks" / "js").resolve()
LIB = MOCKS / "lib"
APP = MOCKS / "app"


def doclet(path, filename, kind, name, longname, scope="global", code=None, lineno=1, **tags):
    data = {
        "kind": kind,
        "name": name,
        "longname": longname,
        "scope": scope,
        "meta": {
            "path": str(path),
            "filename": filename,
            "lineno": lineno,
            "code": code or {"name": name}
        }
    }
    for key, value in tags.items():
        data[key] = value
    return Doclet.from_dict(data)


def assignment(path, filename, target, value, scope="static"):
    return doclet(
        path, filename, "member", target.split(".")[-1], target, scope=scope,
        code={"type": "Identifier", "name": target, "value": value}
    )


def types(*names):
    return {"type": {"names": list(names)}}


def mock_doclets():
    """Doclets a host would produce for tests/mocks/js."""
    return [
        doclet(LIB, "widget.js", "class", "WidgetOptions", "pkg.WidgetOptions",
               code={"type": "ClassDeclaration", "name": "WidgetOptions"}),
        doclet(LIB, "widget.js", "function", "Widget", "pkg.Widget",
               code={"type": "FunctionDeclaration", "name": "Widget"},
               params=[types("WidgetOptions")]),
        assignment(LIB, "widget.js", "module.exports", "Widget"),
        assignment(LIB, "widget.js", "Widget.WidgetOptions", "WidgetOptions"),

        doclet(LIB, "shapes.js", "class", "Shape", "pkg.Shape"),
        doclet(LIB, "shapes.js", "class", "Circle", "pkg.Circle", augments=["Shape"]),
        assignment(LIB, "shapes.js", "shapes", "exports", scope="global"),
        assignment(LIB, "shapes.js", "shapes.Shape", "Shape"),
        assignment(LIB, "shapes.js", "shapes.Circle", "Circle"),

        doclet(APP, "main.js", "function", "render", "app.render", lineno=18,
               params=[
                   types("Widget"),
                   types("Options"),
                   types("Object.<string, Array.<Circle>>"),
                   types("Missing")
               ],
               returns=[types("Array.<Widget>")]),
        assignment(APP, "main.js", "module.exports", "render"),
    ]


def run(plugin, files, doclets):
    for path in files:
        plugin.before_parse(ParseEvent(filename=str(path), source=path.read_text()))
    for item in doclets:
        plugin.new_doclet(item)
    return plugin.processing_complete(doclets)


class TestMockProject:
    FILES = [LIB / "widget.js", LIB / "shapes.js", APP / "main.js"]

    def setup_method(self):
        self.plugin = ImportAliasPlugin()
        self.doclets = mock_doclets()
        self.stats = run(self.plugin, self.FILES, self.doclets)

    def by_longname(self, longname):
        return next(d for d in self.doclets if d.longname == longname)

    def test_params_are_rewritten(self):
        render = self.by_longname("app.render")

        assert [p.type.names for p in render.params] == [
            ["pkg.Widget"],
            ["pkg.WidgetOptions"],
            ["Object.<string, Array.<pkg.Circle>>"],
            ["Missing"]
        ]

    def test_returns_are_rewritten(self):
        assert self.by_longname("app.render").returns[0].type.names == ["Array.<pkg.Widget>"]

    def test_same_file_declarations_are_rewritten(self):
        assert self.by_longname("pkg.Widget").params[0].type.names == ["pkg.WidgetOptions"]
        assert self.by_longname("pkg.Circle").augments == ["pkg.Shape"]

    def test_export_tables(self):
        registry = self.plugin.registry

        assert registry.get(str(LIB / "widget.js")).export_table == {
            "*": "pkg.Widget",
            "WidgetOptions": "pkg.WidgetOptions"
        }
        assert registry.get(str(LIB / "shapes.js")).export_table == {
            "Shape": "pkg.Shape",
            "Circle": "pkg.Circle"
        }

    def test_alias_states(self):
        aliases = self.plugin.registry.get(str(APP / "main.js")).local_aliases

        assert aliases["BaseShape"].longname == "pkg.Shape"
        assert aliases["Options"].longname == "pkg.WidgetOptions"
        assert aliases["Missing"].state == SlotState.FAILED

    def test_stats(self):
        assert self.stats.files == 3
        assert self.stats.resolved == 5
        assert self.stats.failed == 1
        assert self.stats.doclets_rewritten == 3

    def test_typedef_import_is_stripped_before_parsing(self):
        event = ParseEvent(filename=str(APP / "main.js"), source=(APP / "main.js").read_text())
        ImportAliasPlugin().before_parse(event)

        assert "@typedef {import(" not in event.source
        assert "require('../lib/widget')" in event.source


class TestSpecScenarios:
    def write(self, tmp_path, name, source):
        path = tmp_path / name
        path.write_text(source)
        return path

    def test_destructured_whole_module_export(self, tmp_path):
        a = self.write(tmp_path, "a.js", "function Widget() {}\nmodule.exports = Widget;\n")
        b = self.write(tmp_path, "b.js", (
            "const {Widget} = require('./a');\n"
            "/** @param {Widget} w */\n"
            "function use(w) {}\n"
        ))
        doclets = [
            doclet(tmp_path, "a.js", "function", "Widget", "pkg.Widget"),
            assignment(tmp_path, "a.js", "module.exports", "Widget"),
            doclet(tmp_path, "b.js", "function", "use", "use", params=[types("Widget")]),
        ]
        run(ImportAliasPlugin(), [a, b], doclets)

        assert doclets[2].params[0].type.names == ["pkg.Widget"]

    def test_file_without_module_exports(self, tmp_path):
        a = self.write(tmp_path, "a.js", "function Widget() {}\n")
        b = self.write(tmp_path, "b.js", "const Widget = require('./a');\n")
        doclets = [
            doclet(tmp_path, "a.js", "function", "Widget", "pkg.Widget"),
            doclet(tmp_path, "b.js", "function", "use", "use",
                   params=[types("Array.<Widget>")]),
        ]
        plugin = ImportAliasPlugin()
        run(plugin, [a, b], doclets)

        assert plugin.registry.get(str(a)).export_table == {}
        assert plugin.registry.get(str(b)).local_aliases["Widget"].state == SlotState.FAILED
        assert doclets[1].params[0].type.names == ["Array.<Widget>"]

    def test_order_independence(self):
        expected = mock_doclets()
        run(ImportAliasPlugin(), TestMockProject.FILES, expected)

        rng = random.Random(7)
        for _ in range(5):
            files = list(TestMockProject.FILES)
            rng.shuffle(files)
            doclets = mock_doclets()
            shuffled = list(doclets)
            rng.shuffle(shuffled)

            plugin = ImportAliasPlugin()
            for path in files:
                plugin.before_parse(ParseEvent(filename=str(path), source=path.read_text()))
            for item in shuffled:
                plugin.new_doclet(item)
            plugin.processing_complete(doclets)

            assert [d.to_dict() for d in doclets] == [d.to_dict() for d in expected]

    def test_malformed_type_aborts(self, tmp_path):
        a = self.write(tmp_path, "a.js", "function f() {}\n")
        doclets = [
            doclet(tmp_path, "a.js", "function", "f", "pkg.f", lineno=7,
                   params=[types("Array.<Foo")]),
        ]

        with pytest.raises(TypeExpressionError) as excinfo:
            run(ImportAliasPlugin(), [a], doclets)

        assert excinfo.value.filename == "a.js"
        assert excinfo.value.lineno == 7

    def test_disable_generation(self, tmp_path):
        a = self.write(tmp_path, "a.js", "function f() {}\n")
        doclets = [doclet(tmp_path, "a.js", "function", "f", "pkg.f")]
        plugin = ImportAliasPlugin(ResolverConfig(disable_generation=True))
        run(plugin, [a], doclets)

        assert doclets == []

    def test_handlers(self):
        plugin = ImportAliasPlugin()

        assert set(plugin.handlers) == {"beforeParse", "newDoclet", "processingComplete"}
        assert plugin.handlers["newDoclet"] == plugin.new_doclet
