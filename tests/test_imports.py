"""Tests for cross-file import resolution."""

import pytest

from rpc_sdkgen.core.ast import (
    CustomNodeLiteral,
    IntegerLiteral,
    PropertyDefinition,
    StringLiteral,
    StructLiteral,
    TypeAlias,
    TypeLiteral,
)
from rpc_sdkgen.core.imports import ImportGraphResolver, normalize_path, relative_module_path
from rpc_sdkgen.languages.dart import DartGenerator
from rpc_sdkgen.languages.python import PythonGenerator
from rpc_sdkgen.languages.typescript import TypeScriptGenerator


def bar_signature():
    return [IntegerLiteral(), CustomNodeLiteral("Foo"), CustomNodeLiteral("Page")]


@pytest.fixture
def resolver():
    return ImportGraphResolver(TypeScriptGenerator().import_path)


class TestResolveClass:
    def test_proxy_imports_and_local_declarations(self, resolver, cross_file_program):
        result = resolver.resolve_class(
            "bar.sdk", "api/Bar.ts", cross_file_program.declarations(), bar_signature()
        )

        assert [d.name for d in result.local_declarations] == ["Page"]
        assert len(result.imports) == 1
        group = result.imports[0]
        assert group.provider == "models/foo"
        assert group.path == "./models/foo"
        assert group.names == ["Foo"]
        assert group.last

    def test_type_files(self, resolver, cross_file_program):
        resolver.resolve_class("bar.sdk", "api/Bar.ts", cross_file_program.declarations(), bar_signature())

        files = resolver.type_files()
        assert [f.path for f in files] == ["models/foo", "models/status"]

        foo, status = files
        assert [d.name for d in foo.declarations] == ["Foo"]
        assert [(g.path, g.names) for g in foo.imports] == [("./status", ["Status"])]
        assert [d.name for d in status.declarations] == ["Status"]
        assert status.imports == []

    def test_unreachable_declarations_are_dropped(self, resolver, cross_file_program):
        resolver.resolve_class("bar.sdk", "api/Bar.ts", cross_file_program.declarations(), bar_signature())
        assert "models/unused" not in [f.path for f in resolver.type_files()]

    def test_no_signature_types(self, resolver, cross_file_program):
        result = resolver.resolve_class("bar.sdk", "api/Bar.ts", cross_file_program.declarations(), [])
        assert result.imports == []
        assert result.local_declarations == []
        assert resolver.type_files() == []

    def test_declaration_without_home_is_local(self, resolver):
        alias = TypeAlias("Ids", StringLiteral())
        result = resolver.resolve_class("user.sdk", "user.ts", [alias], [CustomNodeLiteral("Ids")])
        assert result.local_declarations == [alias]
        assert result.imports == []

    def test_inline_declaration_in_signature(self, resolver):
        struct = StructLiteral(
            "Point", TypeLiteral((PropertyDefinition("x", IntegerLiteral()),)), home_path="geo/point"
        )
        result = resolver.resolve_class("map.sdk", "map.ts", [], [struct])
        assert result.imports[0].path == "./geo/point"
        assert [f.path for f in resolver.type_files()] == ["geo/point"]

    def test_first_declaration_wins_on_name_clash(self, resolver):
        first = TypeAlias("Id", StringLiteral(), home_path="a/id")
        second = TypeAlias("Id", IntegerLiteral(), home_path="b/id")
        result = resolver.resolve_class("x.sdk", "x.ts", [first, second], [CustomNodeLiteral("Id")])
        assert result.imports[0].provider == "a/id"

    def test_type_file_shared_by_two_classes(self, resolver, cross_file_program):
        declarations = cross_file_program.declarations()
        resolver.resolve_class("bar.sdk", "api/Bar.ts", declarations, bar_signature())
        second = resolver.resolve_class("baz.sdk", "api/Baz.ts", declarations, [CustomNodeLiteral("Foo")])

        assert second.imports[0].names == ["Foo"]
        files = resolver.type_files()
        assert [f.path for f in files] == ["models/foo", "models/status"]
        assert [d.name for d in files[0].declarations] == ["Foo"]

    def test_resolution_is_deterministic(self, cross_file_program):
        def resolve():
            resolver = ImportGraphResolver(TypeScriptGenerator().import_path)
            result = resolver.resolve_class(
                "bar.sdk", "api/Bar.ts", cross_file_program.declarations(), bar_signature()
            )
            return result, resolver.type_files()

        assert resolve() == resolve()


# ============================================================================
# Import lists
# ============================================================================


def test_import_list_order_and_last_flags():
    resolver = ImportGraphResolver(lambda consumer, provider: provider)
    resolver.add_edge("a", "z/x", "B")
    resolver.add_edge("a", "z/x", "A")
    resolver.add_edge("a", "b/y", "C")
    resolver.add_edge("a", "a", "Self")

    groups = resolver.import_list("a")

    assert [g.path for g in groups] == ["b/y", "z/x"]
    assert [g.last for g in groups] == [False, True]
    assert groups[1].names == ["A", "B"]
    assert [s.last for s in groups[1].symbols] == [False, True]
    assert resolver.imports_of("a") == {"b/y": ["C"], "z/x": ["A", "B"]}


def test_import_list_of_unknown_file():
    assert ImportGraphResolver(lambda c, p: p).import_list("nothing") == []


# ============================================================================
# Paths
# ============================================================================


def test_normalize_path():
    assert normalize_path("./models\\foo.ts", strip_extension=True) == "models/foo"
    assert normalize_path("/api/Bar.ts") == "api/Bar.ts"


def test_relative_module_path():
    assert relative_module_path("user.sdk", "models/foo") == "models/foo"
    assert relative_module_path("models/foo", "models/status") == "status"
    assert relative_module_path("api/bar", "models/foo") == "../models/foo"


@pytest.mark.parametrize(
    "generator_class, expected",
    [
        (TypeScriptGenerator, ["./models/foo", "./status", "../models/foo"]),
        (PythonGenerator, [".models.foo", ".status", "..models.foo"]),
        (DartGenerator, ["models/foo.dart", "status.dart", "../models/foo.dart"]),
    ],
)
def test_language_import_paths(generator_class, expected):
    generator = generator_class()
    pairs = [("bar.sdk", "models/foo"), ("models/foo", "models/status"), ("api/bar", "models/foo")]
    assert [generator.import_path(consumer, provider) for consumer, provider in pairs] == expected
