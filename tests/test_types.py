"""Tests for the per-language type mappers."""

import pytest

from rpc_sdkgen.core.ast import (
    AnyLiteral,
    ArrayType,
    BigIntLiteral,
    BooleanLiteral,
    CustomNodeLiteral,
    DateType,
    DefaultValue,
    DoubleLiteral,
    EnumCase,
    EnumDeclaration,
    IntegerLiteral,
    MapType,
    NodeType,
    NullLiteral,
    PromiseType,
    PropertyDefinition,
    StringLiteral,
    StructLiteral,
    TypeAlias,
    TypeLiteral,
    UnionType,
    UnknownNode,
    VoidLiteral,
)
from rpc_sdkgen.core.diagnostics import FALLBACK_TYPE, DiagnosticLog
from rpc_sdkgen.languages.dart.naming import create_dart_guard
from rpc_sdkgen.languages.dart.types import DartTypeMapper, nullable
from rpc_sdkgen.languages.python.naming import create_python_guard
from rpc_sdkgen.languages.python.types import PythonTypeMapper, get_required_imports, optional_annotation
from rpc_sdkgen.languages.typescript.types import TypeScriptTypeMapper


def foo_struct(*extra):
    return StructLiteral(
        "Foo",
        TypeLiteral(
            (
                PropertyDefinition("id", IntegerLiteral()),
                *extra,
                PropertyDefinition("tags", ArrayType(StringLiteral()), optional=True),
            )
        ),
    )


STATUS = EnumDeclaration("Status", (EnumCase("Active", "active"), EnumCase("InProgress", "in_progress")))


# ============================================================================
# Type mapping table
# ============================================================================


@pytest.mark.parametrize(
    "node, typescript, python, dart",
    [
        (StringLiteral(), "string", "str", "String"),
        (IntegerLiteral(), "number", "int", "int"),
        (DoubleLiteral(), "number", "float", "double"),
        (BooleanLiteral(), "boolean", "bool", "bool"),
        (BigIntLiteral(), "bigint", "int", "BigInt"),
        (AnyLiteral(), "any", "Any", "dynamic"),
        (DateType(), "Date", "datetime", "DateTime"),
        (NullLiteral(), "null", "None", "Null"),
        (ArrayType(IntegerLiteral()), "Array<number>", "list[int]", "List<int>"),
        (
            MapType(StringLiteral(), BooleanLiteral()),
            "{[key: string]: boolean}",
            "dict[str, bool]",
            "Map<String, bool>",
        ),
        (PromiseType(StringLiteral()), "Promise<string>", "Awaitable[str]", "Future<String>"),
        (UnionType((StringLiteral(), NullLiteral())), "string | null", "str | None", "String?"),
        (UnionType((StringLiteral(), StringLiteral())), "string", "str", "String"),
        (CustomNodeLiteral("Foo"), "Foo", "Foo", "Foo"),
        (STATUS, "Status", "Status", "Status"),
    ],
)
def test_map_type(node, typescript, python, dart):
    assert TypeScriptTypeMapper().map_type(node) == typescript
    assert PythonTypeMapper().map_type(node) == python
    assert DartTypeMapper().map_type(node) == dart


@pytest.mark.parametrize(
    "node, typescript, python, dart",
    [
        (StringLiteral(), "Promise<string>", "str", "Future<String>"),
        (PromiseType(StringLiteral()), "Promise<string>", "str", "Future<String>"),
        (VoidLiteral(), "", "None", "Future<void>"),
        (PromiseType(VoidLiteral()), "Promise<void>", "None", "Future<void>"),
        (ArrayType(CustomNodeLiteral("Foo")), "Promise<Array<Foo>>", "list[Foo]", "Future<List<Foo>>"),
    ],
)
def test_map_return_type(node, typescript, python, dart):
    assert TypeScriptTypeMapper().map_return_type(node) == typescript
    assert PythonTypeMapper().map_return_type(node) == python
    assert DartTypeMapper().map_return_type(node) == dart


def test_typescript_type_literal():
    literal = TypeLiteral(
        (
            PropertyDefinition("a", StringLiteral()),
            PropertyDefinition("first name", IntegerLiteral(), optional=True),
        )
    )
    assert TypeScriptTypeMapper().map_type(literal) == '{a: string, "first name"?: number}'
    assert PythonTypeMapper().map_type(literal) == "dict[str, Any]"
    assert DartTypeMapper().map_type(literal) == "Map<String, dynamic>"


# ============================================================================
# Fallbacks
# ============================================================================


class TestFallback:
    def test_unknown_node_maps_to_permissive_type(self):
        diagnostics = DiagnosticLog()
        mapper = TypeScriptTypeMapper(diagnostics)

        assert mapper.map_type(UnknownNode("ConstType")) == "any"

        fallbacks = diagnostics.by_code(FALLBACK_TYPE)
        assert len(fallbacks) == 1
        assert fallbacks[0].subject == "ConstType"

    def test_missing_node(self):
        diagnostics = DiagnosticLog()
        assert PythonTypeMapper(diagnostics).map_type(None) == "Any"
        assert diagnostics.by_code(FALLBACK_TYPE)[0].subject == "<missing>"

    def test_fallback_inside_composite(self):
        diagnostics = DiagnosticLog()
        mapper = DartTypeMapper(diagnostics)
        assert mapper.map_type(ArrayType(UnknownNode("Tuple"))) == "List<dynamic>"
        assert len(diagnostics) == 1

    def test_repeated_fallback_reported_once(self):
        diagnostics = DiagnosticLog()
        mapper = TypeScriptTypeMapper(diagnostics)
        mapper.map_type(UnknownNode("ConstType"))
        mapper.map_type(UnknownNode("ConstType"))
        assert len(diagnostics) == 1

    def test_dart_multi_type_union(self):
        diagnostics = DiagnosticLog()
        mapper = DartTypeMapper(diagnostics)

        assert mapper.map_type(UnionType((StringLiteral(), IntegerLiteral()))) == "dynamic"
        assert diagnostics.by_code(FALLBACK_TYPE)[0].subject == "UnionType"

    def test_dart_null_only_union(self):
        diagnostics = DiagnosticLog()
        assert DartTypeMapper(diagnostics).map_type(UnionType((NullLiteral(),))) == "Null"
        assert len(diagnostics) == 0


# ============================================================================
# Declarations
# ============================================================================


class TestTypeScriptDeclarations:
    def test_struct(self):
        expected = "type Foo = {id: number, tags?: Array<string>};"
        assert TypeScriptTypeMapper().render_declaration(foo_struct()) == expected

    def test_alias(self):
        alias = TypeAlias("Ids", ArrayType(StringLiteral()))
        assert TypeScriptTypeMapper().render_declaration(alias) == "type Ids = Array<string>;"

    def test_enum(self):
        assert (
            TypeScriptTypeMapper().render_declaration(STATUS)
            == 'enum Status {Active = "active", InProgress = "in_progress"}'
        )

    def test_enum_mixed_values(self):
        enum = EnumDeclaration("Level", (EnumCase("Low", 1, NodeType.INTEGER), EnumCase("High")))
        assert TypeScriptTypeMapper().render_declaration(enum) == "enum Level {Low = 1, High}"


class TestPythonDeclarations:
    def mapper(self):
        return PythonTypeMapper(indent="    ", guard=create_python_guard())

    def test_struct(self):
        struct = foo_struct(PropertyDefinition("class", StringLiteral()))
        assert self.mapper().render_declaration(struct) == (
            "@dataclass(kw_only=True)\n"
            "class Foo:\n"
            "    id: int\n"
            "    class_: str\n"
            "    tags: list[str] | None = None\n"
            "\n"
            "    @classmethod\n"
            "    def from_json(cls, data: dict[str, Any]) -> Foo:\n"
            "        return cls(\n"
            '            id=data["id"],\n'
            '            class_=data["class"],\n'
            '            tags=data.get("tags"),\n'
            "        )\n"
            "\n"
            "    def to_json(self) -> dict[str, Any]:\n"
            '        return {"id": self.id, "class": self.class_, "tags": self.tags}'
        )

    def test_empty_struct(self):
        struct = StructLiteral("Empty", TypeLiteral())
        assert self.mapper().render_declaration(struct) == (
            "@dataclass(kw_only=True)\n"
            "class Empty:\n"
            "    @classmethod\n"
            "    def from_json(cls, data: dict[str, Any]) -> Empty:\n"
            "        return cls()\n"
            "\n"
            "    def to_json(self) -> dict[str, Any]:\n"
            "        return {}"
        )

    def test_string_enum(self):
        assert self.mapper().render_declaration(STATUS) == (
            "class Status(str, Enum):\n"
            '    ACTIVE = "active"\n'
            '    IN_PROGRESS = "in_progress"'
        )

    def test_enum_without_values(self):
        enum = EnumDeclaration("Color", (EnumCase("Red"), EnumCase("Green")))
        assert self.mapper().render_declaration(enum) == (
            "class Color(Enum):\n    RED = auto()\n    GREEN = auto()"
        )

    def test_alias(self):
        alias = TypeAlias("Ids", ArrayType(StringLiteral()))
        assert self.mapper().render_declaration(alias) == 'Ids: TypeAlias = "list[str]"'

    def test_optional_annotation(self):
        assert optional_annotation("str") == "str | None"
        assert optional_annotation("int | None") == "int | None"
        assert optional_annotation("Any") == "Any"

    def test_required_imports(self):
        imports = get_required_imports(
            ["list[datetime]", "dict[str, Any]", "@dataclass(kw_only=True)\nclass Foo:", "class S(str, Enum):"]
        )
        assert imports == [
            "from dataclasses import dataclass",
            "from datetime import datetime",
            "from enum import Enum",
            "from typing import Any",
        ]

    def test_required_imports_ignore_substrings(self):
        assert get_required_imports(["AnyThing", "MyEnum"]) == []


class TestDartDeclarations:
    def mapper(self):
        return DartTypeMapper(guard=create_dart_guard())

    def test_struct(self):
        assert self.mapper().render_declaration(foo_struct()) == (
            "class Foo {\n"
            "  final int id;\n"
            "  final List<String>? tags;\n"
            "\n"
            "  const Foo({required this.id, this.tags});\n"
            "\n"
            "  factory Foo.fromJson(Map<String, dynamic> json) {\n"
            "    return Foo(\n"
            "      id: json['id'],\n"
            "      tags: json['tags'] == null ? null : List<String>.from(json['tags'] as List),\n"
            "    );\n"
            "  }\n"
            "\n"
            "  Map<String, dynamic> toJson() => {'id': id, 'tags': tags};\n"
            "}"
        )

    def test_empty_struct(self):
        assert self.mapper().render_declaration(StructLiteral("Empty", TypeLiteral())) == (
            "class Empty {\n"
            "  const Empty();\n"
            "\n"
            "  factory Empty.fromJson(Map<String, dynamic> json) => const Empty();\n"
            "\n"
            "  Map<String, dynamic> toJson() => {};\n"
            "}"
        )

    def test_valued_enum(self):
        assert self.mapper().render_declaration(STATUS) == (
            "enum Status {\n"
            "  active('active'),\n"
            "  inProgress('in_progress');\n"
            "\n"
            "  final String value;\n"
            "\n"
            "  const Status(this.value);\n"
            "\n"
            "  String toJson() => value;\n"
            "\n"
            "  static Status fromJson(dynamic json) => values.firstWhere((e) => e.toJson() == json);\n"
            "}"
        )

    def test_plain_enum(self):
        enum = EnumDeclaration("Color", (EnumCase("Red"), EnumCase("Default")))
        assert self.mapper().render_declaration(enum) == (
            "enum Color {\n"
            "  red,\n"
            "  default_;\n"
            "\n"
            "  String toJson() => name;\n"
            "\n"
            "  static Color fromJson(dynamic json) => values.firstWhere((e) => e.toJson() == json);\n"
            "}"
        )

    def test_enum_with_missing_value(self):
        enum = EnumDeclaration("Level", (EnumCase("Low", 1, NodeType.INTEGER), EnumCase("Unset")))
        rendered = self.mapper().render_declaration(enum)
        assert "  low(1),\n  unset(null);" in rendered
        assert "final int? value;" in rendered

    def test_empty_enum(self):
        assert self.mapper().render_declaration(EnumDeclaration("Nothing")) == "typedef Nothing = dynamic;"

    def test_alias(self):
        alias = TypeAlias("Ids", ArrayType(StringLiteral()))
        assert self.mapper().render_declaration(alias) == "typedef Ids = List<String>;"

    def test_nullable(self):
        assert nullable("int") == "int?"
        assert nullable("int?") == "int?"
        assert nullable("dynamic") == "dynamic"


# ============================================================================
# Result decoding
# ============================================================================


CYCLIC_ALIASES = (TypeAlias("Ping", CustomNodeLiteral("Pong")), TypeAlias("Pong", CustomNodeLiteral("Ping")))


def decoding_mapper(mapper_class):
    mapper = mapper_class()
    mapper.register_declarations((foo_struct(), STATUS, TypeAlias("When", DateType()), *CYCLIC_ALIASES))
    return mapper


@pytest.mark.parametrize(
    "node, python, dart",
    [
        (StringLiteral(), "result", "result"),
        (DoubleLiteral(), "float(result)", "(result as num).toDouble()"),
        (DateType(), "datetime.fromisoformat(result)", "DateTime.parse(result as String)"),
        (BigIntLiteral(), "result", "BigInt.parse(result.toString())"),
        (ArrayType(StringLiteral()), "result", "List<String>.from(result as List)"),
        (
            ArrayType(ArrayType(DoubleLiteral())),
            "[[float(item1) for item1 in item] for item in result]",
            "(result as List).map((e) => (e as List).map((e1) => (e1 as num).toDouble()).toList()).toList()",
        ),
        (MapType(StringLiteral(), BooleanLiteral()), "result", "Map<String, bool>.from(result as Map)"),
        (
            MapType(IntegerLiteral(), CustomNodeLiteral("Status")),
            "{int(key): Status(value) for key, value in result.items()}",
            "(result as Map).map((k, v) => MapEntry(int.parse(k as String), Status.fromJson(v)))",
        ),
        (
            UnionType((CustomNodeLiteral("Foo"), NullLiteral())),
            "None if result is None else Foo.from_json(result)",
            "result == null ? null : Foo.fromJson(result as Map<String, dynamic>)",
        ),
        (CustomNodeLiteral("When"), "datetime.fromisoformat(result)", "DateTime.parse(result as String)"),
        (CustomNodeLiteral("Missing"), "result", "result"),
        (CustomNodeLiteral("Ping"), "result", "result"),
    ],
)
def test_decode_value(node, python, dart):
    assert decoding_mapper(PythonTypeMapper).decode_value(node, "result") == python
    assert decoding_mapper(DartTypeMapper).decode_value(node, "result") == dart
    assert decoding_mapper(TypeScriptTypeMapper).decode_value(node, "result") == "result"


class TestDecodeResult:
    def test_promise_is_unwrapped(self):
        mapper = decoding_mapper(PythonTypeMapper)
        assert mapper.decode_result(PromiseType(CustomNodeLiteral("Foo")), "data") == "Foo.from_json(data)"

    @pytest.mark.parametrize("node", [None, VoidLiteral(), PromiseType(VoidLiteral()), StringLiteral()])
    def test_nothing_to_convert(self, node):
        assert decoding_mapper(DartTypeMapper).decode_result(node, "result") is None

    def test_first_declaration_of_a_name_wins(self):
        mapper = PythonTypeMapper()
        mapper.register_declarations((STATUS, foo_struct()))
        mapper.register_declarations((TypeAlias("Status", StringLiteral()),))
        assert mapper.decode_result(CustomNodeLiteral("Status"), "result") == "Status(result)"

    def test_typescript_returns_json_as_is(self):
        mapper = decoding_mapper(TypeScriptTypeMapper)
        assert mapper.decode_result(CustomNodeLiteral("Foo"), "result") is None


# ============================================================================
# Literals
# ============================================================================


@pytest.mark.parametrize(
    "default, typescript, python, dart",
    [
        (DefaultValue("hi"), '"hi"', '"hi"', "'hi'"),
        (DefaultValue("true", NodeType.BOOLEAN), "true", "True", "true"),
        (DefaultValue("False", NodeType.BOOLEAN), "false", "False", "false"),
        (DefaultValue("null", NodeType.NULL), "null", "None", "null"),
        (DefaultValue("42", NodeType.INTEGER), "42", "42", "42"),
    ],
)
def test_render_literal(default, typescript, python, dart):
    assert TypeScriptTypeMapper().render_literal(default) == typescript
    assert PythonTypeMapper().render_literal(default) == python
    assert DartTypeMapper().render_literal(default) == dart


def test_string_escaping():
    assert TypeScriptTypeMapper().quote_string('say "hi"') == '"say \\"hi\\""'
    assert DartTypeMapper().quote_string("it's $5") == r"'it\'s \$5'"
    assert DartTypeMapper().quote_string("a\\b") == r"'a\\b'"
