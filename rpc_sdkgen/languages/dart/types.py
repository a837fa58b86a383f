"""
Dart type mapping.

Maps model nodes to Dart types. Dart has no structural union types, so
only nullable unions (``T | null``) keep a precise type; every other
union degrades to ``dynamic`` and is reported.
"""

from typing import Dict, List, Optional

from ...core.ast import EnumDeclaration, Node, NodeType, StructLiteral, TypeAlias
from ...core.diagnostics import DiagnosticLog
from ...core.naming import NamingCase, ReservedWordGuard, clean_identifier
from ...core.types import TypeMapper, loop_name
from .naming import create_dart_enum_guard

# Types that already accept null
_NULLABLE_TYPES = {"dynamic", "Null", "void"}


def nullable(mapped: str) -> str:
    """Make a Dart type accept null."""
    if mapped in _NULLABLE_TYPES or mapped.endswith("?"):
        return mapped
    return f"{mapped}?"


class DartTypeMapper(TypeMapper):
    """Maps model nodes to Dart types."""

    unknown_type = "dynamic"
    void_return_type = "Future<void>"
    null_literal = "null"

    def __init__(
        self,
        diagnostics: Optional[DiagnosticLog] = None,
        indent: str = "  ",
        guard: Optional[ReservedWordGuard] = None,
    ):
        super().__init__(diagnostics, indent, guard)
        self.enum_guard = create_dart_enum_guard()

    def _build_primitive_type_map(self) -> Dict[NodeType, str]:
        return {
            NodeType.STRING: "String",
            NodeType.INTEGER: "int",
            NodeType.FLOAT: "double",
            NodeType.DOUBLE: "double",
            NodeType.BOOLEAN: "bool",
            NodeType.BIGINT: "BigInt",
            NodeType.NULL: "Null",
            NodeType.VOID: "void",
            NodeType.ANY: "dynamic",
            NodeType.DATE: "DateTime",
        }

    def map_array(self, node) -> str:
        return f"List<{self.map_type(node.element)}>"

    def map_map(self, node) -> str:
        return f"Map<{self.map_type(node.key)}, {self.map_type(node.value)}>"

    def map_promise(self, node) -> str:
        return f"Future<{self.map_type(node.element)}>"

    def map_union(self, node) -> str:
        variants = [v for v in node.variants if v.node_type != NodeType.NULL]
        has_null = len(variants) < len(node.variants)

        mapped = []
        for variant in variants:
            variant_type = self.map_type(variant)
            if variant_type not in mapped:
                mapped.append(variant_type)

        if not mapped:
            return "Null"
        if len(mapped) == 1:
            return nullable(mapped[0]) if has_null else mapped[0]

        # No union types in Dart
        return self._get_fallback_type(node)

    def map_type_literal(self, node) -> str:
        return "Map<String, dynamic>"

    def wrap_async(self, mapped: str) -> str:
        return f"Future<{mapped}>"

    def field_names(self, node: StructLiteral) -> List[str]:
        return self.guard.sanitize_all(clean_identifier(p.name) for p in node.type_literal.properties)

    def render_struct(self, node: StructLiteral) -> str:
        properties = node.type_literal.properties
        names = self.field_names(node)
        lines = [f"class {node.name} {{"]

        for prop, name in zip(properties, names):
            mapped = self.map_type(prop.type)
            field_type = nullable(mapped) if prop.optional else mapped
            lines.append(f"{self.indent}final {field_type} {name};")
        if properties:
            lines.append("")

        arguments = []
        for prop, name in zip(properties, names):
            prefix = "" if prop.optional else "required "
            arguments.append(f"{prefix}this.{name}")
        if arguments:
            lines.append(f"{self.indent}const {node.name}({{{', '.join(arguments)}}});")
        else:
            lines.append(f"{self.indent}const {node.name}();")
        lines.append("")

        lines.extend(self._render_from_json(node, names))
        lines.append("")

        entries = ", ".join(f"{self.quote_string(p.name)}: {name}" for p, name in zip(properties, names))
        lines.append(f"{self.indent}Map<String, dynamic> toJson() => {{{entries}}};")
        lines.append("}")

        return "\n".join(lines)

    def _render_from_json(self, node: StructLiteral, names: List[str]) -> List[str]:
        signature = f"{self.indent}factory {node.name}.fromJson(Map<String, dynamic> json)"
        if not names:
            return [f"{signature} => const {node.name}();"]

        lines = [f"{signature} {{", f"{self.indent * 2}return {node.name}("]
        for prop, name in zip(node.type_literal.properties, names):
            raw = f"json[{self.quote_string(prop.name)}]"
            value = self.decode_value(prop.type, raw)
            if prop.optional and value != raw and not value.startswith(f"{raw} == null"):
                value = f"{raw} == null ? null : {value}"
            lines.append(f"{self.indent * 3}{name}: {value},")
        lines.append(f"{self.indent * 2});")
        lines.append(f"{self.indent}}}")
        return lines

    def decode_value(self, node: Optional[Node], expr: str, depth: int = 0) -> str:
        node = self.resolve_reference(node)
        if node is None:
            return expr

        node_type = node.node_type

        # JSON numbers without a fraction decode as int
        if node_type in (NodeType.FLOAT, NodeType.DOUBLE):
            return f"({expr} as num).toDouble()"
        elif node_type == NodeType.DATE:
            return f"DateTime.parse({expr} as String)"
        elif node_type == NodeType.BIGINT:
            return f"BigInt.parse({expr}.toString())"

        elif node_type == NodeType.ARRAY:
            item = loop_name("e", depth)
            element = self.decode_value(node.element, item, depth + 1)
            if element == item:
                return f"List<{self.map_type(node.element)}>.from({expr} as List)"
            return f"({expr} as List).map(({item}) => {element}).toList()"

        elif node_type == NodeType.MAP:
            key, value = loop_name("k", depth), loop_name("v", depth)
            decoded_key = self._decode_key(node.key, key, depth + 1)
            decoded_value = self.decode_value(node.value, value, depth + 1)
            if decoded_key == key and decoded_value == value:
                return f"{self.map_type(node)}.from({expr} as Map)"
            return f"({expr} as Map).map(({key}, {value}) => MapEntry({decoded_key}, {decoded_value}))"

        elif node_type == NodeType.UNION:
            variants = [v for v in node.variants if v.node_type != NodeType.NULL]
            if len({self.map_type(v) for v in variants}) != 1:
                return expr
            decoded = self.decode_value(variants[0], expr, depth)
            if decoded != expr and len(variants) < len(node.variants):
                return f"{expr} == null ? null : {decoded}"
            return decoded

        elif node_type == NodeType.STRUCT:
            return f"{node.name}.fromJson({expr} as Map<String, dynamic>)"
        elif node_type == NodeType.ENUM and node.cases:
            return f"{node.name}.fromJson({expr})"

        return expr

    def _decode_key(self, node: Optional[Node], expr: str, depth: int) -> str:
        """JSON object keys are always strings."""
        resolved = self.resolve_reference(node)
        if resolved is not None and resolved.node_type == NodeType.INTEGER:
            return f"int.parse({expr} as String)"
        if resolved is not None and resolved.node_type in (NodeType.FLOAT, NodeType.DOUBLE):
            return f"double.parse({expr} as String)"
        return self.decode_value(node, expr, depth)

    def render_alias(self, node: TypeAlias) -> str:
        return f"typedef {node.name} = {self.map_type(node.alias_type)};"

    def render_enum(self, node: EnumDeclaration) -> str:
        if not node.cases:
            # Dart enums need at least one value
            return f"typedef {node.name} = dynamic;"

        names = [self.enum_guard.sanitize_case(case.name, NamingCase.CAMEL_CASE) for case in node.cases]
        valued = any(case.value is not None for case in node.cases)

        lines = [f"enum {node.name} {{"]
        if not valued:
            for index, name in enumerate(names):
                separator = ";" if index == len(names) - 1 else ","
                lines.append(f"{self.indent}{name}{separator}")
            lines.append("")
            lines.append(f"{self.indent}String toJson() => name;")
            lines.append("")
            lines.append(self._render_enum_from_json(node))
            lines.append("}")
            return "\n".join(lines)

        value_type = self._enum_value_type(node)
        for index, (name, case) in enumerate(zip(names, node.cases)):
            separator = ";" if index == len(names) - 1 else ","
            lines.append(f"{self.indent}{name}({self._enum_value(case)}){separator}")
        lines.append("")
        lines.append(f"{self.indent}final {value_type} value;")
        lines.append("")
        lines.append(f"{self.indent}const {node.name}(this.value);")
        lines.append("")
        lines.append(f"{self.indent}{value_type} toJson() => value;")
        lines.append("")
        lines.append(self._render_enum_from_json(node))
        lines.append("}")
        return "\n".join(lines)

    def _render_enum_from_json(self, node: EnumDeclaration) -> str:
        return f"{self.indent}static {node.name} fromJson(dynamic json) => values.firstWhere((e) => e.toJson() == json);"

    def _enum_value(self, case) -> str:
        if case.value is None:
            return self.null_literal
        if case.value_kind == NodeType.STRING:
            return self.quote_string(str(case.value))
        return str(case.value)

    def _enum_value_type(self, node: EnumDeclaration) -> str:
        kinds = {case.value_kind for case in node.cases if case.value is not None}
        if kinds == {NodeType.STRING}:
            value_type = "String"
        elif kinds == {NodeType.INTEGER}:
            value_type = "int"
        elif kinds <= {NodeType.INTEGER, NodeType.FLOAT, NodeType.DOUBLE}:
            value_type = "num"
        else:
            return "dynamic"

        if any(case.value is None for case in node.cases):
            return nullable(value_type)
        return value_type

    def quote_string(self, value: str) -> str:
        escaped = (
            value.replace("\\", "\\\\")
            .replace("'", "\\'")
            .replace("$", "\\$")
            .replace("\n", "\\n")
        )
        return f"'{escaped}'"
