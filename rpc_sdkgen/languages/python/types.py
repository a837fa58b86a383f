"""
Python type mapping.

Maps model nodes to modern annotation syntax (``list[T]``, ``A | B``) and
renders declarations as dataclasses, enums and type aliases.
"""

import json
import re
from typing import Dict, List, Optional, Set

from ...core.ast import EnumDeclaration, Node, NodeType, StructLiteral, TypeAlias
from ...core.naming import clean_identifier, to_snake_case
from ...core.types import TypeMapper, loop_name

# Import statements for names that may appear in generated code
PYTHON_IMPORT_MAP = {
    "datetime": ("datetime", "datetime"),
    "Any": ("typing", "Any"),
    "Awaitable": ("typing", "Awaitable"),
    "TypeAlias": ("typing", "TypeAlias"),
    "dataclass": ("dataclasses", "dataclass"),
    "Enum": ("enum", "Enum"),
    "auto": ("enum", "auto"),
}

_NAME = re.compile(r"\b([A-Za-z_][A-Za-z0-9_]*)\b")


class PythonTypeMapper(TypeMapper):
    """Maps model nodes to Python type annotations."""

    unknown_type = "Any"
    void_return_type = "None"
    null_literal = "None"
    true_literal = "True"
    false_literal = "False"

    def _build_primitive_type_map(self) -> Dict[NodeType, str]:
        return {
            NodeType.STRING: "str",
            NodeType.INTEGER: "int",
            NodeType.FLOAT: "float",
            NodeType.DOUBLE: "float",
            NodeType.BOOLEAN: "bool",
            NodeType.BIGINT: "int",
            NodeType.NULL: "None",
            NodeType.VOID: "None",
            NodeType.ANY: "Any",
            NodeType.DATE: "datetime",
        }

    def map_array(self, node) -> str:
        return f"list[{self.map_type(node.element)}]"

    def map_map(self, node) -> str:
        return f"dict[{self.map_type(node.key)}, {self.map_type(node.value)}]"

    def map_promise(self, node) -> str:
        return f"Awaitable[{self.map_type(node.element)}]"

    def map_union(self, node) -> str:
        return self._join_unique([self.map_type(v) for v in node.variants], " | ")

    def map_type_literal(self, node) -> str:
        return "dict[str, Any]"

    def map_return_type(self, node) -> str:
        """Return annotation of an ``async def``; the coroutine is implicit."""
        if node is None or node.node_type == NodeType.VOID:
            return self.void_return_type
        if node.node_type == NodeType.PROMISE:
            return self.map_return_type(node.element)
        return self.map_type(node)

    def wrap_async(self, mapped: str) -> str:
        return mapped

    def member_names(self, node: StructLiteral) -> List[str]:
        return self.guard.sanitize_all(clean_identifier(p.name) for p in node.type_literal.properties)

    def render_struct(self, node: StructLiteral) -> str:
        properties = node.type_literal.properties
        names = self.member_names(node)

        lines = ["@dataclass(kw_only=True)", f"class {node.name}:"]
        for prop, name in zip(properties, names):
            mapped = self.map_type(prop.type)
            if prop.optional:
                lines.append(f"{self.indent}{name}: {optional_annotation(mapped)} = None")
            else:
                lines.append(f"{self.indent}{name}: {mapped}")
        if properties:
            lines.append("")

        # Wire names are the source property names, attributes may be renamed
        lines.append(f"{self.indent}@classmethod")
        lines.append(f"{self.indent}def from_json(cls, data: dict[str, Any]) -> {node.name}:")
        if properties:
            lines.append(f"{self.indent * 2}return cls(")
            for prop, name in zip(properties, names):
                lines.append(f"{self.indent * 3}{name}={self._decode_property(prop)},")
            lines.append(f"{self.indent * 2})")
        else:
            lines.append(f"{self.indent * 2}return cls()")
        lines.append("")

        entries = ", ".join(f"{self.quote_string(p.name)}: self.{name}" for p, name in zip(properties, names))
        lines.append(f"{self.indent}def to_json(self) -> dict[str, Any]:")
        lines.append(f"{self.indent * 2}return {{{entries}}}")

        return "\n".join(lines)

    def _decode_property(self, prop) -> str:
        if not prop.optional:
            return self.decode_value(prop.type, f"data[{self.quote_string(prop.name)}]")

        raw = f"data.get({self.quote_string(prop.name)})"
        value = self.decode_value(prop.type, raw)
        if value == raw or value.startswith(f"None if {raw} is None"):
            return value
        return f"None if {raw} is None else {value}"

    def decode_value(self, node: Optional[Node], expr: str, depth: int = 0) -> str:
        node = self.resolve_reference(node)
        if node is None:
            return expr

        node_type = node.node_type

        if node_type in (NodeType.FLOAT, NodeType.DOUBLE):
            return f"float({expr})"
        elif node_type == NodeType.DATE:
            return f"datetime.fromisoformat({expr})"

        elif node_type == NodeType.ARRAY:
            item = loop_name("item", depth)
            element = self.decode_value(node.element, item, depth + 1)
            if element == item:
                return expr
            return f"[{element} for {item} in {expr}]"

        elif node_type == NodeType.MAP:
            key, value = loop_name("key", depth), loop_name("value", depth)
            decoded_key = self._decode_key(node.key, key, depth + 1)
            decoded_value = self.decode_value(node.value, value, depth + 1)
            if decoded_key == key and decoded_value == value:
                return expr
            return f"{{{decoded_key}: {decoded_value} for {key}, {value} in {expr}.items()}}"

        elif node_type == NodeType.UNION:
            variants = [v for v in node.variants if v.node_type != NodeType.NULL]
            if len({self.map_type(v) for v in variants}) != 1:
                return expr
            decoded = self.decode_value(variants[0], expr, depth)
            if decoded != expr and len(variants) < len(node.variants):
                return f"None if {expr} is None else {decoded}"
            return decoded

        elif node_type == NodeType.STRUCT:
            return f"{node.name}.from_json({expr})"
        elif node_type == NodeType.ENUM and node.cases:
            return f"{node.name}({expr})"

        return expr

    def _decode_key(self, node: Optional[Node], expr: str, depth: int) -> str:
        """JSON object keys are always strings."""
        resolved = self.resolve_reference(node)
        if resolved is not None and resolved.node_type == NodeType.INTEGER:
            return f"int({expr})"
        return self.decode_value(node, expr, depth)

    def render_alias(self, node: TypeAlias) -> str:
        # Quoted so aliases may refer to names declared further down
        return f"{node.name}: TypeAlias = {json.dumps(self.map_type(node.alias_type))}"

    def render_enum(self, node: EnumDeclaration) -> str:
        string_valued = bool(node.cases) and all(
            case.value is not None and case.value_kind == NodeType.STRING for case in node.cases
        )
        base = "str, Enum" if string_valued else "Enum"

        lines = [f"class {node.name}({base}):"]
        for case in node.cases:
            member = self.guard.sanitize(clean_identifier(to_snake_case(case.name)).upper())
            if case.value is None:
                value = "auto()"
            elif case.value_kind == NodeType.STRING:
                value = self.quote_string(str(case.value))
            else:
                value = str(case.value)
            lines.append(f"{self.indent}{member} = {value}")

        if not node.cases:
            lines.append(f"{self.indent}pass")

        return "\n".join(lines)

    def quote_string(self, value: str) -> str:
        return json.dumps(value)


def optional_annotation(mapped: str) -> str:
    """Make an annotation accept None."""
    if mapped in ("Any", "None") or mapped.endswith("| None"):
        return mapped
    return f"{mapped} | None"


def get_required_imports(type_strings: List[str]) -> List[str]:
    """
    Import statements for the names used by generated code.

    Args:
        type_strings: Annotations and declarations of one file

    Returns:
        ``from module import names`` lines, sorted by module
    """
    names: Dict[str, Set[str]] = {}
    for type_string in type_strings:
        for match in _NAME.findall(type_string):
            if match in PYTHON_IMPORT_MAP:
                module, name = PYTHON_IMPORT_MAP[match]
                names.setdefault(module, set()).add(name)

    return [f"from {module} import {', '.join(sorted(names[module]))}" for module in sorted(names)]
