"""
TypeScript type mapping.

Maps model nodes to TypeScript type expressions and renders type
declarations as ``type``/``enum`` statements.
"""

import json
import re
from typing import Dict

from ...core.ast import EnumDeclaration, NodeType, StructLiteral, TypeAlias
from ...core.types import TypeMapper

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class TypeScriptTypeMapper(TypeMapper):
    """Maps model nodes to TypeScript types."""

    unknown_type = "any"
    void_return_type = ""

    def _build_primitive_type_map(self) -> Dict[NodeType, str]:
        return {
            NodeType.STRING: "string",
            NodeType.INTEGER: "number",
            NodeType.FLOAT: "number",
            NodeType.DOUBLE: "number",
            NodeType.BOOLEAN: "boolean",
            NodeType.BIGINT: "bigint",
            NodeType.NULL: "null",
            NodeType.VOID: "void",
            NodeType.ANY: "any",
            NodeType.DATE: "Date",
        }

    def map_array(self, node) -> str:
        return f"Array<{self.map_type(node.element)}>"

    def map_map(self, node) -> str:
        return f"{{[key: {self.map_type(node.key)}]: {self.map_type(node.value)}}}"

    def map_promise(self, node) -> str:
        return f"Promise<{self.map_type(node.element)}>"

    def map_union(self, node) -> str:
        return self._join_unique([self.map_type(v) for v in node.variants], " | ")

    def map_type_literal(self, node) -> str:
        properties = []
        for prop in node.properties:
            name = prop.name if _IDENTIFIER.match(prop.name) else json.dumps(prop.name)
            optional = "?" if prop.optional else ""
            properties.append(f"{name}{optional}: {self.map_type(prop.type)}")
        return "{" + ", ".join(properties) + "}"

    def wrap_async(self, mapped: str) -> str:
        return f"Promise<{mapped}>"

    def render_struct(self, node: StructLiteral) -> str:
        return f"type {node.name} = {self.map_type_literal(node.type_literal)};"

    def render_alias(self, node: TypeAlias) -> str:
        return f"type {node.name} = {self.map_type(node.alias_type)};"

    def render_enum(self, node: EnumDeclaration) -> str:
        cases = []
        for case in node.cases:
            if case.value is None:
                cases.append(case.name)
            elif case.value_kind == NodeType.STRING:
                cases.append(f"{case.name} = {self.quote_string(str(case.value))}")
            else:
                cases.append(f"{case.name} = {case.value}")
        return f"enum {node.name} {{{', '.join(cases)}}}"

    def quote_string(self, value: str) -> str:
        return json.dumps(value)
