"""
Base type mapping engine.

Converts model nodes into target-language type syntax. Language packages
subclass TypeMapper and fill in the composite and declaration rules.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from .ast import (
    DefaultValue,
    EnumDeclaration,
    Node,
    NodeType,
    StructLiteral,
    TypeAlias,
)
from .diagnostics import FALLBACK_TYPE, DiagnosticLog
from .naming import ReservedWordGuard


class TypeMapper(ABC):
    """
    Central engine for mapping type nodes to one target language.

    ``map_type`` is total: node kinds without a rule map to the language's
    most permissive type and a ``fallback-type`` diagnostic is recorded, so
    one malformed type never blocks the rest of the SDK.
    """

    # Language spellings, overridden by subclasses
    unknown_type: str = "any"
    void_return_type: str = ""
    null_literal: str = "null"
    true_literal: str = "true"
    false_literal: str = "false"

    def __init__(
        self,
        diagnostics: Optional[DiagnosticLog] = None,
        indent: str = "  ",
        guard: Optional[ReservedWordGuard] = None,
    ):
        """
        Initialize with the diagnostics sink of the current generation call.

        Args:
            diagnostics: Where fallback events are reported
            indent: One level of indentation for multi-line declarations
            guard: Reserved word guard for member names inside declarations
        """
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.indent = indent
        self.guard = guard or ReservedWordGuard()
        self.declarations: Dict[str, Node] = {}
        self._primitive_types = self._build_primitive_type_map()

    def register_declarations(self, declarations: Iterable[Node]):
        """Make named declarations resolvable from custom references; the first of a name wins."""
        for declaration in declarations:
            self.declarations.setdefault(declaration.name, declaration)

    @abstractmethod
    def _build_primitive_type_map(self) -> Dict[NodeType, str]:
        """Return the spelling of every primitive node kind."""
        pass

    def map_type(self, node: Optional[Node]) -> str:
        """Map a type node to target-language syntax."""
        if node is None:
            return self._get_fallback_type(node)

        node_type = node.node_type

        # Primitive types
        if node_type in self._primitive_types:
            return self._primitive_types[node_type]

        # Opaque references pass through verbatim
        elif node_type == NodeType.CUSTOM:
            return node.raw_value

        # Named declarations are referenced by name
        elif node.is_declaration:
            return node.name

        elif node_type == NodeType.ARRAY:
            return self.map_array(node)
        elif node_type == NodeType.MAP:
            return self.map_map(node)
        elif node_type == NodeType.PROMISE:
            return self.map_promise(node)
        elif node_type == NodeType.UNION:
            return self.map_union(node)
        elif node_type == NodeType.TYPE_LITERAL:
            return self.map_type_literal(node)

        # Unknown/fallback
        return self._get_fallback_type(node)

    def map_return_type(self, node: Optional[Node]) -> str:
        """Map a method return type, wrapped in the async result container."""
        if node is None or node.node_type == NodeType.VOID:
            return self.void_return_type

        mapped = self.map_type(node)
        if node.node_type == NodeType.PROMISE:
            return mapped
        return self.wrap_async(mapped)

    @abstractmethod
    def map_array(self, node) -> str:
        pass

    @abstractmethod
    def map_map(self, node) -> str:
        pass

    @abstractmethod
    def map_promise(self, node) -> str:
        pass

    @abstractmethod
    def map_union(self, node) -> str:
        pass

    @abstractmethod
    def map_type_literal(self, node) -> str:
        pass

    @abstractmethod
    def wrap_async(self, mapped: str) -> str:
        """Wrap an already mapped type in the async result container."""
        pass

    # Declarations

    def render_declaration(self, node: Node) -> str:
        """Render a top-level alias, enum or struct declaration."""
        if node.node_type == NodeType.STRUCT:
            return self.render_struct(node)
        elif node.node_type == NodeType.TYPE_ALIAS:
            return self.render_alias(node)
        elif node.node_type == NodeType.ENUM:
            return self.render_enum(node)
        return ""

    @abstractmethod
    def render_struct(self, node: StructLiteral) -> str:
        pass

    @abstractmethod
    def render_alias(self, node: TypeAlias) -> str:
        pass

    @abstractmethod
    def render_enum(self, node: EnumDeclaration) -> str:
        pass

    # Decoding

    def resolve_reference(self, node: Optional[Node]) -> Optional[Node]:
        """
        Follow custom references and aliases to the node describing the value.

        Returns None for a reference cycle between aliases.
        """
        seen = set()
        while node is not None:
            if node.node_type == NodeType.CUSTOM and node.raw_value in self.declarations:
                key, target = ("ref", node.raw_value), self.declarations[node.raw_value]
            elif node.node_type == NodeType.TYPE_ALIAS:
                key, target = ("alias", node.name), node.alias_type
            else:
                return node
            if key in seen:
                return None
            seen.add(key)
            node = target
        return node

    def decode_value(self, node: Optional[Node], expr: str, depth: int = 0) -> str:
        """
        Expression converting the decoded JSON ``expr`` into the mapped type of ``node``.

        The base implementation uses the value as is; languages whose runtime
        types differ from plain JSON values override it. ``depth`` keeps
        the loop variables of nested conversions distinct.
        """
        return expr

    def decode_result(self, node: Optional[Node], expr: str) -> Optional[str]:
        """Conversion of a method result, or None if the JSON value is returned as is."""
        while node is not None and node.node_type == NodeType.PROMISE:
            node = node.element
        if node is None or node.node_type == NodeType.VOID:
            return None

        decoded = self.decode_value(node, expr)
        return None if decoded == expr else decoded

    # Literals

    @abstractmethod
    def quote_string(self, value: str) -> str:
        """Return ``value`` as a target-language string literal."""
        pass

    def render_literal(self, default: DefaultValue) -> str:
        """Render a parameter default value as a literal token."""
        if default.value_kind == NodeType.STRING:
            return self.quote_string(default.value)
        elif default.value_kind == NodeType.BOOLEAN:
            return self.true_literal if default.value.lower() == "true" else self.false_literal
        elif default.value_kind == NodeType.NULL:
            return self.null_literal
        return default.value

    # Helpers

    def _join_unique(self, parts: List[str], separator: str) -> str:
        seen = []
        for part in parts:
            if part not in seen:
                seen.append(part)
        return separator.join(seen)

    def _get_fallback_type(self, node: Optional[Node]) -> str:
        """Get fallback type for node kinds without a mapping rule."""
        if node is None:
            subject = "<missing>"
        elif node.node_type == NodeType.UNKNOWN:
            subject = node.raw_type
        else:
            subject = node.node_type.value
        self.diagnostics.report(
            FALLBACK_TYPE,
            f"no mapping rule, using fallback: {self.unknown_type}",
            subject,
        )
        return self.unknown_type


def loop_name(base: str, depth: int) -> str:
    """Name of the loop variable of a conversion nested ``depth`` levels deep."""
    return base if depth == 0 else f"{base}{depth}"
