"""
Language-neutral type model for SDK generation.

Every node is an immutable dataclass tagged with a NodeType. The model
mirrors the JSON documents produced by the per-language parsers, and
``program_from_dict`` converts such a document into a Program.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Union


class ProgramFormatError(Exception):
    """Exception raised when a parser document cannot be turned into a Program."""

    pass


class NodeType(Enum):
    """Node tags, spelled the way the parsers spell them."""

    STRING = "StringLiteral"
    INTEGER = "IntegerLiteral"
    FLOAT = "FloatLiteral"
    DOUBLE = "DoubleLiteral"
    BOOLEAN = "BooleanLiteral"
    BIGINT = "BigIntLiteral"
    NULL = "NullLiteral"
    VOID = "VoidLiteral"
    ANY = "AnyLiteral"
    DATE = "DateType"
    ARRAY = "ArrayType"
    MAP = "MapType"
    PROMISE = "PromiseType"
    UNION = "UnionType"
    TYPE_LITERAL = "TypeLiteral"
    STRUCT = "StructLiteral"
    TYPE_ALIAS = "TypeAlias"
    ENUM = "Enum"
    CUSTOM = "CustomNodeLiteral"
    CLASS_DEFINITION = "ClassDefinition"
    UNKNOWN = "Unknown"


class MethodKind(Enum):
    CONSTRUCTOR = "constructor"
    METHOD = "method"
    GET = "get"
    SET = "set"


class SourceType(Enum):
    SCRIPT = "script"
    MODULE = "module"


class Node:
    """Base class of every type node."""

    node_type: ClassVar[NodeType]
    home_path: Optional[str]

    @property
    def is_declaration(self) -> bool:
        return self.node_type in DECLARATION_TYPES


# Primitive nodes


@dataclass(frozen=True)
class StringLiteral(Node):
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.STRING


@dataclass(frozen=True)
class IntegerLiteral(Node):
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.INTEGER


@dataclass(frozen=True)
class FloatLiteral(Node):
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.FLOAT


@dataclass(frozen=True)
class DoubleLiteral(Node):
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.DOUBLE


@dataclass(frozen=True)
class BooleanLiteral(Node):
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.BOOLEAN


@dataclass(frozen=True)
class BigIntLiteral(Node):
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.BIGINT


@dataclass(frozen=True)
class NullLiteral(Node):
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.NULL


@dataclass(frozen=True)
class VoidLiteral(Node):
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.VOID


@dataclass(frozen=True)
class AnyLiteral(Node):
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.ANY


@dataclass(frozen=True)
class DateType(Node):
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.DATE


# Composite nodes


@dataclass(frozen=True)
class ArrayType(Node):
    element: "TypeNode"
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.ARRAY


@dataclass(frozen=True)
class MapType(Node):
    key: "TypeNode"
    value: "TypeNode"
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.MAP


@dataclass(frozen=True)
class PromiseType(Node):
    element: "TypeNode"
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.PROMISE


@dataclass(frozen=True)
class UnionType(Node):
    variants: Tuple["TypeNode", ...]
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.UNION


@dataclass(frozen=True)
class PropertyDefinition:
    name: str
    type: "TypeNode"
    optional: bool = False


@dataclass(frozen=True)
class TypeLiteral(Node):
    properties: Tuple[PropertyDefinition, ...] = ()
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.TYPE_LITERAL


@dataclass(frozen=True)
class CustomNodeLiteral(Node):
    """Opaque reference to a type the model does not describe itself."""

    raw_value: str
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.CUSTOM


@dataclass(frozen=True)
class UnknownNode(Node):
    """A node kind this model does not recognise; mapped to the permissive type."""

    raw_type: str
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.UNKNOWN


# Declarations


@dataclass(frozen=True)
class StructLiteral(Node):
    name: str
    type_literal: TypeLiteral
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.STRUCT


@dataclass(frozen=True)
class TypeAlias(Node):
    name: str
    alias_type: "TypeNode"
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.TYPE_ALIAS


@dataclass(frozen=True)
class EnumCase:
    name: str
    value: Union[str, int, float, None] = None
    value_kind: NodeType = NodeType.STRING


@dataclass(frozen=True)
class EnumDeclaration(Node):
    name: str
    cases: Tuple[EnumCase, ...] = ()
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.ENUM


# Class structure


@dataclass(frozen=True)
class DefaultValue:
    value: str
    value_kind: NodeType = NodeType.STRING


@dataclass(frozen=True)
class ParameterDefinition:
    name: str
    type: "TypeNode"
    optional: bool = False
    default_value: Optional[DefaultValue] = None


@dataclass(frozen=True)
class MethodDefinition:
    name: str
    params: Tuple[ParameterDefinition, ...] = ()
    return_type: "TypeNode" = field(default_factory=VoidLiteral)
    kind: MethodKind = MethodKind.METHOD
    is_static: bool = False
    doc_string: Optional[str] = None


@dataclass(frozen=True)
class ClassDefinition(Node):
    name: str
    methods: Tuple[MethodDefinition, ...] = ()
    doc_string: Optional[str] = None
    home_path: Optional[str] = None
    node_type: ClassVar[NodeType] = NodeType.CLASS_DEFINITION


TypeNode = Union[
    StringLiteral,
    IntegerLiteral,
    FloatLiteral,
    DoubleLiteral,
    BooleanLiteral,
    BigIntLiteral,
    NullLiteral,
    VoidLiteral,
    AnyLiteral,
    DateType,
    ArrayType,
    MapType,
    PromiseType,
    UnionType,
    TypeLiteral,
    StructLiteral,
    TypeAlias,
    EnumDeclaration,
    CustomNodeLiteral,
    UnknownNode,
]

DECLARATION_TYPES = frozenset({NodeType.STRUCT, NodeType.TYPE_ALIAS, NodeType.ENUM})


@dataclass(frozen=True)
class Program:
    """Everything one parser run extracted from a single class file."""

    original_language: str
    source_type: SourceType = SourceType.MODULE
    body: Optional[Tuple[Node, ...]] = None

    def class_definition(self) -> Optional[ClassDefinition]:
        """Return the class of this program, if the parser found one."""
        for node in self.body or ():
            if node.node_type == NodeType.CLASS_DEFINITION:
                return node
        return None

    def declarations(self) -> List[Node]:
        """Return the top-level type declarations in source order."""
        return [node for node in self.body or () if node.is_declaration]


def iter_child_types(node: Node) -> Iterator[Node]:
    """Yield the type nodes directly nested in ``node``."""
    node_type = node.node_type
    if node_type in (NodeType.ARRAY, NodeType.PROMISE):
        yield node.element
    elif node_type == NodeType.MAP:
        yield node.key
        yield node.value
    elif node_type == NodeType.UNION:
        yield from node.variants
    elif node_type == NodeType.TYPE_LITERAL:
        for prop in node.properties:
            yield prop.type
    elif node_type == NodeType.STRUCT:
        yield node.type_literal
    elif node_type == NodeType.TYPE_ALIAS:
        yield node.alias_type


# Parser document conversion

_PRIMITIVES = {
    NodeType.STRING: StringLiteral,
    NodeType.INTEGER: IntegerLiteral,
    NodeType.FLOAT: FloatLiteral,
    NodeType.DOUBLE: DoubleLiteral,
    NodeType.BOOLEAN: BooleanLiteral,
    NodeType.BIGINT: BigIntLiteral,
    NodeType.NULL: NullLiteral,
    NodeType.VOID: VoidLiteral,
    NodeType.ANY: AnyLiteral,
    NodeType.DATE: DateType,
}

_NODE_TYPES_BY_VALUE = {t.value: t for t in NodeType}


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise ProgramFormatError(f"Expected an object for {where}, got {type(data).__name__}")
    if key not in data:
        raise ProgramFormatError(f"Missing '{key}' in {where}")
    return data[key]


def _require_list(data: Dict[str, Any], key: str, where: str, optional: bool = False) -> List[Any]:
    if optional and isinstance(data, dict) and key not in data:
        return []
    value = _require(data, key, where)
    if not isinstance(value, list):
        raise ProgramFormatError(f"'{key}' in {where} must be a list, got {type(value).__name__}")
    return value


def _kind(value: Optional[str]) -> NodeType:
    return _NODE_TYPES_BY_VALUE.get(value or "", NodeType.STRING)


def node_from_dict(data: Dict[str, Any]) -> Node:
    """Convert one parser node into a model node."""
    raw_type = _require(data, "type", "node")
    home_path = data.get("path")
    node_type = _NODE_TYPES_BY_VALUE.get(raw_type)

    if node_type in _PRIMITIVES:
        return _PRIMITIVES[node_type](home_path=home_path)
    elif node_type == NodeType.ARRAY:
        return ArrayType(node_from_dict(_require(data, "generic", raw_type)), home_path)
    elif node_type == NodeType.PROMISE:
        return PromiseType(node_from_dict(_require(data, "generic", raw_type)), home_path)
    elif node_type == NodeType.MAP:
        return MapType(
            node_from_dict(_require(data, "genericKey", raw_type)),
            node_from_dict(_require(data, "genericValue", raw_type)),
            home_path,
        )
    elif node_type == NodeType.UNION:
        params = _require_list(data, "params", raw_type)
        return UnionType(tuple(node_from_dict(p) for p in params), home_path)
    elif node_type == NodeType.TYPE_LITERAL:
        return _type_literal_from_dict(data)
    elif node_type == NodeType.STRUCT:
        name = _require(data, "name", raw_type)
        literal = _type_literal_from_dict(_require(data, "typeLiteral", f"{raw_type} {name}"))
        return StructLiteral(name, literal, home_path)
    elif node_type == NodeType.TYPE_ALIAS:
        name = _require(data, "name", raw_type)
        alias_type = node_from_dict(_require(data, "aliasType", f"{raw_type} {name}"))
        return TypeAlias(name, alias_type, home_path)
    elif node_type == NodeType.ENUM:
        name = _require(data, "name", raw_type)
        cases = tuple(
            EnumCase(
                name=_require(case, "name", f"case of enum {name}"),
                value=case.get("value"),
                value_kind=_kind(case.get("type")),
            )
            for case in _require_list(data, "cases", f"{raw_type} {name}", optional=True)
        )
        return EnumDeclaration(name, cases, home_path)
    elif node_type == NodeType.CUSTOM:
        return CustomNodeLiteral(_require(data, "rawValue", raw_type), home_path)
    elif node_type == NodeType.CLASS_DEFINITION:
        return _class_from_dict(data)

    return UnknownNode(str(raw_type), home_path)


def _type_literal_from_dict(data: Dict[str, Any]) -> TypeLiteral:
    properties = tuple(
        PropertyDefinition(
            name=_require(prop, "name", "property"),
            type=node_from_dict(_require(prop, "type", f"property {prop.get('name')}")),
            optional=bool(prop.get("optional", False)),
        )
        for prop in _require_list(data, "properties", "TypeLiteral")
    )
    return TypeLiteral(properties, data.get("path"))


def _parameter_from_dict(data: Dict[str, Any], method: str) -> ParameterDefinition:
    name = _require(data, "name", f"parameter of {method}")
    default = data.get("defaultValue")
    default_value = None
    if default is not None:
        default_value = DefaultValue(
            value=str(_require(default, "value", f"default of {method}({name})")),
            value_kind=_kind(default.get("type")),
        )
    return ParameterDefinition(
        name=name,
        type=node_from_dict(_require(data, "paramType", f"parameter {method}({name})")),
        optional=bool(data.get("optional", False)),
        default_value=default_value,
    )


def _method_from_dict(data: Dict[str, Any]) -> MethodDefinition:
    name = _require(data, "name", "method")
    return_type = data.get("returnType")
    try:
        kind = MethodKind(data.get("kind", "method"))
    except ValueError:
        kind = MethodKind.METHOD
    return MethodDefinition(
        name=name,
        params=tuple(
            _parameter_from_dict(p, name) for p in _require_list(data, "params", f"method {name}", optional=True)
        ),
        return_type=node_from_dict(return_type) if return_type else VoidLiteral(),
        kind=kind,
        is_static=bool(data.get("static", False)),
        doc_string=data.get("docString"),
    )


def _class_from_dict(data: Dict[str, Any]) -> ClassDefinition:
    return ClassDefinition(
        name=_require(data, "name", "ClassDefinition"),
        methods=tuple(
            _method_from_dict(m) for m in _require_list(data, "methods", "ClassDefinition", optional=True)
        ),
        doc_string=data.get("docString"),
        home_path=data.get("path"),
    )


def program_from_dict(data: Dict[str, Any]) -> Program:
    """
    Build a Program from a parser JSON document.

    Args:
        data: Decoded parser output (either the program itself or an
            object with a top-level ``program`` key)

    Returns:
        Immutable Program

    Raises:
        ProgramFormatError: If the document is structurally invalid
    """
    if isinstance(data, dict) and "program" in data:
        data = data["program"]

    language = _require(data, "originalLanguage", "program")
    try:
        source_type = SourceType(data.get("sourceType", "module"))
    except ValueError as e:
        raise ProgramFormatError(f"Invalid sourceType: {data.get('sourceType')}") from e

    body = data.get("body")
    if body is not None:
        if not isinstance(body, list):
            raise ProgramFormatError("Program body must be a list")
        body = tuple(node_from_dict(node) for node in body)

    return Program(original_language=language, source_type=source_type, body=body)
