"""
Render views for generated proxy classes.

ClassCodeGenerator turns one ClassDefinition into a ClassView: the
exposed methods in declaration order, with mapped types, sanitized
parameter names and the call expression forwarded to the transport.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .ast import ClassDefinition, MethodDefinition, Node
from .config import ClassConfiguration, TriggerType
from .imports import ImportGroup
from .naming import ReservedWordGuard
from .types import TypeMapper
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ParameterView:
    name: str
    type: str
    optional: bool = False
    default: Optional[str] = None
    declaration: str = ""
    last: bool = False

    @property
    def is_optional(self) -> bool:
        return self.optional or self.default is not None


@dataclass
class ArgumentView:
    name: str
    last: bool = False


@dataclass
class MethodView:
    name: str
    qualified_name: str
    caller: str
    parameters: List[ParameterView]
    arguments: List[ArgumentView]
    return_type: str
    doc_string: Optional[str] = None
    result_name: str = "result"
    decoder: Optional[str] = None
    last: bool = False


@dataclass
class ClassView:
    class_name: str
    file_path: str
    url: str
    methods: List[MethodView]
    doc_string: Optional[str] = None
    imports: List[ImportGroup] = field(default_factory=list)
    declarations: List[str] = field(default_factory=list)


ParameterFormatter = Callable[[List[ParameterView]], None]


def mark_last(items: Sequence) -> Sequence:
    """Flag the final item of a comma-joined list so templates omit its separator."""
    for item in items:
        item.last = False
    if items:
        items[-1].last = True
    return items


def optional_tail_start(parameters: Sequence[ParameterView]) -> int:
    """Index where the trailing run of optional or defaulted parameters begins."""
    start = len(parameters)
    while start > 0 and parameters[start - 1].is_optional:
        start -= 1
    return start


class ClassCodeGenerator:
    """Builds the proxy view of one class for one target language."""

    def __init__(
        self,
        class_definition: ClassDefinition,
        class_configuration: ClassConfiguration,
        channel: TriggerType,
        type_mapper: TypeMapper,
        guard: ReservedWordGuard,
        format_parameters: ParameterFormatter,
        sanitize_method_names: bool = False,
        add_comments: bool = True,
    ):
        """
        Initialize class code generator.

        Args:
            class_definition: Class to build the proxy for
            class_configuration: Exposure configuration of the class
            channel: Channel the generated SDK is produced for
            type_mapper: Mapper of the target language
            guard: Reserved word guard of the target language
            format_parameters: Fills in the declaration text of each parameter
            sanitize_method_names: Whether method names need guarding too
            add_comments: Whether doc strings are carried into the view
        """
        self.class_definition = class_definition
        self.class_configuration = class_configuration
        self.channel = channel
        self.type_mapper = type_mapper
        self.guard = guard
        self.format_parameters = format_parameters
        self.sanitize_method_names = sanitize_method_names
        self.add_comments = add_comments

    def qualifying_methods(self) -> List[MethodDefinition]:
        """Methods exposed on this generator's channel, in declaration order."""
        methods = []
        for method in self.class_definition.methods:
            method_type = self.class_configuration.get_method_type(method.name)
            if method_type != self.channel:
                logger.debug(
                    "Skipping %s.%s: exposed on %s, generating for %s",
                    self.class_definition.name,
                    method.name,
                    method_type.value,
                    self.channel.value,
                )
                continue
            methods.append(method)
        return methods

    def signature_types(self, methods: Sequence[MethodDefinition]) -> List[Node]:
        """Every parameter and return type used by ``methods``."""
        types = []
        for method in methods:
            types.extend(param.type for param in method.params)
            types.append(method.return_type)
        return types

    def build_method(self, method: MethodDefinition) -> MethodView:
        qualified_name = f"{self.class_definition.name}.{method.name}"

        names = self.guard.sanitize_all(param.name for param in method.params)

        parameters = []
        for name, param in zip(names, method.params):
            default = None
            if param.default_value is not None:
                default = self.type_mapper.render_literal(param.default_value)
            parameters.append(
                ParameterView(
                    name=name,
                    type=self.type_mapper.map_type(param.type),
                    optional=param.optional,
                    default=default,
                )
            )

        self.format_parameters(parameters)
        mark_last(parameters)

        arguments = mark_last([ArgumentView(p.name) for p in parameters])

        # Holds the raw JSON result while it is converted to the return type
        result_name = self.guard.sanitize_unique("result", set(names))

        name = method.name
        if self.sanitize_method_names:
            name = self.guard.sanitize(name)

        return MethodView(
            name=name,
            qualified_name=qualified_name,
            caller=self.type_mapper.quote_string(qualified_name),
            parameters=parameters,
            arguments=arguments,
            return_type=self.type_mapper.map_return_type(method.return_type),
            doc_string=method.doc_string if self.add_comments else None,
            result_name=result_name,
            decoder=self.type_mapper.decode_result(method.return_type, result_name),
        )

    def build_view(self, file_path: str, url: str, methods: Optional[Sequence[MethodDefinition]] = None) -> Optional[ClassView]:
        """
        Build the class view.

        Args:
            file_path: Output path of the proxy file
            url: Endpoint the proxy's transport is constructed with
            methods: Pre-filtered qualifying methods, computed if omitted

        Returns:
            ClassView, or None when no method qualifies
        """
        if methods is None:
            methods = self.qualifying_methods()
        if not methods:
            return None

        return ClassView(
            class_name=self.class_definition.name,
            file_path=file_path,
            url=url,
            methods=mark_last([self.build_method(m) for m in methods]),
            doc_string=self.class_definition.doc_string if self.add_comments else None,
        )
