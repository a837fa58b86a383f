"""
Dart SDK generator implementation.

Generates static proxy classes, model libraries and the JSON-RPC
transport stub for Dart and Flutter clients.
"""

from pathlib import Path
from typing import List, Optional

from ...core.config import GeneratorConfig
from ...core.diagnostics import DiagnosticLog
from ...core.generator import SdkGenerator
from ...core.imports import relative_module_path
from ...core.naming import ReservedWordGuard
from ...core.views import ParameterView, optional_tail_start
from ...logging_config import get_logger
from .naming import create_dart_guard
from .types import DartTypeMapper, nullable

logger = get_logger(__name__)


class DartGenerator(SdkGenerator):
    """SDK generator for Dart."""

    proxy_template = "proxy.dart.j2"
    types_template = "types.dart.j2"
    remote_template = "remote.dart.j2"
    sanitize_method_names = True

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)

    def get_template_directory(self) -> Optional[Path]:
        """Return the Dart templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        return "dart"

    @property
    def file_extension(self) -> str:
        return ".dart"

    @property
    def proxy_suffix(self) -> str:
        return ".sdk"

    def create_type_mapper(self, diagnostics: DiagnosticLog) -> DartTypeMapper:
        return DartTypeMapper(diagnostics, indent=self.indent, guard=self.create_guard())

    def create_guard(self) -> ReservedWordGuard:
        return create_dart_guard()

    def import_path(self, consumer: str, provider: str) -> str:
        return relative_module_path(consumer, provider) + self.file_extension

    def format_parameters(self, parameters: List[ParameterView]):
        """
        Spell parameters as Dart positional parameters.

        The trailing run of optional or defaulted parameters becomes an
        optional positional group ``[...]``. An optional parameter followed
        by a required one stays positional but nullable, and loses its
        default since Dart only allows defaults on optional parameters.
        """
        first_optional = optional_tail_start(parameters)

        for index, param in enumerate(parameters):
            if index < first_optional:
                if param.is_optional:
                    logger.debug("Parameter %s is followed by a required one, kept positional", param.name)
                    param.declaration = f"{nullable(param.type)} {param.name}"
                else:
                    param.declaration = f"{param.type} {param.name}"
            elif param.default is None:
                param.declaration = f"{nullable(param.type)} {param.name}"
            elif param.default == "null":
                param.declaration = f"{nullable(param.type)} {param.name} = null"
            else:
                param.declaration = f"{param.type} {param.name} = {param.default}"

        if first_optional < len(parameters):
            parameters[first_optional].declaration = "[" + parameters[first_optional].declaration
            parameters[-1].declaration += "]"


def create_dart_generator(config: Optional[GeneratorConfig] = None) -> DartGenerator:
    """Create a Dart generator with default configuration."""
    return DartGenerator(config)
