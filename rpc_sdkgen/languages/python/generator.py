"""
Python SDK generator implementation.

Generates asyncio proxy classes, dataclass model modules and the
JSON-RPC transport stub.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.config import GeneratorConfig
from ...core.diagnostics import DiagnosticLog
from ...core.generator import SdkGenerator
from ...core.imports import relative_module_path
from ...core.naming import ReservedWordGuard
from ...core.views import ParameterView, optional_tail_start
from .naming import create_python_guard
from .types import PythonTypeMapper, get_required_imports, optional_annotation


class PythonGenerator(SdkGenerator):
    """SDK generator for Python."""

    proxy_template = "proxy.py.j2"
    types_template = "types.py.j2"
    remote_template = "remote.py.j2"
    sanitize_method_names = True
    default_indent = 4

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)

    def get_template_directory(self) -> Optional[Path]:
        """Return the Python templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        return "python"

    @property
    def file_extension(self) -> str:
        return ".py"

    @property
    def proxy_suffix(self) -> str:
        return "_sdk"

    def create_type_mapper(self, diagnostics: DiagnosticLog) -> PythonTypeMapper:
        return PythonTypeMapper(diagnostics, indent=self.indent, guard=self.create_guard())

    def create_guard(self) -> ReservedWordGuard:
        return create_python_guard()

    def import_path(self, consumer: str, provider: str) -> str:
        """
        Relative module path of ``provider`` as seen from ``consumer``.

        ``models/foo`` seen from ``user_sdk`` is ``.models.foo``; seen from
        ``api/bar`` it is ``..models.foo``.
        """
        parts = relative_module_path(consumer, provider).split("/")
        dots = 1
        while parts and parts[0] == "..":
            dots += 1
            parts.pop(0)
        return "." * dots + ".".join(part for part in parts if part != ".")

    def format_parameters(self, parameters: List[ParameterView]):
        """
        Spell parameters as positional Python parameters.

        Only the trailing run of optional or defaulted parameters keeps a
        default; an optional parameter followed by a required one is still
        required but accepts None.
        """
        first_optional = optional_tail_start(parameters)

        for index, param in enumerate(parameters):
            if index < first_optional:
                annotation = optional_annotation(param.type) if param.is_optional else param.type
                param.declaration = f"{param.name}: {annotation}"
            elif param.default is None or param.default == "None":
                param.declaration = f"{param.name}: {optional_annotation(param.type)} = None"
            else:
                param.declaration = f"{param.name}: {param.type} = {param.default}"

    def file_context(self, type_strings: List[str]) -> Dict[str, Any]:
        return {"std_imports": get_required_imports(type_strings)}


def create_python_generator(config: Optional[GeneratorConfig] = None) -> PythonGenerator:
    """Create a Python generator with default configuration."""
    return PythonGenerator(config)
