"""
TypeScript SDK generator implementation.

Generates static proxy classes, shared model files and the JSON-RPC
transport stub for Node and browser clients.
"""

from pathlib import Path
from typing import List, Optional

from ...core.config import GeneratorConfig
from ...core.diagnostics import DiagnosticLog
from ...core.generator import SdkGenerator
from ...core.imports import relative_module_path
from ...core.naming import ReservedWordGuard
from ...core.views import ParameterView, optional_tail_start
from .naming import create_typescript_guard
from .types import TypeScriptTypeMapper


class TypeScriptGenerator(SdkGenerator):
    """SDK generator for TypeScript."""

    proxy_template = "proxy.ts.j2"
    types_template = "types.ts.j2"
    remote_template = "remote.ts.j2"
    missing_url_literal = "undefined"

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)

    def get_template_directory(self) -> Optional[Path]:
        """Return the TypeScript templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return ".ts"

    @property
    def proxy_suffix(self) -> str:
        return ".sdk"

    def create_type_mapper(self, diagnostics: DiagnosticLog) -> TypeScriptTypeMapper:
        return TypeScriptTypeMapper(diagnostics, indent=self.indent)

    def create_guard(self) -> ReservedWordGuard:
        return create_typescript_guard()

    def import_path(self, consumer: str, provider: str) -> str:
        """Module specifier of ``provider`` as seen from ``consumer``."""
        path = relative_module_path(consumer, provider)
        if not path.startswith("."):
            path = f"./{path}"
        return path

    def format_parameters(self, parameters: List[ParameterView]):
        """
        Spell parameters as TypeScript parameters.

        ``?`` is only allowed in the trailing run of optional parameters;
        an optional parameter followed by a required one accepts
        ``undefined`` instead. Defaults are allowed anywhere.
        """
        first_optional = optional_tail_start(parameters)

        for index, param in enumerate(parameters):
            if param.default is not None:
                param.declaration = f"{param.name}: {param.type} = {param.default}"
            elif param.optional and index >= first_optional:
                param.declaration = f"{param.name}?: {param.type}"
            elif param.optional:
                param.declaration = f"{param.name}: {with_undefined(param.type)}"
            else:
                param.declaration = f"{param.name}: {param.type}"


def with_undefined(mapped: str) -> str:
    """Make a TypeScript type accept undefined."""
    if mapped in ("any", "unknown", "undefined") or mapped.endswith("| undefined"):
        return mapped
    return f"{mapped} | undefined"


def create_typescript_generator(config: Optional[GeneratorConfig] = None) -> TypeScriptGenerator:
    """Create a TypeScript generator with default configuration."""
    return TypeScriptGenerator(config)
