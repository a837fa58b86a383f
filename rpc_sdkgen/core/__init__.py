"""
Core SDK generation components.

Provides the type model and the base classes and utilities used by all
language generators.
"""

from .ast import (
    ClassDefinition,
    MethodDefinition,
    Node,
    NodeType,
    ParameterDefinition,
    Program,
    ProgramFormatError,
    node_from_dict,
    program_from_dict,
)
from .config import (
    ClassConfiguration,
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    MethodConfiguration,
    TriggerType,
    load_config,
)
from .diagnostics import Diagnostic, DiagnosticLog
from .generator import (
    BANNER,
    STUB_URL_MARKER,
    URL_MARKER,
    ClassInfo,
    GeneratorError,
    SdkFile,
    SdkGenerator,
    SdkGeneratorInput,
    SdkGeneratorOutput,
    run_generator,
)
from .imports import ImportGraphResolver
from .naming import NamingCase, ReservedWordGuard
from .templates import TemplateEngine, TemplateError, create_template_engine
from .types import TypeMapper
from .views import ClassCodeGenerator

__all__ = [
    # Type model
    "ClassDefinition",
    "MethodDefinition",
    "Node",
    "NodeType",
    "ParameterDefinition",
    "Program",
    "ProgramFormatError",
    "node_from_dict",
    "program_from_dict",
    # Base generator interface
    "SdkGenerator",
    "SdkGeneratorInput",
    "SdkGeneratorOutput",
    "SdkFile",
    "ClassInfo",
    "GeneratorError",
    "run_generator",
    "BANNER",
    "URL_MARKER",
    "STUB_URL_MARKER",
    # Generation pipeline
    "TypeMapper",
    "ImportGraphResolver",
    "ClassCodeGenerator",
    "Diagnostic",
    "DiagnosticLog",
    # Naming utilities
    "ReservedWordGuard",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "ClassConfiguration",
    "MethodConfiguration",
    "TriggerType",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
