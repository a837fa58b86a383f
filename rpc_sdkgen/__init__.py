"""
rpc_sdkgen - client SDK generation for remote-callable classes.

Turns the parsed description of a class into ready-to-publish client
libraries (TypeScript, Python, Dart) whose methods forward to the
deployed class over JSON-RPC.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .core.ast import Program, ProgramFormatError, program_from_dict
from .core.config import ClassConfiguration, ConfigError, GeneratorConfig, MethodConfiguration, TriggerType
from .core.generator import (
    ClassInfo,
    GeneratorError,
    SdkFile,
    SdkGeneratorInput,
    SdkGeneratorOutput,
    run_generator,
)
from .core.templates import TemplateError
from .loader import ProgramLoaderError, load_program
from .logging_config import configure_logging, get_logger
from .registry import (
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    is_language_supported,
    list_supported_languages,
    register_generator,
)

__version__ = "0.1.0"


def generate_sdk(
    sdk_input: SdkGeneratorInput,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> SdkGeneratorOutput:
    """
    Generate the SDK for ``sdk_input.language``.

    Args:
        sdk_input: Classes to expose and the target language
        config: Generator configuration, overrides dict, or config file path

    Returns:
        SdkGeneratorOutput; failures are reported through ``success`` and
        ``error_message`` instead of raising

    Raises:
        RegistryError: If the language is not supported
    """
    generator = get_generator(sdk_input.language, config)
    return run_generator(generator, sdk_input)


__all__ = [
    # Main API
    "generate_sdk",
    "get_generator",
    "list_supported_languages",
    "load_program",
    # Registry
    "get_registry",
    "register_generator",
    "is_language_supported",
    "get_language_info",
    # Data
    "Program",
    "program_from_dict",
    "ClassInfo",
    "ClassConfiguration",
    "MethodConfiguration",
    "TriggerType",
    "SdkGeneratorInput",
    "SdkGeneratorOutput",
    "SdkFile",
    "GeneratorConfig",
    # Logging
    "configure_logging",
    "get_logger",
    # Errors
    "ConfigError",
    "GeneratorError",
    "ProgramFormatError",
    "ProgramLoaderError",
    "RegistryError",
    "TemplateError",
    "__version__",
]
