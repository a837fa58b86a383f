"""
Base generator interface for all SDK targets.

Defines the contract that all language generators must implement and
drives one generation call: class views, cross-file imports, template
rendering and the transport stub.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .ast import Program
from .config import ClassConfiguration, GeneratorConfig
from .diagnostics import MISSING_CLASS, NO_METHODS, Diagnostic, DiagnosticLog
from .imports import ImportGraphResolver, TypeFileView
from .naming import ReservedWordGuard, lower_first
from .templates import TemplateEngine, create_template_engine
from .types import TypeMapper
from .views import ClassCodeGenerator, ClassView, ParameterView
from ..logging_config import get_logger

logger = get_logger(__name__)

# Endpoint marker in proxy classes, replaced by the deployment step
URL_MARKER = "%%%link_to_be_replace%%%"

# Default endpoint marker in the transport stub
STUB_URL_MARKER = "%%%url%%%"

BANNER = (
    "This is an auto generated code. This code should not be modified since the file "
    "can be overwritten if new SDK generation commands are executed."
)


class GeneratorError(Exception):
    """Base exception for SDK generation errors."""

    pass


@dataclass(frozen=True)
class ClassInfo:
    """One parsed class together with its exposure configuration."""

    program: Program
    class_configuration: ClassConfiguration
    file_name: str = ""


@dataclass(frozen=True)
class SdkGeneratorInput:
    classes_info: Sequence[ClassInfo]
    language: str
    package_name: Optional[str] = None
    package_version: Optional[str] = None


@dataclass(frozen=True)
class SdkFile:
    """A generated source file, relative to the SDK root."""

    path: str
    data: str
    class_name: str = ""


class SdkGeneratorOutput:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: List[SdkFile] = None,
        warnings: List[Diagnostic] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation output.

        Args:
            files: Generated files, transport stub last
            warnings: Diagnostics recorded during generation
            metadata: Additional metadata about generation
        """
        self.files = files or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "SdkGeneratorOutput":
        """Create a failed generation output."""
        result = cls()
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    def get_file(self, path: str) -> Optional[SdkFile]:
        for sdk_file in self.files:
            if sdk_file.path == path:
                return sdk_file
        return None


class SdkGenerator(ABC):
    """Abstract base class for all SDK generators."""

    # Template file names, relative to the language's template directory
    proxy_template: str = ""
    types_template: str = ""
    remote_template: str = ""

    # Whether proxy method names go through the reserved word guard
    sanitize_method_names: bool = False

    # Stub endpoint when no URL is configured; the mapper's null literal if None
    missing_url_literal: Optional[str] = None

    # Spaces per indentation level unless config.custom sets "indent"
    default_indent: int = 2

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript', 'python')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts', '.py')."""
        pass

    @property
    @abstractmethod
    def proxy_suffix(self) -> str:
        """Suffix between the class name and the extension of proxy files."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Returns:
            Path to template directory or None
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @property
    def indent(self) -> str:
        return " " * int(self.config.custom.get("indent", self.default_indent))

    # Language hooks

    @abstractmethod
    def create_type_mapper(self, diagnostics: DiagnosticLog) -> TypeMapper:
        """Create the type mapper used for one generation call."""
        pass

    @abstractmethod
    def create_guard(self) -> ReservedWordGuard:
        """Create the reserved word guard of the target language."""
        pass

    @abstractmethod
    def import_path(self, consumer: str, provider: str) -> str:
        """Spell the import of file key ``provider`` from file key ``consumer``."""
        pass

    @abstractmethod
    def format_parameters(self, parameters: List[ParameterView]):
        """Fill in the declaration text of every parameter of one method."""
        pass

    def file_context(self, type_strings: List[str]) -> Dict[str, Any]:
        """Extra template variables for a file using ``type_strings``."""
        return {}

    # File naming

    def proxy_file_key(self, class_name: str) -> str:
        return lower_first(class_name) + self.proxy_suffix

    def stub_file_name(self) -> str:
        return "remote" + self.file_extension

    # Generation

    def generate(self, sdk_input: SdkGeneratorInput) -> SdkGeneratorOutput:
        """
        Generate the SDK files for every class of ``sdk_input``.

        Args:
            sdk_input: Parsed classes with their exposure configuration

        Returns:
            SdkGeneratorOutput with proxy files, type files and the
            transport stub (always last)
        """
        for template_name in (self.proxy_template, self.types_template, self.remote_template):
            if not self.template_exists(template_name):
                raise GeneratorError(f"Template {template_name} not found for {self.language_name}")

        diagnostics = DiagnosticLog()
        mapper = self.create_type_mapper(diagnostics)
        guard = self.create_guard()
        resolver = ImportGraphResolver(self.import_path)
        context = self._base_context(sdk_input)

        files: List[SdkFile] = []
        for class_info in sdk_input.classes_info:
            sdk_file = self.generate_class(class_info, mapper, guard, resolver, diagnostics, context)
            if sdk_file is not None:
                files.append(sdk_file)

        for type_file in resolver.type_files():
            files.append(self.render_type_file(type_file, mapper, context))

        files.append(self.generate_transport_stub(mapper, context))

        metadata = {
            "language": self.language_name,
            "file_extension": self.file_extension,
            "file_count": len(files),
            "class_count": sum(1 for f in files if f.class_name and f.path != self.stub_file_name()),
            "package_name": context["package_name"],
            "package_version": context["package_version"],
        }

        logger.info(
            "Generated %d %s file(s) with %d warning(s)",
            len(files),
            self.language_name,
            len(diagnostics),
        )

        return SdkGeneratorOutput(files, list(diagnostics), metadata)

    def generate_class(
        self,
        class_info: ClassInfo,
        mapper: TypeMapper,
        guard: ReservedWordGuard,
        resolver: ImportGraphResolver,
        diagnostics: DiagnosticLog,
        context: Dict[str, Any],
    ) -> Optional[SdkFile]:
        """Generate the proxy file of one class, or None if it is skipped."""
        program = class_info.program
        class_definition = program.class_definition()
        label = class_info.file_name or class_info.class_configuration.path

        if class_definition is None:
            diagnostics.report(MISSING_CLASS, "program has no class definition, skipped", label)
            return None

        mapper.register_declarations(program.declarations())

        class_generator = ClassCodeGenerator(
            class_definition=class_definition,
            class_configuration=class_info.class_configuration,
            channel=self.config.trigger,
            type_mapper=mapper,
            guard=guard,
            format_parameters=self.format_parameters,
            sanitize_method_names=self.sanitize_method_names,
            add_comments=self.config.add_comments,
        )

        methods = class_generator.qualifying_methods()
        if not methods:
            diagnostics.report(
                NO_METHODS,
                f"no method exposed on {self.config.channel}, skipped",
                class_definition.name,
            )
            return None

        class_file = self.proxy_file_key(class_definition.name)
        class_imports = resolver.resolve_class(
            class_file,
            class_info.class_configuration.path,
            program.declarations(),
            class_generator.signature_types(methods),
        )

        view = class_generator.build_view(class_file + self.file_extension, URL_MARKER, methods)
        view.imports = class_imports.imports
        view.declarations = [mapper.render_declaration(d) for d in class_imports.local_declarations]

        logger.debug("Rendering proxy %s (%d methods)", view.file_path, len(view.methods))
        return SdkFile(view.file_path, self.render_proxy(view, context), class_definition.name)

    def generate_transport_stub(self, mapper: TypeMapper, context: Dict[str, Any]) -> SdkFile:
        """Render the transport stub with its endpoint marker filled in."""
        if self.config.stub_url is None:
            url = self.missing_url_literal or mapper.null_literal
        else:
            url = mapper.quote_string(self.config.stub_url)

        data = self.render_template(self.remote_template, context)
        return SdkFile(self.stub_file_name(), self.format_code(data.replace(STUB_URL_MARKER, url)), "Remote")

    # Rendering

    def _base_context(self, sdk_input: SdkGeneratorInput) -> Dict[str, Any]:
        """Template variables shared by every file of one generation call."""
        return {
            "banner": BANNER,
            "package_name": sdk_input.package_name or self.config.package_name,
            "package_version": sdk_input.package_version or self.config.package_version,
            "indent": self.indent,
        }

    def render_proxy(self, view: ClassView, base_context: Dict[str, Any]) -> str:
        type_strings = [p.type for m in view.methods for p in m.parameters]
        type_strings += [m.return_type for m in view.methods] + view.declarations
        type_strings += [m.decoder for m in view.methods if m.decoder]

        context = dict(base_context)
        context.update(self.file_context(type_strings))
        context.update(
            {
                "class_name": view.class_name,
                "url": view.url,
                "doc_string": view.doc_string,
                "methods": view.methods,
                "imports": view.imports,
                "declarations": view.declarations,
            }
        )
        return self.format_code(self.render_template(self.proxy_template, context))

    def render_type_file(self, type_file: TypeFileView, mapper: TypeMapper, base_context: Dict[str, Any]) -> SdkFile:
        declarations = [mapper.render_declaration(d) for d in type_file.declarations]

        context = dict(base_context)
        context.update(self.file_context(declarations))
        context.update({"imports": type_file.imports, "declarations": declarations})

        data = self.format_code(self.render_template(self.types_template, context))
        return SdkFile(type_file.path + self.file_extension, data, "")

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return self.config.line_ending.join(formatted_lines).strip() + self.config.line_ending

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


def run_generator(generator: SdkGenerator, sdk_input: SdkGeneratorInput) -> SdkGeneratorOutput:
    """
    Generate an SDK using the specified generator with error handling.

    Args:
        generator: SDK generator instance
        sdk_input: Classes to generate proxies for

    Returns:
        SdkGeneratorOutput with files, warnings and metadata
    """
    try:
        return generator.generate(sdk_input)
    except Exception as e:
        logger.error("SDK generation failed: %s", e, exc_info=True)
        return SdkGeneratorOutput.error(f"SDK generation failed: {str(e)}", exception=e)
