"""
Cross-file import resolution.

For one generation call in one target language, works out which
generated file owns each reachable type declaration and which symbols
every generated file has to import from the others.
"""

import posixpath
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set

from .ast import Node, NodeType, iter_child_types
from ..logging_config import get_logger

logger = get_logger(__name__)

ImportPathFormatter = Callable[[str, str], str]


@dataclass
class ImportedSymbol:
    name: str
    last: bool = False


@dataclass
class ImportGroup:
    """All symbols one file imports from one provider file."""

    provider: str
    path: str
    symbols: List[ImportedSymbol] = field(default_factory=list)
    last: bool = False

    @property
    def names(self) -> List[str]:
        return [symbol.name for symbol in self.symbols]


@dataclass
class TypeFileView:
    """A generated type-declaration file: its declarations and imports."""

    path: str
    declarations: List[Node]
    imports: List[ImportGroup]


@dataclass
class ClassImports:
    """What the proxy file of one class imports and declares itself."""

    imports: List[ImportGroup]
    local_declarations: List[Node]


def normalize_path(path: str, strip_extension: bool = False) -> str:
    """Normalise a project-relative path to posix form without a leading ``./``."""
    normalized = posixpath.normpath(path.replace("\\", "/")).lstrip("/")
    if strip_extension:
        normalized = posixpath.splitext(normalized)[0]
    return normalized


def relative_module_path(consumer: str, provider: str) -> str:
    """Path of ``provider`` relative to the directory holding ``consumer``."""
    start = posixpath.dirname(consumer) or "."
    return posixpath.relpath(provider, start)


class _ClassScope:
    """Name lookup and home-file rules for the declarations of one program."""

    def __init__(self, class_file: str, source_path: Optional[str], declarations: Sequence[Node]):
        self.class_file = class_file
        self.source_path = normalize_path(source_path, strip_extension=True) if source_path else None
        self.by_name: Dict[str, Node] = {}
        self.order: Dict[str, int] = {}
        for index, declaration in enumerate(declarations):
            if declaration.name not in self.by_name:
                self.by_name[declaration.name] = declaration
                self.order[declaration.name] = index

    def home_of(self, declaration: Node) -> str:
        if not declaration.home_path:
            return self.class_file

        home = normalize_path(declaration.home_path)
        if home == self.source_path:
            return self.class_file
        return home

    def collect(self, node: Optional[Node], found: List[Node]):
        if node is None:
            return

        if node.is_declaration:
            declaration = self.by_name.setdefault(node.name, node)
            if declaration not in found:
                found.append(declaration)
            return

        if node.node_type == NodeType.CUSTOM:
            declaration = self.by_name.get(node.raw_value)
            if declaration is not None and declaration not in found:
                found.append(declaration)
            return

        for child in iter_child_types(node):
            self.collect(child, found)

    def definition_references(self, declaration: Node) -> List[Node]:
        found: List[Node] = []
        for child in iter_child_types(declaration):
            self.collect(child, found)
        return found

    def position(self, declaration: Node):
        return (self.order.get(declaration.name, len(self.order)), declaration.name)


class ImportGraphResolver:
    """
    Builds the import graph of one generation call in one target language.

    File keys are extension-less paths: the proxy file key for each class,
    and the declaration's home path for every other file. Instances hold
    per-call state and must not be shared between languages or calls.
    """

    def __init__(self, import_path: ImportPathFormatter):
        """
        Initialize resolver.

        Args:
            import_path: Spells the import path from a consumer file key to
                a provider file key in the target language
        """
        self.import_path = import_path
        self._edges: Dict[str, Dict[str, Set[str]]] = {}
        self._owned: Dict[str, Dict[str, Node]] = {}
        self._class_files: Set[str] = set()

    def add_edge(self, consumer: str, provider: str, symbol: str):
        """Record that ``consumer`` imports ``symbol`` from ``provider``."""
        if consumer == provider:
            return
        self._edges.setdefault(consumer, {}).setdefault(provider, set()).add(symbol)

    def imports_of(self, consumer: str) -> Dict[str, List[str]]:
        """Raw provider -> symbols map of ``consumer``, symbols sorted."""
        return {
            provider: sorted(symbols)
            for provider, symbols in sorted(self._edges.get(consumer, {}).items())
        }

    def resolve_class(
        self,
        class_file: str,
        source_path: Optional[str],
        declarations: Sequence[Node],
        signature_types: Iterable[Node],
    ) -> ClassImports:
        """
        Resolve the declarations and imports needed by one class.

        Args:
            class_file: File key of the class's generated proxy file
            source_path: Source file of the class; declarations homed
                there are local to the proxy file
            declarations: Top-level type declarations of the class's program
            signature_types: Parameter and return types of every method
                that will appear in the proxy

        Returns:
            ClassImports with the proxy's import list and local declarations
        """
        scope = _ClassScope(class_file, source_path, declarations)
        self._class_files.add(class_file)

        direct: List[Node] = []
        for node in signature_types:
            scope.collect(node, direct)

        # Transitive closure over declaration bodies
        reachable: List[Node] = []
        seen = {declaration.name for declaration in direct}
        queue = list(direct)
        while queue:
            declaration = queue.pop(0)
            reachable.append(declaration)
            for ref in scope.definition_references(declaration):
                if ref.name not in seen:
                    seen.add(ref.name)
                    queue.append(ref)

        unreachable = sorted(set(scope.by_name) - seen)
        if unreachable:
            logger.debug("Declarations not used by any exposed method: %s", ", ".join(unreachable))

        # Partition by owning file; a declaration is emitted once per file
        local: List[Node] = []
        for declaration in sorted(reachable, key=scope.position):
            home = scope.home_of(declaration)
            if home == class_file:
                local.append(declaration)
            else:
                self._owned.setdefault(home, {}).setdefault(declaration.name, declaration)

        # Edges between declarations in different files
        for declaration in reachable:
            owner = scope.home_of(declaration)
            for ref in scope.definition_references(declaration):
                self.add_edge(owner, scope.home_of(ref), ref.name)

        # Edges from the method signatures
        for declaration in direct:
            self.add_edge(class_file, scope.home_of(declaration), declaration.name)

        return ClassImports(imports=self.import_list(class_file), local_declarations=local)

    def type_files(self) -> List[TypeFileView]:
        """One view per non-local home path, ordered by path."""
        views = [
            TypeFileView(path, list(declarations.values()), self.import_list(path))
            for path, declarations in sorted(self._owned.items())
            if path not in self._class_files
        ]
        logger.debug("Resolved %d type file(s)", len(views))
        return views

    def import_list(self, consumer: str) -> List[ImportGroup]:
        """Ordered import groups of ``consumer`` with ``last`` flags set."""
        groups = [
            ImportGroup(
                provider=provider,
                path=self.import_path(consumer, provider),
                symbols=[ImportedSymbol(name) for name in names],
            )
            for provider, names in self.imports_of(consumer).items()
        ]
        groups.sort(key=lambda group: group.path)

        for group in groups:
            group.symbols[-1].last = True
        if groups:
            groups[-1].last = True

        return groups
