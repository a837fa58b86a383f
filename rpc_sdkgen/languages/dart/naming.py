"""
Dart-specific naming utilities.

Handles Dart reserved words, built-in identifiers and contextual keywords.
"""

from ...core.naming import ReservedWordGuard


# Dart reserved words, built-in identifiers and contextual keywords
DART_RESERVED_WORDS = {
    "abstract",
    "as",
    "assert",
    "async",
    "await",
    "base",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "covariant",
    "default",
    "deferred",
    "do",
    "dynamic",
    "else",
    "enum",
    "export",
    "extends",
    "extension",
    "external",
    "factory",
    "false",
    "final",
    "finally",
    "for",
    "Function",
    "get",
    "hide",
    "if",
    "implements",
    "import",
    "in",
    "interface",
    "is",
    "late",
    "library",
    "mixin",
    "new",
    "null",
    "of",
    "on",
    "operator",
    "part",
    "required",
    "rethrow",
    "return",
    "sealed",
    "set",
    "show",
    "static",
    "super",
    "switch",
    "sync",
    "this",
    "throw",
    "true",
    "try",
    "type",
    "typedef",
    "var",
    "void",
    "when",
    "while",
    "with",
    "yield",
}

# Members every generated enum declares itself
DART_ENUM_MEMBERS = {"index", "name", "value", "values", "toJson"}


def create_dart_guard() -> ReservedWordGuard:
    """Create a reserved word guard configured for Dart."""
    return ReservedWordGuard(DART_RESERVED_WORDS)


def create_dart_enum_guard() -> ReservedWordGuard:
    """Create a guard for enum case names, which also avoid enum members."""
    return ReservedWordGuard(DART_RESERVED_WORDS | DART_ENUM_MEMBERS)
