"""
TypeScript-specific naming utilities.

Handles TypeScript reserved words for generated parameter names.
"""

from ...core.naming import ReservedWordGuard


# TypeScript reserved and contextual keywords
TYPESCRIPT_RESERVED_WORDS = {
    "abstract",
    "any",
    "as",
    "asserts",
    "async",
    "await",
    "boolean",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "constructor",
    "continue",
    "declare",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "from",
    "function",
    "get",
    "global",
    "if",
    "implements",
    "import",
    "in",
    "infer",
    "instanceof",
    "interface",
    "is",
    "keyof",
    "let",
    "module",
    "namespace",
    "never",
    "new",
    "null",
    "number",
    "object",
    "of",
    "package",
    "private",
    "protected",
    "public",
    "readonly",
    "require",
    "return",
    "set",
    "static",
    "string",
    "super",
    "switch",
    "symbol",
    "this",
    "throw",
    "true",
    "try",
    "type",
    "typeof",
    "undefined",
    "unique",
    "unknown",
    "var",
    "void",
    "while",
    "with",
    "yield",
}


def create_typescript_guard() -> ReservedWordGuard:
    """Create a reserved word guard configured for TypeScript."""
    return ReservedWordGuard(TYPESCRIPT_RESERVED_WORDS)
