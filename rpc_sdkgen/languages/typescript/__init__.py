"""
TypeScript SDK generator module.

Generates TypeScript proxy classes and model files for remote classes.
"""

from .generator import TypeScriptGenerator, create_typescript_generator
from .naming import TYPESCRIPT_RESERVED_WORDS, create_typescript_guard
from .types import TypeScriptTypeMapper

__all__ = [
    "TypeScriptGenerator",
    "TypeScriptTypeMapper",
    "create_typescript_generator",
    "create_typescript_guard",
    "TYPESCRIPT_RESERVED_WORDS",
]
