"""
Dart SDK generator module.

Generates Dart proxy classes and model libraries for remote classes.
"""

from .generator import DartGenerator, create_dart_generator
from .naming import DART_RESERVED_WORDS, create_dart_enum_guard, create_dart_guard
from .types import DartTypeMapper, nullable

__all__ = [
    "DartGenerator",
    "DartTypeMapper",
    "create_dart_generator",
    "create_dart_guard",
    "create_dart_enum_guard",
    "nullable",
    "DART_RESERVED_WORDS",
]
