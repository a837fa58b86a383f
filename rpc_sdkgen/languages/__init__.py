"""
Language-specific SDK generators.

This module contains generators for different programming languages.
"""

from .dart import DartGenerator, create_dart_generator
from .python import PythonGenerator, create_python_generator
from .typescript import TypeScriptGenerator, create_typescript_generator

__all__ = [
    "DartGenerator",
    "PythonGenerator",
    "TypeScriptGenerator",
    "create_dart_generator",
    "create_python_generator",
    "create_typescript_generator",
]
