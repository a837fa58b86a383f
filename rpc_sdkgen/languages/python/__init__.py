"""
Python SDK generator module.

Generates asyncio proxy classes and dataclass models for remote classes.
"""

from .generator import PythonGenerator, create_python_generator
from .naming import PYTHON_RESERVED_WORDS, create_python_guard
from .types import PythonTypeMapper, get_required_imports, optional_annotation

__all__ = [
    # Generator
    "PythonGenerator",
    "create_python_generator",
    # Naming
    "create_python_guard",
    "PYTHON_RESERVED_WORDS",
    # Types
    "PythonTypeMapper",
    "get_required_imports",
    "optional_annotation",
]
