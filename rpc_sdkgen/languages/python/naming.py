"""
Python-specific naming utilities.

Handles Python keywords for generated parameter, method and member names.
"""

import keyword

from ...core.naming import ReservedWordGuard


# Python reserved keywords
PYTHON_RESERVED_WORDS = frozenset(keyword.kwlist)


def create_python_guard() -> ReservedWordGuard:
    """Create a reserved word guard configured for Python."""
    return ReservedWordGuard(PYTHON_RESERVED_WORDS)
