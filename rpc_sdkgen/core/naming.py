"""
Naming utilities for safe code generation.

Handles reserved-word collisions and case conversions for identifiers
emitted into generated SDK sources.
"""

import re
from typing import Dict, Iterable, List, Optional, Set
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName


class ReservedWordGuard:
    """Keeps generated identifiers clear of a target language's reserved words."""

    def __init__(self, reserved_words: Optional[Iterable[str]] = None, suffix: str = "_"):
        """
        Initialize reserved word guard.

        Args:
            reserved_words: Identifiers the target language does not allow
            suffix: Suffix appended to a colliding name
        """
        self.reserved_words = frozenset(reserved_words or ())
        self.suffix = suffix
        self._name_cache: Dict[str, str] = {}

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_words

    def sanitize(self, name: str) -> str:
        """
        Return ``name`` or, if it collides with a reserved word, its
        disambiguated form.

        The result only depends on the name, so the declaration of an
        identifier and each of its uses always agree.
        """
        if name in self._name_cache:
            return self._name_cache[name]

        final_name = name
        while final_name in self.reserved_words:
            final_name = f"{final_name}{self.suffix}"

        self._name_cache[name] = final_name
        return final_name

    def sanitize_unique(self, name: str, taken: Set[str]) -> str:
        """Sanitize ``name`` and extend it until no name in ``taken`` matches."""
        final_name = self.sanitize(name)
        while final_name in taken or final_name in self.reserved_words:
            final_name = f"{final_name}{self.suffix}"
        return final_name

    def sanitize_all(self, names: Iterable[str]) -> List[str]:
        """Sanitize the names of one scope, such as a parameter list, keeping them distinct."""
        taken: Set[str] = set()
        result = []
        for name in names:
            final_name = self.sanitize_unique(name, taken)
            taken.add(final_name)
            result.append(final_name)
        return result

    def sanitize_case(self, name: str, target_case: NamingCase) -> str:
        """Convert ``name`` to ``target_case`` and sanitize the result."""
        converted = convert_case(clean_identifier(name), target_case)
        return self.sanitize(clean_identifier(converted))


def clean_identifier(name: str) -> str:
    """Replace characters that cannot appear in an identifier."""
    cleaned = re.sub(r"[^a-zA-Z0-9_]", "_", name)

    # Ensure doesn't start with number
    if cleaned and cleaned[0].isdigit():
        cleaned = f"_{cleaned}"

    return cleaned or "value"


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        return to_camel_case(name)
    elif target_case == NamingCase.PASCAL_CASE:
        return to_pascal_case(name)
    else:
        return name


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    name = name.replace("-", "_")

    # Insert underscore before uppercase letters
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)

    # Split runs of capitals like "HTTPServer" -> "http_server"
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)

    name = name.lower()
    name = re.sub(r"_+", "_", name)

    return name.strip("_")


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    parts = [part for part in to_snake_case(name).split("_") if part]

    if not parts:
        return name

    return parts[0] + "".join(part.capitalize() for part in parts[1:])


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    return "".join(part.capitalize() for part in to_snake_case(name).split("_") if part)


def lower_first(name: str) -> str:
    """Lower-case only the first character: ``UserService`` -> ``userService``."""
    return name[:1].lower() + name[1:]
