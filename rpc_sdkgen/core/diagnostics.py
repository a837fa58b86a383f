"""
Structured diagnostics for non-fatal generation events.

Fallback types and skipped classes never abort a run, but each one is
recorded here and logged so that upstream parser defects stay visible.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)

MISSING_CLASS = "missing-class"
NO_METHODS = "no-methods"
FALLBACK_TYPE = "fallback-type"


@dataclass(frozen=True)
class Diagnostic:
    """A single non-fatal event observed while generating an SDK."""

    code: str
    message: str
    subject: Optional[str] = None

    def __str__(self) -> str:
        if self.subject:
            return f"[{self.code}] {self.subject}: {self.message}"
        return f"[{self.code}] {self.message}"


class DiagnosticLog:
    """Collects diagnostics for one generation call."""

    def __init__(self):
        self._items: List[Diagnostic] = []

    def report(self, code: str, message: str, subject: Optional[str] = None) -> Diagnostic:
        diagnostic = Diagnostic(code, message, subject)
        if diagnostic not in self._items:
            self._items.append(diagnostic)
            logger.warning("%s", diagnostic)
        return diagnostic

    def by_code(self, code: str) -> List[Diagnostic]:
        return [d for d in self._items if d.code == code]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
