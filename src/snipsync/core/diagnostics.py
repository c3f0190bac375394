"""Run context sink for non-fatal conditions found while scanning files."""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class DiagnosticKind(Enum):
    """Kinds of recoverable conditions surfaced as warnings."""
    MALFORMED_MARKER = "malformed_marker"
    INVALID_INLINE_CONFIG = "invalid_inline_config"
    UNRESOLVED_SNIPPET_REFERENCE = "unresolved_snippet_reference"
    EMPTY_PATTERN_MATCH = "empty_pattern_match"
    DUPLICATE_SNIPPET_ID = "duplicate_snippet_id"
    ABANDONED_SNIPPET = "abandoned_snippet"
    UNTERMINATED_SNIPPET = "unterminated_snippet"
    NESTED_PLACEHOLDER = "nested_placeholder"


@dataclass(frozen=True)
class Diagnostic:
    """A single recoverable condition and where it happened."""
    kind: DiagnosticKind
    message: str
    location: Optional[str] = None  # "path:line" when known

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class Diagnostics:
    """Collects diagnostics for one run.

    Extraction and splicing may run on worker threads, so appends are guarded
    by a lock. Reads return copies.
    """

    def __init__(self):
        self._items: List[Diagnostic] = []
        self._lock = threading.Lock()

    def add(self, kind: DiagnosticKind, message: str, location: Optional[str] = None) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, message=message, location=location)
        with self._lock:
            self._items.append(diagnostic)
        return diagnostic

    @property
    def items(self) -> List[Diagnostic]:
        with self._lock:
            return list(self._items)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.items if d.kind == kind]

    def counts(self) -> Dict[DiagnosticKind, int]:
        """Get the number of diagnostics recorded per kind."""
        result: Dict[DiagnosticKind, int] = {}
        for diagnostic in self.items:
            result[diagnostic.kind] = result.get(diagnostic.kind, 0) + 1
        return result

    @property
    def total(self) -> int:
        with self._lock:
            return len(self._items)


def location(path: Optional[str], line_number: Optional[int] = None) -> Optional[str]:
    """Format a diagnostic location as ``path:line``."""
    if not path:
        return None
    if line_number is None:
        return path
    return f"{path}:{line_number}"
