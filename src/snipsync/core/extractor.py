"""Extraction of snippet regions from source files."""

from typing import Dict, Iterable, List, Optional

from ..models.snippet import Snippet, SourceFile
from .diagnostics import DiagnosticKind, Diagnostics, location
from .errors import MalformedMarker
from .markers import MarkerGrammar


def extract_snippets(source: SourceFile, grammar: MarkerGrammar, diagnostics: Diagnostics) -> List[Snippet]:
    """Scan one source file and return its snippets in order of appearance.

    For each line, in this order: a snippet-end seals the open region, a line
    inside an open region is captured, a snippet-start opens a new region.
    Marker lines are therefore never part of a snippet body.

    Args:
        source: The source file to scan.
        grammar: Marker literals for this run.
        diagnostics: Sink for recoverable conditions.

    Returns:
        List[Snippet]: Sealed snippets. Regions still open at end of file are dropped.
    """
    snippets: List[Snippet] = []
    capturing = False
    current_id: Optional[str] = None
    current_lines: List[str] = []
    opened_at = 0

    for line_number, line in enumerate(source.lines, start=1):
        if grammar.is_snippet_end(line):
            if capturing:
                snippets.append(Snippet(
                    id=current_id,
                    extension=source.extension,
                    origin=source.origin,
                    lines=tuple(current_lines),
                ))
            capturing = False
            current_id = None
            current_lines = []

        if capturing:
            current_lines.append(line)

        if grammar.is_snippet_start(line):
            try:
                snippet_id = grammar.parse_snippet_start(line)
            except MalformedMarker as e:
                diagnostics.add(DiagnosticKind.MALFORMED_MARKER, str(e),
                                location(source.relative_path, line_number))
                continue

            if capturing:
                diagnostics.add(
                    DiagnosticKind.ABANDONED_SNIPPET,
                    f"Snippet '{current_id}' opened at line {opened_at} was never closed; "
                    f"discarded in favour of '{snippet_id}'",
                    location(source.relative_path, line_number),
                )
            capturing = True
            current_id = snippet_id
            current_lines = []
            opened_at = line_number

    if capturing:
        diagnostics.add(
            DiagnosticKind.UNTERMINATED_SNIPPET,
            f"Snippet '{current_id}' has no closing '{grammar.snippet_end}' marker",
            location(source.relative_path, opened_at),
        )

    return snippets


def merge_snippets(batches: Iterable[List[Snippet]], diagnostics: Diagnostics) -> Dict[str, Snippet]:
    """Merge per-file snippet lists into one mapping keyed by id.

    Batches are merged in the order given; on duplicate ids the later snippet
    wins and a diagnostic names both locations.
    """
    merged: Dict[str, Snippet] = {}
    for batch in batches:
        for snippet in batch:
            existing = merged.get(snippet.id)
            if existing is not None:
                diagnostics.add(
                    DiagnosticKind.DUPLICATE_SNIPPET_ID,
                    f"Snippet id '{snippet.id}' defined in both {existing.origin} and {snippet.origin}; "
                    f"using {snippet.origin}",
                )
            merged[snippet.id] = snippet
    return merged
