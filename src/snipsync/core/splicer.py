"""Placeholder location and snippet splicing for target files.

Positions in this module are 1-based line numbers of the marker lines, as a
reader of the file would count them. Storage is the usual 0-based sequence;
``splice_region`` is the single place where the two meet.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..models.snippet import Placeholder, Snippet
from .diagnostics import DiagnosticKind, Diagnostics, location
from .errors import InvalidInlineConfig, MalformedMarker
from .formatter import format_snippet
from .markers import MarkerGrammar, parse_inline_config
from .overlay import Features, overlay


def find_placeholders(lines: Sequence[str], grammar: MarkerGrammar, diagnostics: Diagnostics,
                      filename: Optional[str] = None) -> List[Placeholder]:
    """Locate every closed placeholder region in ``lines``.

    An end marker closes the most recently opened start. A start met while a
    region is still open discards the open one, which is then left untouched.
    End markers with no open region are ignored.
    """
    placeholders: List[Placeholder] = []
    looking_for_end = False
    open_id: Optional[str] = None
    open_start = 0
    open_raw: Optional[str] = None
    open_inline: Optional[Dict] = None

    for line_number, line in enumerate(lines, start=1):
        if grammar.is_placeholder_start(line):
            try:
                snippet_id, raw_config = grammar.parse_placeholder_start(line)
            except MalformedMarker as e:
                diagnostics.add(DiagnosticKind.MALFORMED_MARKER, str(e), location(filename, line_number))
                continue

            if looking_for_end:
                diagnostics.add(
                    DiagnosticKind.NESTED_PLACEHOLDER,
                    f"Placeholder '{open_id}' opened at line {open_start} is not closed before "
                    f"'{snippet_id}'; leaving it untouched",
                    location(filename, line_number),
                )

            inline = None
            if raw_config is not None:
                try:
                    inline = parse_inline_config(raw_config)
                except InvalidInlineConfig as e:
                    diagnostics.add(
                        DiagnosticKind.INVALID_INLINE_CONFIG,
                        f"{e}; using default configuration for '{snippet_id}'",
                        location(filename, line_number),
                    )

            looking_for_end = True
            open_id = snippet_id
            open_start = line_number
            open_raw = raw_config
            open_inline = inline
            continue

        if looking_for_end and grammar.is_placeholder_end(line):
            placeholders.append(Placeholder(
                id=open_id,
                start_line_index=open_start,
                end_line_index=line_number,
                inline_config=open_inline,
                raw_config=open_raw,
            ))
            looking_for_end = False

    return placeholders


def splice_region(lines: Sequence[str], start: int, end: int, body: Sequence[str]) -> Tuple[str, ...]:
    """Replace the lines strictly between two marker lines.

    Args:
        lines: Current file lines.
        start: 1-based position of the start marker line.
        end: 1-based position of the end marker line.
        body: Replacement lines.

    Returns:
        Tuple[str, ...]: ``lines[..start] + body + lines[end..]``, markers kept.
    """
    if not 1 <= start < end <= len(lines):
        raise ValueError(f"Invalid splice window {start}..{end} for {len(lines)} lines")
    head = tuple(lines[:start])
    tail = tuple(lines[end - 1:])
    return head + tuple(body) + tail


def splice_target(lines: Sequence[str], snippets: Mapping[str, Snippet], defaults: Features,
                  grammar: MarkerGrammar, diagnostics: Diagnostics,
                  filename: Optional[str] = None) -> Tuple[str, ...]:
    """Render every resolvable placeholder in a target file.

    Placeholders whose id has no snippet are left byte-for-byte as they are.
    Running this on its own output yields the same lines.

    Args:
        lines: Target file lines.
        snippets: All extracted snippets keyed by id.
        defaults: Global feature defaults.
        grammar: Marker literals for this run.
        diagnostics: Sink for recoverable conditions.
        filename: Name used in diagnostics.

    Returns:
        Tuple[str, ...]: The new file lines.
    """
    result = tuple(lines)
    placeholders = find_placeholders(result, grammar, diagnostics, filename)

    # Later regions first so earlier positions stay valid
    for placeholder in reversed(placeholders):
        where = location(filename, placeholder.start_line_index)
        snippet = snippets.get(placeholder.id)
        if snippet is None:
            diagnostics.add(
                DiagnosticKind.UNRESOLVED_SNIPPET_REFERENCE,
                f"No snippet with id '{placeholder.id}'",
                where,
            )
            continue

        try:
            config = overlay(defaults, placeholder.inline_config)
        except InvalidInlineConfig as e:
            diagnostics.add(
                DiagnosticKind.INVALID_INLINE_CONFIG,
                f"{e}; using default configuration for '{placeholder.id}'",
                where,
            )
            config = overlay(defaults)

        body = format_snippet(snippet, config, grammar, diagnostics, where)
        result = splice_region(result, placeholder.start_line_index, placeholder.end_line_index, body)

    return result
