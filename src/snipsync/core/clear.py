"""Removal of spliced content from placeholder regions."""

from typing import List, Sequence, Tuple

from .markers import MarkerGrammar


def clear_placeholders(lines: Sequence[str], grammar: MarkerGrammar) -> Tuple[str, ...]:
    """Drop every line between placeholder start and end markers.

    Marker lines are always kept. A start marker with no end marker anywhere
    after it does not start omitting, so an unterminated placeholder cannot
    swallow the rest of the file. Clearing a cleared file changes nothing.
    """
    last_end = -1
    for index, line in enumerate(lines):
        if grammar.is_placeholder_end(line):
            last_end = index

    kept: List[str] = []
    omit = False
    for index, line in enumerate(lines):
        is_start = grammar.is_placeholder_start(line)
        if grammar.is_placeholder_end(line):
            omit = False
        if not omit or is_start:
            kept.append(line)
        if is_start and index < last_end:
            omit = True
    return tuple(kept)
