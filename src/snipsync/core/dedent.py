"""File-level dedenting of placeholder bodies, run right before a target is written."""

import textwrap
from typing import List, Sequence

from .markers import MarkerGrammar


def dedent_lines(lines: Sequence[str], grammar: MarkerGrammar) -> List[str]:
    """Strip common leading whitespace from each contiguous block of ``lines``.

    Blocks are delimited by lines carrying a placeholder marker or a code
    fence; the delimiter lines themselves are kept as they are. Blank lines do
    not count towards the common indentation.
    """
    result: List[str] = []
    block: List[str] = []

    def flush():
        if block:
            result.extend(textwrap.dedent("\n".join(block)).split("\n"))
            block.clear()

    for line in lines:
        if (grammar.is_placeholder_start(line) or grammar.is_placeholder_end(line)
                or grammar.is_code_fence(line)):
            flush()
            result.append(line)
        else:
            block.append(line)
    flush()
    return result


def dedent_placeholder_bodies(lines: Sequence[str], grammar: MarkerGrammar) -> List[str]:
    """Dedent the lines between each placeholder's start and end markers.

    Everything outside closed placeholder regions, the marker lines included,
    is returned unchanged. A region left open by a nested start or by the end
    of the file is not dedented.
    """
    result: List[str] = []
    body: List[str] = []
    inside = False

    for line in lines:
        if grammar.is_placeholder_start(line):
            result.extend(body)
            body = []
            result.append(line)
            inside = True
        elif inside and grammar.is_placeholder_end(line):
            result.extend(dedent_lines(body, grammar))
            body = []
            result.append(line)
            inside = False
        elif inside:
            body.append(line)
        else:
            result.append(line)

    result.extend(body)
    return result
