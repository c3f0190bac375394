"""Rendering of a snippet into the lines spliced under a placeholder."""

import re
from typing import Dict, List, Optional

from ..models.snippet import Snippet
from .diagnostics import DiagnosticKind, Diagnostics
from .markers import MarkerGrammar
from .overlay import EffectiveConfig


DEFAULT_ELLIPSIS = "// ..."

# Comment used to mark elided code between discontinuous selections, per extension.
ELLIPSIS_COMMENTS: Dict[str, str] = {
    **{ext: "# ..." for ext in ("py", "rb", "sh", "bash", "zsh", "yaml", "yml", "toml", "pl", "r", "ps1", "dockerfile")},
    **{ext: "-- ..." for ext in ("sql", "lua", "hs")},
    **{ext: "<!-- ... -->" for ext in ("html", "xml", "md", "mdx", "vue", "svelte")},
    **{ext: "; ..." for ext in ("clj", "lisp", "ini")},
    "css": "/* ... */",
    "tex": "% ...",
}


def ellipsis_comment(extension: str) -> str:
    """Get the elision comment for a file extension."""
    return ELLIPSIS_COMMENTS.get(extension.lower(), DEFAULT_ELLIPSIS)


def source_link(snippet: Snippet) -> Optional[str]:
    """Build the ``[path](url)`` line pointing at the snippet's source file.

    Returns None when the snippet's origin names no repository.
    """
    if not snippet.origin.has_repository():
        return None
    return f"[{snippet.origin.path}]({snippet.origin.to_github_url()})"


def format_snippet(snippet: Snippet, config: EffectiveConfig, grammar: MarkerGrammar,
                   diagnostics: Diagnostics, where: Optional[str] = None) -> List[str]:
    """Produce the lines that replace a placeholder body.

    Args:
        snippet: Snippet being rendered.
        config: Effective configuration for the placeholder.
        grammar: Marker literals (for the code fence).
        diagnostics: Sink for recoverable conditions.
        where: Location of the placeholder, used in diagnostics.

    Returns:
        List[str]: Link line, opening fence, body and closing fence, each when enabled.
    """
    lines: List[str] = []

    if config.enable_source_link:
        link = source_link(snippet)
        if link is not None:
            lines.append(link)

    if config.enable_code_block:
        lines.append(grammar.fence_open(snippet.extension, config.highlights))

    if config.select:
        lines.extend(select_lines(snippet, config))
    elif config.has_patterns:
        lines.extend(match_pattern(snippet, config, diagnostics, where))
    else:
        lines.extend(snippet.lines)

    if config.enable_code_block:
        lines.append(grammar.fence_close())

    return lines


def select_lines(snippet: Snippet, config: EffectiveConfig) -> List[str]:
    """Apply the ``select`` ranges, separating discontinuous ranges with an ellipsis comment."""
    result: List[str] = []
    ellipsis = ellipsis_comment(snippet.extension)
    for selection in config.select or ():
        selected = snippet.lines[selection.start_index:selection.stop_index]
        if not selected:
            continue
        if selection.start_index != 0:
            result.append(ellipsis)
        result.extend(selected)
    return result


def match_pattern(snippet: Snippet, config: EffectiveConfig, diagnostics: Diagnostics,
                  where: Optional[str] = None) -> List[str]:
    """Return the first region spanning from ``start_pattern`` to ``end_pattern``."""
    try:
        pattern = re.compile(f"({config.start_pattern}[\\s\\S]*?{config.end_pattern})")
    except re.error as e:
        diagnostics.add(
            DiagnosticKind.INVALID_INLINE_CONFIG,
            f"Invalid pattern for snippet '{snippet.id}': {e}",
            where,
        )
        return []

    match = pattern.search("\n".join(snippet.lines))
    if match is None:
        diagnostics.add(
            DiagnosticKind.EMPTY_PATTERN_MATCH,
            f"Patterns {config.start_pattern!r}..{config.end_pattern!r} matched nothing in snippet '{snippet.id}'",
            where,
        )
        return []
    return match.group(1).split("\n")
