"""Marker scanning, extraction and splicing core."""

from .clear import clear_placeholders
from .dedent import dedent_lines, dedent_placeholder_bodies
from .diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from .errors import (
    ConfigError,
    InvalidInlineConfig,
    MalformedMarker,
    SnipsyncError,
    SourceFetchError,
)
from .extractor import extract_snippets, merge_snippets
from .formatter import ELLIPSIS_COMMENTS, ellipsis_comment, format_snippet, source_link
from .markers import MarkerGrammar, parse_inline_config
from .overlay import EffectiveConfig, Features, LineSelection, overlay
from .splicer import find_placeholders, splice_region, splice_target

__all__ = [
    # Markers
    'MarkerGrammar',
    'parse_inline_config',

    # Extraction
    'extract_snippets',
    'merge_snippets',

    # Configuration overlay
    'EffectiveConfig',
    'Features',
    'LineSelection',
    'overlay',

    # Rendering and splicing
    'ELLIPSIS_COMMENTS',
    'ellipsis_comment',
    'format_snippet',
    'source_link',
    'find_placeholders',
    'splice_region',
    'splice_target',
    'clear_placeholders',
    'dedent_lines',
    'dedent_placeholder_bodies',

    # Errors and diagnostics
    'SnipsyncError',
    'MalformedMarker',
    'InvalidInlineConfig',
    'ConfigError',
    'SourceFetchError',
    'Diagnostic',
    'DiagnosticKind',
    'Diagnostics',
]
