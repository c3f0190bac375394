"""Models for snipsync data structures."""

from .snippet import (
    DEFAULT_REF,
    Placeholder,
    Snippet,
    SnippetOrigin,
    SourceFile,
    TargetFile,
    extension_of,
)

__all__ = [
    "DEFAULT_REF",
    "Placeholder",
    "Snippet",
    "SnippetOrigin",
    "SourceFile",
    "TargetFile",
    "extension_of",
]
