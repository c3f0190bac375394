"""Snippet, placeholder and file data models."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple


DEFAULT_REF = "master"
GITHUB_ROOT = "https://github.com"


@dataclass(frozen=True)
class SnippetOrigin:
    """Where a snippet's source file came from."""
    owner: Optional[str] = None
    repo: Optional[str] = None
    ref: Optional[str] = None
    path: str = ""  # Relative to the repository root, "/"-separated

    @property
    def resolved_ref(self) -> str:
        """Get the ref, falling back to the default branch name."""
        return self.ref or DEFAULT_REF

    def has_repository(self) -> bool:
        return bool(self.owner and self.repo)

    def to_github_url(self) -> str:
        """Build the blob URL of the source file."""
        parts = [GITHUB_ROOT, self.owner, self.repo, "blob", self.resolved_ref]
        if self.path:
            parts.append(self.path)
        return "/".join(parts)

    def __str__(self) -> str:
        if self.has_repository():
            return f"{self.owner}/{self.repo}@{self.resolved_ref}:{self.path}"
        return self.path


@dataclass(frozen=True)
class SourceFile:
    """One source file handed to the extractor by a source provider."""
    origin: SnippetOrigin
    extension: str
    lines: Tuple[str, ...]

    @property
    def relative_path(self) -> str:
        return self.origin.path


@dataclass(frozen=True)
class Snippet:
    """A named region captured between snippet-start and snippet-end markers."""
    id: str
    extension: str
    origin: SnippetOrigin
    lines: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Placeholder:
    """A placeholder region located in a target file.

    Line indexes are 1-based positions of the marker lines themselves.
    """
    id: str
    start_line_index: int
    end_line_index: int
    inline_config: Optional[Dict[str, Any]] = None
    raw_config: Optional[str] = None

    @property
    def body_length(self) -> int:
        """Number of lines currently between the two markers."""
        return self.end_line_index - self.start_line_index - 1


@dataclass(frozen=True)
class TargetFile:
    """A target document as an immutable line sequence."""
    filename: str  # Relative to the target root it was found under
    path: Path
    lines: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def extension(self) -> str:
        return self.path.suffix

    def with_lines(self, lines: Sequence[str]) -> "TargetFile":
        """Return a copy of this file holding ``lines``."""
        return replace(self, lines=tuple(lines))


def extension_of(path: str) -> str:
    """Get the file-type tag for a path: the suffix without its dot."""
    return Path(path).suffix.lstrip(".")
