"""Helper utility functions for snipsync."""

from pathlib import Path
from typing import Iterable, List, Optional, Tuple


def split_lines(text: str) -> List[str]:
    """Split file text into lines.

    A trailing newline does not produce an extra empty line and ``\\r\\n``
    endings are read as plain line breaks.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def join_lines(lines: Iterable[str]) -> str:
    """Serialize lines with ``\\n`` separators and a single trailing newline."""
    lines = list(lines)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def read_text_lines(path: Path) -> Optional[Tuple[str, ...]]:
    """Read a UTF-8 text file as lines.

    Returns:
        Optional[Tuple[str, ...]]: The lines, or None when the file is not UTF-8 text.

    Raises:
        OSError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return None
    if "\x00" in text:
        return None
    return tuple(split_lines(text))


def to_posix(path: Path) -> str:
    """Render a relative path with forward slashes and no leading ``./``."""
    text = path.as_posix()
    while text.startswith("./"):
        text = text[2:]
    return text
