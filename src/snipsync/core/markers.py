"""Marker literals and parsing of marker lines.

Source files mark snippets with::

    // @@@SNIPSTART hello-world
    ...
    // @@@SNIPEND

Target documents mark placeholders with::

    <!--SNIPSTART hello-world {"select": ["1", "5-6"]} -->
    <!--SNIPEND-->

Matching is containment on the line, never full-line equality, so markers can
live inside any comment syntax.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .errors import InvalidInlineConfig, MalformedMarker


DEFAULT_SNIPPET_START = "@@@SNIPSTART"
DEFAULT_SNIPPET_END = "@@@SNIPEND"
DEFAULT_PLACEHOLDER_START = "<!--SNIPSTART"
DEFAULT_PLACEHOLDER_END = "<!--SNIPEND"
DEFAULT_PLACEHOLDER_START_CLOSE = "-->"
DEFAULT_CODE_FENCE = "```"


@dataclass(frozen=True)
class MarkerGrammar:
    """The marker literals used for one run."""
    snippet_start: str = DEFAULT_SNIPPET_START
    snippet_end: str = DEFAULT_SNIPPET_END
    placeholder_start: str = DEFAULT_PLACEHOLDER_START
    placeholder_end: str = DEFAULT_PLACEHOLDER_END
    placeholder_start_close: Optional[str] = DEFAULT_PLACEHOLDER_START_CLOSE
    code_fence: str = DEFAULT_CODE_FENCE

    def __post_init__(self):
        for name in ("snippet_start", "snippet_end", "placeholder_start", "placeholder_end", "code_fence"):
            if not getattr(self, name):
                raise ValueError(f"Marker literal '{name}' cannot be empty")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "MarkerGrammar":
        """Build a grammar from the ``markers`` config section, keeping defaults for absent keys."""
        if not data:
            return cls()
        known = {
            "snippet_start", "snippet_end", "placeholder_start", "placeholder_end",
            "placeholder_start_close", "code_fence",
        }
        values = {key: str(value) if value is not None else None for key, value in data.items() if key in known}
        return cls(**values)

    def is_snippet_start(self, line: str) -> bool:
        return self.snippet_start in line

    def is_snippet_end(self, line: str) -> bool:
        return self.snippet_end in line

    def is_placeholder_start(self, line: str) -> bool:
        return self.placeholder_start in line

    def is_placeholder_end(self, line: str) -> bool:
        return self.placeholder_end in line

    def is_code_fence(self, line: str) -> bool:
        return line.lstrip().startswith(self.code_fence)

    def parse_snippet_start(self, line: str) -> str:
        """Return the snippet id following the snippet-start literal.

        Raises:
            MalformedMarker: If the literal is not followed by whitespace and an identifier.
        """
        idx = line.find(self.snippet_start)
        if idx == -1:
            raise ValueError(f"Line does not contain '{self.snippet_start}'")
        rest = line[idx + len(self.snippet_start):]
        if not rest[:1].isspace():
            raise MalformedMarker(line, self.snippet_start)
        tokens = rest.split()
        if not tokens:
            raise MalformedMarker(line, self.snippet_start)
        return tokens[0]

    def parse_placeholder_start(self, line: str) -> Tuple[str, Optional[str]]:
        """Return ``(id, raw_json)`` from a placeholder-start line.

        ``raw_json`` is ``None`` when nothing follows the id. The close token
        may be glued to the id (``<!--SNIPSTART demo-->``).

        Raises:
            MalformedMarker: If no identifier follows the literal.
        """
        idx = line.find(self.placeholder_start)
        if idx == -1:
            raise ValueError(f"Line does not contain '{self.placeholder_start}'")
        rest = line[idx + len(self.placeholder_start):]
        if self.placeholder_start_close:
            close_idx = rest.rfind(self.placeholder_start_close)
            if close_idx != -1:
                rest = rest[:close_idx]
        parts = rest.strip().split(None, 1)
        if not parts:
            raise MalformedMarker(line, self.placeholder_start)
        snippet_id = parts[0]
        raw_config = parts[1].strip() if len(parts) > 1 else None
        return snippet_id, raw_config or None

    def fence_open(self, extension: str, highlights: Optional[str] = None) -> str:
        line = f"{self.code_fence}{extension}"
        if highlights:
            line += f" {{{highlights}}}"
        return line

    def fence_close(self) -> str:
        return self.code_fence


def parse_inline_config(raw: str) -> Dict[str, Any]:
    """Parse the JSON object trailing a placeholder id.

    Raises:
        InvalidInlineConfig: If ``raw`` is not valid JSON or not a JSON object.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidInlineConfig(raw, str(e))
    if not isinstance(data, dict):
        raise InvalidInlineConfig(raw, f"expected a JSON object, got {type(data).__name__}")
    return data
