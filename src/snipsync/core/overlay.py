"""Per-placeholder configuration overlay.

The run's global ``Features`` are the defaults; a placeholder may override them
with the JSON object trailing its id::

    <!--SNIPSTART money-transfer {"enable_source_link": false, "select": ["1", "5-6"]} -->

A field present and non-null in the inline object wins, otherwise the default
is used. ``highlights`` and ``select`` only exist inline. Start/end patterns
apply only when the placeholder supplies both. ``enable_code_dedenting`` and
``allowed_target_extensions`` act on whole files, so they always carry the
global values and are not read from the inline object.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from .errors import InvalidInlineConfig


# Inline keys accepted for each field; camelCase spellings are the historical names.
INLINE_KEYS: Dict[str, Tuple[str, ...]] = {
    "enable_source_link": ("enable_source_link",),
    "enable_code_block": ("enable_code_block",),
    "highlights": ("highlights", "highlightedLines"),
    "select": ("select", "selectedLines"),
    "start_pattern": ("start_pattern", "startPattern"),
    "end_pattern": ("end_pattern", "endPattern"),
}


@dataclass
class Features:
    """Global feature defaults loaded from the ``features`` config section."""
    enable_source_link: bool = True
    enable_code_block: bool = True
    enable_code_dedenting: bool = False
    allowed_target_extensions: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class LineSelection:
    """An inclusive, 1-based line range taken from a ``select`` entry."""
    first: int
    last: int

    @classmethod
    def parse(cls, entry: Any) -> "LineSelection":
        """Parse ``3``, ``"3"`` or ``"3-7"``.

        Raises:
            InvalidInlineConfig: If the entry is not a positive line number or range.
        """
        if isinstance(entry, bool):
            raise InvalidInlineConfig(str(entry), "selection entries must be line numbers or ranges")
        if isinstance(entry, int):
            first = last = entry
        elif isinstance(entry, str):
            text = entry.strip()
            try:
                if "-" in text:
                    start_text, end_text = text.split("-", 1)
                    first, last = int(start_text), int(end_text)
                else:
                    first = last = int(text)
            except ValueError:
                raise InvalidInlineConfig(entry, "selection entries must look like '3' or '3-7'")
        else:
            raise InvalidInlineConfig(str(entry), "selection entries must be line numbers or ranges")

        if first < 1 or last < first:
            raise InvalidInlineConfig(str(entry), "selection ranges must be 1-based and ascending")
        return cls(first=first, last=last)

    @property
    def start_index(self) -> int:
        """0-based index of the first selected line."""
        return self.first - 1

    @property
    def stop_index(self) -> int:
        """0-based exclusive stop index."""
        return self.last


@dataclass(frozen=True)
class EffectiveConfig:
    """The configuration applied when rendering one placeholder."""
    enable_source_link: bool = True
    enable_code_block: bool = True
    highlights: Optional[str] = None
    select: Optional[Tuple[LineSelection, ...]] = None
    start_pattern: Optional[str] = None
    end_pattern: Optional[str] = None
    enable_code_dedenting: bool = False
    allowed_target_extensions: FrozenSet[str] = frozenset()

    @property
    def has_patterns(self) -> bool:
        return bool(self.start_pattern) and bool(self.end_pattern)


def overlay(defaults: Features, inline: Optional[Dict[str, Any]] = None) -> EffectiveConfig:
    """Overlay a placeholder's inline configuration onto the global defaults.

    Args:
        defaults: Global features for the run.
        inline: Parsed inline JSON object, or None when the placeholder has none.

    Returns:
        EffectiveConfig: Configuration for this placeholder.

    Raises:
        InvalidInlineConfig: If a recognised inline field holds a value of the wrong shape.
    """
    inline = inline or {}

    def pick(name: str) -> Any:
        for key in INLINE_KEYS[name]:
            if inline.get(key) is not None:
                return inline[key]
        return None

    def flag(name: str, default: bool) -> bool:
        value = pick(name)
        if value is None:
            return bool(default)
        if not isinstance(value, bool):
            raise InvalidInlineConfig(str(value), f"'{name}' must be true or false")
        return value

    start_pattern = pick("start_pattern")
    end_pattern = pick("end_pattern")
    if start_pattern is not None and not isinstance(start_pattern, str):
        raise InvalidInlineConfig(str(start_pattern), "'start_pattern' must be a string")
    if end_pattern is not None and not isinstance(end_pattern, str):
        raise InvalidInlineConfig(str(end_pattern), "'end_pattern' must be a string")
    if not (start_pattern and end_pattern):
        start_pattern = end_pattern = None

    return EffectiveConfig(
        enable_source_link=flag("enable_source_link", defaults.enable_source_link),
        enable_code_block=flag("enable_code_block", defaults.enable_code_block),
        highlights=_parse_highlights(pick("highlights")),
        select=_parse_select(pick("select")),
        start_pattern=start_pattern,
        end_pattern=end_pattern,
        enable_code_dedenting=bool(defaults.enable_code_dedenting),
        allowed_target_extensions=frozenset(defaults.allowed_target_extensions or []),
    )


def _parse_highlights(value: Any) -> Optional[str]:
    if value is None or value == "" or value == []:
        return None
    if isinstance(value, bool):
        raise InvalidInlineConfig(str(value), "'highlights' must be a string, number or list")
    if isinstance(value, (str, int)):
        return str(value).strip() or None
    if isinstance(value, list):
        return ",".join(str(item).strip() for item in value)
    raise InvalidInlineConfig(str(value), "'highlights' must be a string, number or list")


def _parse_select(value: Any) -> Optional[Tuple[LineSelection, ...]]:
    if value is None:
        return None
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        value = [value]
    if not isinstance(value, list):
        raise InvalidInlineConfig(str(value), "'select' must be a list of line numbers or ranges")
    if not value:
        return None
    return tuple(LineSelection.parse(entry) for entry in value)
