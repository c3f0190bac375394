"""Exception types raised by the snipsync core and its collaborators."""


class SnipsyncError(Exception):
    """Base class for all snipsync errors."""


class MalformedMarker(SnipsyncError):
    """A marker literal was found but no identifier could be parsed from it."""

    def __init__(self, line: str, marker: str):
        self.line = line
        self.marker = marker
        super().__init__(f"Marker '{marker}' has no identifier: {line.strip()!r}")


class InvalidInlineConfig(SnipsyncError):
    """The JSON trailing a placeholder id is not a JSON object."""

    def __init__(self, raw: str, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"Invalid inline configuration {raw!r}: {reason}")


class ConfigError(SnipsyncError):
    """The snipsync configuration file is invalid."""


class SourceFetchError(SnipsyncError):
    """A source origin could not be downloaded or read."""
