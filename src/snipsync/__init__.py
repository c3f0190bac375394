"""snipsync: keep documentation code samples in sync with their source repositories."""

from .version import get_version

__version__ = get_version()
