"""Version management for snipsync."""

import re
from importlib import metadata
from pathlib import Path

# Build-time version constant (injected by release builds)
__BUILD_VERSION__ = None

PACKAGE_NAME = "snipsync"


def get_version() -> str:
    """
    Get the current version.

    Tries the build-time constant, then installed package metadata, then the
    pyproject.toml of a source checkout.

    Returns:
        str: Version string
    """
    if __BUILD_VERSION__:
        return __BUILD_VERSION__

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        pass

    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    try:
        content = pyproject_path.read_text(encoding='utf-8')
    except OSError:
        return "unknown"

    # Look for version = "x.y.z" pattern (including PEP 440 prereleases)
    match = re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE)
    if match and re.match(r'^\d+\.\d+\.\d+(a\d+|b\d+|rc\d+)?$', match.group(1)):
        return match.group(1)
    return "unknown"


__version__ = get_version()
