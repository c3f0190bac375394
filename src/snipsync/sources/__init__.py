"""Source acquisition for snipsync origins."""

from .github import GitHubSourceDownloader
from .local import find_local_files
from .provider import SourceProvider
from .token_manager import GitHubTokenManager

__all__ = [
    'GitHubSourceDownloader',
    'GitHubTokenManager',
    'SourceProvider',
    'find_local_files',
]
