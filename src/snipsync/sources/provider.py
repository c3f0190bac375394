"""Source provider: turns a configured origin into source files."""

from pathlib import Path
from typing import List, Optional

from ..config import OriginKind, OriginSpec
from ..models.snippet import SourceFile
from .github import GitHubSourceDownloader
from .local import find_local_files


class SourceProvider:
    """Dispatches each origin to the matching acquisition method."""

    def __init__(self, root_dir: Path, extraction_dir: Path,
                 downloader: Optional[GitHubSourceDownloader] = None):
        """Initialize the provider.

        Args:
            root_dir: Directory local patterns are resolved against.
            extraction_dir: Working directory for downloaded archives.
            downloader: GitHub downloader; created lazily when a remote origin needs it.
        """
        self.root_dir = root_dir
        self.extraction_dir = extraction_dir
        self._downloader = downloader

    @property
    def downloader(self) -> GitHubSourceDownloader:
        if self._downloader is None:
            self._downloader = GitHubSourceDownloader()
        return self._downloader

    def fetch(self, origin: OriginSpec) -> List[SourceFile]:
        """Get all source files of an origin.

        Raises:
            SourceFetchError: If a remote origin cannot be downloaded.
            OSError: If local files cannot be read.
        """
        kind = origin.kind
        if kind == OriginKind.LOCAL:
            return find_local_files(origin, self.root_dir)
        if kind == OriginKind.REMOTE_FILES:
            return self.downloader.fetch_files(origin)
        return self.downloader.fetch_repository(origin, self.extraction_dir)
