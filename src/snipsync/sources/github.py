"""GitHub source downloader: repository zipballs and single files."""

import shutil
import threading
import zipfile
from pathlib import Path
from typing import List, Optional

import requests

from ..config import OriginSpec
from ..core.errors import SourceFetchError
from ..models.snippet import SnippetOrigin, SourceFile, extension_of
from ..utils.helpers import read_text_lines, split_lines, to_posix
from .token_manager import GitHubTokenManager, sanitize_error


GITHUB_API_URL = "https://api.github.com"
DOWNLOAD_CHUNK_SIZE = 8192
REQUEST_TIMEOUT = 60


class GitHubSourceDownloader:
    """Downloads source files for origins hosted on GitHub."""

    def __init__(self, token_manager: Optional[GitHubTokenManager] = None,
                 session: Optional[requests.Session] = None, api_url: str = GITHUB_API_URL):
        """Initialize the downloader.

        Args:
            token_manager: Token lookup; anonymous requests when it yields nothing.
            session: HTTP session shared by every call. When omitted each
                worker thread gets its own session.
            api_url: Base URL of the GitHub REST API.
        """
        self.token_manager = token_manager or GitHubTokenManager()
        self.api_url = api_url.rstrip("/")
        self._shared_session = self._prepare(session) if session is not None else None
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """Get the HTTP session for the calling thread."""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._prepare(requests.Session())
            self._local.session = session
        return session

    def _prepare(self, session: requests.Session) -> requests.Session:
        session.headers.update({"X-GitHub-Api-Version": "2022-11-28"})
        session.headers.update(self.token_manager.auth_headers())
        return session

    def _archive_url(self, origin: OriginSpec) -> str:
        url = f"{self.api_url}/repos/{origin.owner}/{origin.repo}/zipball"
        if origin.ref:
            url += f"/{origin.ref}"
        return url

    def download_archive(self, origin: OriginSpec, extraction_dir: Path) -> Path:
        """Download and extract a repository zipball.

        Args:
            origin: Repository origin.
            extraction_dir: Working directory for downloads.

        Returns:
            Path: Root directory of the extracted repository.

        Raises:
            SourceFetchError: If the download or extraction fails.
        """
        extraction_dir.mkdir(parents=True, exist_ok=True)
        zip_path = extraction_dir / f"{origin.owner}-{origin.repo}.zip"
        unzip_path = extraction_dir / f"{origin.owner}-{origin.repo}"
        url = self._archive_url(origin)

        try:
            with self.session.get(url, stream=True, timeout=REQUEST_TIMEOUT, allow_redirects=True) as response:
                if response.status_code != 200:
                    raise SourceFetchError(
                        f"GitHub returned {response.status_code} downloading {origin}. "
                        + _auth_hint(response.status_code, self.token_manager)
                    )
                with open(zip_path, 'wb') as f:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except requests.RequestException as e:
            if zip_path.exists():
                zip_path.unlink()
            raise SourceFetchError(f"Failed to download {origin}: {sanitize_error(str(e))}")

        try:
            if unzip_path.exists():
                shutil.rmtree(unzip_path)
            with zipfile.ZipFile(zip_path, 'r') as zip_ref:
                zip_ref.extractall(unzip_path)
        except zipfile.BadZipFile as e:
            raise SourceFetchError(f"Archive for {origin} is not a valid zip file: {e}")
        finally:
            if zip_path.exists():
                zip_path.unlink()

        # GitHub zipballs hold a single "owner-repo-sha/" directory
        extracted_items = list(unzip_path.iterdir())
        if len(extracted_items) == 1 and extracted_items[0].is_dir():
            return extracted_items[0]
        return unzip_path

    def fetch_repository(self, origin: OriginSpec, extraction_dir: Path) -> List[SourceFile]:
        """Download a whole repository and read every text file in it.

        Without a configured ref, source links point at the commit the
        zipball was built from.
        """
        repo_root = self.download_archive(origin, extraction_dir)
        ref = origin.ref or _archive_commit(repo_root, origin)
        source_files = []
        for file_path in sorted(p for p in repo_root.rglob("*") if p.is_file()):
            lines = read_text_lines(file_path)
            if lines is None:
                continue
            relative = to_posix(file_path.relative_to(repo_root))
            source_files.append(SourceFile(
                origin=SnippetOrigin(owner=origin.owner, repo=origin.repo, ref=ref, path=relative),
                extension=extension_of(relative),
                lines=lines,
            ))
        return source_files

    def fetch_file(self, origin: OriginSpec, path: str) -> SourceFile:
        """Fetch one file through the contents API.

        Raises:
            SourceFetchError: If the request fails or the file is not text.
        """
        url = f"{self.api_url}/repos/{origin.owner}/{origin.repo}/contents/{path}"
        params = {"ref": origin.ref} if origin.ref else None
        try:
            response = self.session.get(
                url,
                params=params,
                headers={"Accept": "application/vnd.github.raw"},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise SourceFetchError(f"Failed to fetch {path} from {origin}: {sanitize_error(str(e))}")

        if response.status_code != 200:
            raise SourceFetchError(
                f"GitHub returned {response.status_code} fetching {path} from {origin}. "
                + _auth_hint(response.status_code, self.token_manager)
            )
        try:
            text = response.content.decode("utf-8")
        except UnicodeDecodeError:
            raise SourceFetchError(f"{path} from {origin} is not UTF-8 text")

        return SourceFile(
            origin=SnippetOrigin(owner=origin.owner, repo=origin.repo, ref=origin.ref, path=path),
            extension=extension_of(path),
            lines=tuple(split_lines(text)),
        )

    def fetch_files(self, origin: OriginSpec) -> List[SourceFile]:
        return [self.fetch_file(origin, path) for path in origin.files]


def _auth_hint(status_code: int, token_manager: GitHubTokenManager) -> str:
    if status_code not in (401, 403, 404):
        return "Please check the origin's owner, repo and ref."
    if token_manager.get_token() is None:
        return ("This might be a private repository or an API rate limit. "
                "Set auth.token in the configuration or the GITHUB_TOKEN environment variable.")
    return "Please check your GitHub token permissions."


def _archive_commit(repo_root: Path, origin: OriginSpec) -> Optional[str]:
    """Get the commit sha from a zipball root folder named ``owner-repo-<sha>``."""
    prefix = f"{origin.owner}-{origin.repo}-".lower()
    name = repo_root.name
    if not name.lower().startswith(prefix):
        return None
    return name[len(prefix):] or None
