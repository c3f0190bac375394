"""Sync and clear orchestration.

``Sync.run`` downloads every origin, extracts snippets, splices them into the
target files and writes changed files back. ``Sync.clear`` strips placeholder
bodies from the target files.
"""

import shutil
import tempfile
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from .config import SyncConfig
from .core.clear import clear_placeholders
from .core.dedent import dedent_placeholder_bodies
from .core.diagnostics import Diagnostics
from .core.extractor import extract_snippets, merge_snippets
from .core.splicer import splice_target
from .models.snippet import Snippet, SourceFile, TargetFile
from .sources.github import GitHubSourceDownloader
from .sources.provider import SourceProvider
from .sources.token_manager import GitHubTokenManager
from .targets import enumerate_targets, read_target, write_target
from .utils.console import _create_progress


@dataclass
class SyncResult:
    """Summary of one sync or clear run."""
    origins: int = 0
    source_files: int = 0
    snippets: int = 0
    targets_scanned: int = 0
    changed_files: List[str] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def targets_changed(self) -> int:
        return len(self.changed_files)

    @property
    def has_warnings(self) -> bool:
        return self.diagnostics.total > 0


class Sync:
    """Runs the sync and clear operations for one configuration."""

    def __init__(self, config: SyncConfig, diagnostics: Optional[Diagnostics] = None,
                 provider: Optional[SourceProvider] = None, show_progress: bool = True):
        """Initialize the run.

        Args:
            config: Loaded configuration.
            diagnostics: Sink for recoverable conditions; a fresh one when omitted.
            provider: Source provider; built from the configuration when omitted.
            show_progress: Whether to render progress bars.
        """
        self.config = config
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.show_progress = show_progress
        self._extraction_dir: Optional[Path] = None
        self._provider = provider

    @property
    def provider(self) -> SourceProvider:
        """Get the source provider, creating it and its extraction directory on first use."""
        if self._provider is None:
            self._extraction_dir = Path(tempfile.mkdtemp(prefix="snipsync-"))
            downloader = GitHubSourceDownloader(GitHubTokenManager(self.config.auth.token))
            self._provider = SourceProvider(self.config.root_dir, self._extraction_dir, downloader=downloader)
        return self._provider

    def run(self) -> SyncResult:
        """Extract snippets from every origin and splice them into the targets."""
        result = SyncResult(origins=len(self.config.origins), diagnostics=self.diagnostics)
        try:
            sources = self.fetch_sources()
            result.source_files = sum(len(files) for files in sources)

            snippets = self.extract(sources)
            result.snippets = len(snippets)

            targets = enumerate_targets(self.config.target_paths(), self.config.features.allowed_target_extensions)
            result.targets_scanned = len(targets)

            result.changed_files = self._process_targets(
                targets, lambda target: self.splice_file(target, snippets), "splicing snippets"
            )
        finally:
            self.cleanup()
        return result

    def clear(self) -> SyncResult:
        """Remove spliced content from every target placeholder."""
        result = SyncResult(origins=len(self.config.origins), diagnostics=self.diagnostics)
        try:
            targets = enumerate_targets(self.config.target_paths(), self.config.features.allowed_target_extensions)
            result.targets_scanned = len(targets)
            result.changed_files = self._process_targets(targets, self.clear_file, "clearing snippets")
        finally:
            self.cleanup()
        return result

    def fetch_sources(self) -> List[List[SourceFile]]:
        """Fetch source files for every origin, one task per origin, in configuration order."""
        origins = self.config.origins
        if not origins:
            return []
        provider = self.provider
        with self._step("downloading origins", len(origins)) as advance:
            def fetch(origin):
                files = provider.fetch(origin)
                advance()
                return files

            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                return list(executor.map(fetch, origins))

    def extract(self, sources: Sequence[List[SourceFile]]) -> Dict[str, Snippet]:
        """Extract snippets from every source file and merge them by id."""
        files = [source for origin_files in sources for source in origin_files]
        if not files:
            return {}
        grammar = self.config.markers
        with self._step("extracting snippets", len(files)) as advance:
            def extract(source):
                snippets = extract_snippets(source, grammar, self.diagnostics)
                advance()
                return snippets

            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                batches = list(executor.map(extract, files))
        return merge_snippets(batches, self.diagnostics)

    def splice_file(self, target: TargetFile, snippets: Dict[str, Snippet]) -> TargetFile:
        """Splice snippets into one loaded target, then dedent placeholder bodies when enabled."""
        lines = splice_target(
            target.lines, snippets, self.config.features, self.config.markers, self.diagnostics, target.filename
        )
        if self.config.features.enable_code_dedenting:
            lines = dedent_placeholder_bodies(lines, self.config.markers)
        return target.with_lines(lines)

    def clear_file(self, target: TargetFile) -> TargetFile:
        """Strip placeholder bodies from one loaded target."""
        return target.with_lines(clear_placeholders(target.lines, self.config.markers))

    def cleanup(self) -> None:
        """Delete downloaded archives and extracted repositories."""
        if self._extraction_dir is not None and self._extraction_dir.exists():
            shutil.rmtree(self._extraction_dir, ignore_errors=True)

    def _process_targets(self, targets: List[TargetFile],
                         transform: Callable[[TargetFile], TargetFile], description: str) -> List[str]:
        """Read, transform and write back each target; return the names of changed files."""
        if not targets:
            return []
        with self._step(description, len(targets)) as advance:
            def process(target):
                loaded = read_target(target)
                changed = False
                if loaded is not None:
                    updated = transform(loaded)
                    if updated.lines != loaded.lines:
                        write_target(updated)
                        changed = True
                advance()
                return target.filename if changed else None

            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                names = list(executor.map(process, targets))
        return [name for name in names if name is not None]

    @contextmanager
    def _step(self, description: str, total: int) -> Iterator[Callable[[], None]]:
        if not self.show_progress:
            yield lambda: None
            return
        with _create_progress() as progress:
            task = progress.add_task(description, total=total)
            yield lambda: progress.advance(task)
