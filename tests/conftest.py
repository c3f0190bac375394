from pathlib import Path
from typing import Optional, Sequence

import pytest

from snipsync.core.diagnostics import Diagnostics
from snipsync.core.markers import MarkerGrammar
from snipsync.core.overlay import Features
from snipsync.models.snippet import Snippet, SnippetOrigin, SourceFile


@pytest.fixture
def grammar() -> MarkerGrammar:
    return MarkerGrammar()


@pytest.fixture
def diagnostics() -> Diagnostics:
    return Diagnostics()


@pytest.fixture
def features() -> Features:
    return Features()


def make_origin(path: str = "hello-world/src/activities.ts", owner: Optional[str] = "temporalio",
                repo: Optional[str] = "samples-typescript", ref: Optional[str] = None) -> SnippetOrigin:
    return SnippetOrigin(owner=owner, repo=repo, ref=ref, path=path)


def make_snippet(snippet_id: str, lines: Sequence[str], extension: str = "ts",
                 origin: Optional[SnippetOrigin] = None) -> Snippet:
    return Snippet(
        id=snippet_id,
        extension=extension,
        origin=origin or make_origin(),
        lines=tuple(lines),
    )


def make_source(lines: Sequence[str], path: str = "src/main.go", extension: str = "go") -> SourceFile:
    return SourceFile(origin=make_origin(path=path), extension=extension, lines=tuple(lines))


def write_config(directory: Path, content: str) -> Path:
    config_path = directory / "snipsync.config.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path
