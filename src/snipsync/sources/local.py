"""Local glob source files."""

import glob
from pathlib import Path
from typing import List

from ..config import OriginSpec
from ..models.snippet import SnippetOrigin, SourceFile, extension_of
from ..utils.helpers import read_text_lines, to_posix


def find_local_files(origin: OriginSpec, root_dir: Path) -> List[SourceFile]:
    """Read every text file matching a local origin's glob pattern.

    ``**`` matches across directories. Paths are reported relative to
    ``root_dir`` so they can double as repository paths in source links.
    """
    pattern = Path(origin.pattern)
    if not pattern.is_absolute():
        pattern = root_dir / pattern

    source_files = []
    for match in sorted(glob.glob(str(pattern), recursive=True)):
        file_path = Path(match)
        if not file_path.is_file():
            continue
        lines = read_text_lines(file_path)
        if lines is None:
            continue
        try:
            relative = to_posix(file_path.resolve().relative_to(root_dir.resolve()))
        except ValueError:
            relative = to_posix(file_path)
        source_files.append(SourceFile(
            origin=SnippetOrigin(owner=origin.owner, repo=origin.repo, ref=origin.ref, path=relative),
            extension=extension_of(relative),
            lines=lines,
        ))
    return source_files
