"""Target file discovery, reading and writing."""

from pathlib import Path
from typing import Iterable, List, Optional

from .models.snippet import TargetFile
from .utils.helpers import join_lines, read_text_lines, to_posix


def enumerate_targets(roots: Iterable[Path], allowed_extensions: Optional[Iterable[str]] = None) -> List[TargetFile]:
    """Find every target file under the given roots.

    Args:
        roots: Target directories (or single files).
        allowed_extensions: Suffixes such as ``.md``; empty or None allows every file.

    Returns:
        List[TargetFile]: Descriptors without lines, sorted per root.

    Raises:
        FileNotFoundError: If a root does not exist.
    """
    allowed = {ext.lower() for ext in (allowed_extensions or []) if ext}
    targets: List[TargetFile] = []
    seen = set()

    for root in roots:
        root = Path(root)
        if not root.exists():
            raise FileNotFoundError(f"Target path not found: {root}")

        if root.is_file():
            candidates = [root]
            base = root.parent
        else:
            candidates = sorted(p for p in root.rglob("*") if p.is_file())
            base = root

        for file_path in candidates:
            if allowed and file_path.suffix.lower() not in allowed:
                continue
            resolved = file_path.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            targets.append(TargetFile(filename=to_posix(file_path.relative_to(base)), path=file_path))

    return targets


def read_target(target: TargetFile) -> Optional[TargetFile]:
    """Load a target's lines.

    Returns:
        Optional[TargetFile]: The loaded file, or None when it is not UTF-8 text.

    Raises:
        OSError: If the file cannot be read.
    """
    lines = read_text_lines(target.path)
    if lines is None:
        return None
    return target.with_lines(lines)


def write_target(target: TargetFile) -> None:
    """Write a target's lines back to its path.

    Raises:
        OSError: If the file cannot be written.
    """
    target.path.write_text(join_lines(target.lines), encoding="utf-8")
