"""
Pre-write snapshots and post-write verification.

Before any artifact is written the verification subset is copied into a
fresh temporary directory. Afterwards each file is diffed against its copy
and the added/replaced lines containing the new version are counted.
The snapshot directory is left in place for manual diffing.
"""

from __future__ import annotations

import difflib
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Union

from .run_summary import VerificationReport

Lines = Union[str, Sequence[str]]


def create_snapshot_dir(prefix: str = "verstamp-set-version-") -> Path:
    """Create a new, never auto-deleted, temporary directory."""
    return Path(tempfile.mkdtemp(prefix=prefix))


def save_files(files: Iterable[Path], root: Path, target_dir: Path) -> List[Path]:
    """Copy workspace-relative ``files`` under ``target_dir``, keeping their layout.

    Files that do not exist are skipped; the relative paths actually copied
    are returned.
    """
    copied: List[Path] = []
    for rel in files:
        source = Path(root) / rel
        if not source.is_file():
            continue
        destination = Path(target_dir) / rel
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
        copied.append(Path(rel))
    return copied


def _as_lines(content: Lines) -> List[str]:
    if isinstance(content, str):
        return content.splitlines()
    return list(content)


def changed_lines(before: Lines, after: Lines) -> Iterator[str]:
    """Lines of ``after`` that were inserted or replaced relative to ``before``."""
    old, new = _as_lines(before), _as_lines(after)
    matcher = difflib.SequenceMatcher(a=old, b=new, autojunk=False)
    for tag, _i1, _i2, j1, j2 in matcher.get_opcodes():
        if tag in ("replace", "insert"):
            yield from new[j1:j2]


def count_matching_changed_lines(before: Lines, after: Lines, needle: str) -> int:
    """Number of changed lines in ``after`` containing ``needle``."""
    return sum(1 for line in changed_lines(before, after) if needle in line)


def _read_text(path: Path) -> str | None:
    return path.read_text(encoding="utf-8") if path.is_file() else None


def verify_changes(
    snapshot_dir: Path,
    root: Path,
    files: Sequence[Path],
    needle: str,
) -> VerificationReport:
    """Compare each of ``files`` with its snapshot and count version hits.

    A file without a snapshot (it did not exist beforehand) or that is gone
    afterwards contributes zero matches.
    """
    per_file = {}
    for rel in files:
        before = _read_text(Path(snapshot_dir) / rel)
        after = _read_text(Path(root) / rel)
        if before is None or after is None:
            per_file[str(rel)] = 0
            continue
        per_file[str(rel)] = count_matching_changed_lines(before, after, needle)

    return VerificationReport(
        expected=len(files),
        matched=sum(per_file.values()),
        files=[str(rel) for rel in files],
        per_file=per_file,
        snapshot_dir=Path(snapshot_dir),
    )
