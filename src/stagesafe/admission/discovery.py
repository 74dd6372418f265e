"""Build candidate batches from files on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List

from stagesafe.admission.models import RawFile


def _iter_files(root: Path) -> Iterator[Path]:
    if root.is_file():
        yield root
        return
    for path in root.rglob("*"):
        if path.is_file():
            yield path


def discover(root: Path) -> List[RawFile]:
    """Return candidates for *root* without reading any content.

    Paths are POSIX-style and keep the picked directory's own name as the
    first segment (``project/src/app.py``), the same shape a folder picker
    reports. A single file is reported by its bare name.
    """
    root = root.expanduser().resolve()
    if not root.exists():
        return []

    candidates: List[RawFile] = []
    for path in _iter_files(root):
        try:
            size = path.stat().st_size
        except OSError:
            continue
        if path == root:
            relative = path.name
        else:
            relative = f"{root.name}/{path.relative_to(root).as_posix()}"
        candidates.append(RawFile(name=path.name, path=relative, size=size, source=path))
    candidates.sort(key=lambda c: c.path)
    return candidates
