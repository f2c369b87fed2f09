"""Source discovery for docly runs."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import DoclyConfig


def _is_excluded(rel_path: str, excluded: Sequence[str]) -> bool:
    return any(pattern and pattern in rel_path for pattern in excluded)


def _iter_files(root: Path, excluded: Sequence[str]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept = []
        for name in sorted(dirnames):
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _is_excluded(rel_path, excluded):
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _is_excluded(rel_path, excluded):
                continue
            yield current_dir / filename


class SourceScanner:
    """Walks a source tree and returns the files docly should analyze."""

    def __init__(self, config: DoclyConfig | None = None) -> None:
        self.config = config or DoclyConfig()

    def scan(self, root: str | Path) -> List[str]:
        """Return absolute paths of matching source files in discovery order."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Folder not found: {root_path}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {root_path}")

        extensions = tuple(self.config.extensions)
        return [
            str(path)
            for path in _iter_files(root_path, self.config.excluded)
            if path.name.endswith(extensions) and path.is_file()
        ]


__all__ = ["SourceScanner"]
