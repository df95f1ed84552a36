# Path: compare_studio/core/indexing/scanner.py
# Purpose: Collect candidate image files and compute their duplicate-detection keys.
# Layer: core/indexing.
# Details: Provides reusable filesystem scanning for session imports.

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".heic", ".png"}


def file_dedupe_key(path: Path) -> str:
    """Return ``"<name>-<size>-<mtime_ms>"``; the same file added twice yields the same key."""

    stat = path.stat()
    return f"{path.name}-{stat.st_size}-{int(stat.st_mtime * 1000)}"


def is_supported(path: Path, extensions: Optional[Iterable[str]] = None) -> bool:
    allowed = {ext.lower() for ext in extensions} if extensions is not None else SUPPORTED_EXTENSIONS
    return path.suffix.lower() in allowed


class ImageScanner:
    """Scan filesystem paths for supported image files."""

    def __init__(self, root: Path, extensions: Optional[Iterable[str]] = None) -> None:
        self.root = root
        self.extensions = set(extensions) if extensions is not None else set(SUPPORTED_EXTENSIONS)

    def scan(self) -> List[Path]:
        """Return supported files under the root, sorted for a stable import order."""

        return sorted(self._iter_image_files())

    def _iter_image_files(self) -> Iterable[Path]:
        """Yield image files under the root directory."""

        for path in self.root.rglob("*"):
            if path.is_file() and is_supported(path, self.extensions):
                yield path
