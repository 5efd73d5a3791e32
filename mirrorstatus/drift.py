"""File presence and content drift between two repository roots."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import List, Optional

from .logging import get_logger
from .models import DriftReport


def _sort_key(rel_path: str) -> bytes:
    return rel_path.encode("utf-8", "surrogateescape")


def list_area_files(root: Path, area: str) -> List[str]:
    """Return root-relative POSIX paths of regular files under ``area``.

    Symlinks are skipped and the result is sorted byte-wise so it does not
    depend on the locale.
    """
    base = root / area
    if not base.is_dir():
        return []

    files: List[str] = []
    for dirpath, _dirnames, filenames in os.walk(base):
        current_dir = Path(dirpath)
        for filename in filenames:
            path = current_dir / filename
            if path.is_symlink() or not path.is_file():
                continue
            files.append(path.relative_to(root).as_posix())
    return sorted(files, key=_sort_key)


def _hash_file(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1024 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


class DriftComparer:
    """Compares an area's files in the primary root against a drift root."""

    def __init__(self) -> None:
        self.logger = get_logger("drift")

    def compare(self, repo_root: Path, drift_root: Path, area: str) -> DriftReport:
        if not (repo_root / area).is_dir() and not (drift_root / area).is_dir():
            return DriftReport(area=area, missing_in_both=True)

        repo_files = set(list_area_files(repo_root, area))
        drift_files = set(list_area_files(drift_root, area))

        common = sorted(repo_files & drift_files, key=_sort_key)
        hash_diffs = sum(
            1
            for rel_path in common
            if not self._same_content(repo_root / rel_path, drift_root / rel_path)
        )

        return DriftReport(
            area=area,
            only_in_repo=len(repo_files - drift_files),
            only_in_drift_root=len(drift_files - repo_files),
            hash_diffs=hash_diffs,
        )

    def _same_content(self, left: Path, right: Path) -> bool:
        # An unreadable file counts as a hash difference.
        left_hash = self._hash_or_none(left)
        right_hash = self._hash_or_none(right)
        return left_hash is not None and left_hash == right_hash

    def _hash_or_none(self, path: Path) -> Optional[str]:
        try:
            return _hash_file(path)
        except OSError as exc:
            self.logger.warning("Unable to hash %s: %s", path, exc)
            return None


__all__ = ["DriftComparer", "list_area_files"]
